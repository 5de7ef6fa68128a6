# Copyright 2026 The tfmencoding Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Application of substitution rules to an encoding.

Unconditional single substitutions rewrite slots in place. Everything
else becomes a ligature, including contextual single substitutions,
which become two-input context ligatures.

A pass applies a list of rules in order. Within a pass, the first
unconditional rewrite of a code is final. Contextual rewrites of a code
that precede its unconditional rewrite stay in effect in their contexts:
the unconditional rewrite then becomes a context ligature for every
other context. A pair of codes gets at most one context ligature, so
context rules are tracked by the pair they occupy, left context
included.
"""


from __future__ import annotations

from typing import TYPE_CHECKING
from typing import assert_never

from tfmencoding.rules import SubstitutionKind
from tfmencoding.tables import LEFT_CONTEXT
from tfmencoding.tables import Ligature
from tfmencoding.tables import NO_CONTEXT
from tfmencoding.tables import RIGHT_CONTEXT
from tfmencoding.tracking import ChangeState
from tfmencoding.tracking import RewriteTracker


if TYPE_CHECKING:
    from collections.abc import Iterable

    from tfmencoding.gsub_encoding import GsubEncoding
    from tfmencoding.rules import Substitution


def add_single_context_substitution(
    encoding: GsubEncoding,
    left: int,
    right: int,
    out: int,
    is_right: bool,
) -> None:
    """Adds a context ligature unless it would do nothing.

    Args:
        encoding: The encoding to add the ligature to.
        left: The first code of the pair.
        right: The second code of the pair.
        out: The code to replace the trigger with.
        is_right: Whether the context is on the right, meaning that
            `left` is the trigger. Otherwise, `right` is the trigger.
    """
    if out != (left if is_right else right):
        encoding.ligature_table.append(Ligature(
            [left, right],
            out,
            skip=True,
            context=RIGHT_CONTEXT if is_right else LEFT_CONTEXT,
        ))


def _apply_single(
    encoding: GsubEncoding,
    tracker: RewriteTracker,
    substitution: Substitution,
) -> None:
    e = encoding.encoding(substitution.in_glyph)
    if not tracker.covers(e):
        # Not encoded before this pass began.
        return
    assert e is not None
    state = tracker.state(e)
    match state:
        case ChangeState.NO:
            encoding.encode(e, substitution.out_glyph)
            tracker.mark_all(e)
        case ChangeState.SOME:
            out = encoding.force_encoding(substitution.out_glyph)
            covered = tracker.contexts(e)
            for j in range(tracker.size):
                if encoding[j] and j not in covered:
                    add_single_context_substitution(encoding, e, j, out, True)
            tracker.mark_all(e)
        case ChangeState.ALL:
            pass
        case _:
            assert_never(state)


def _apply_ligature(
    encoding: GsubEncoding,
    tracker: RewriteTracker,
    substitution: Substitution,
) -> None:
    codes = []
    # TODO: Handle input glyphs that are encoded in more than one slot.
    for glyph in substitution.inputs:
        e = encoding.encoding(glyph)
        if not tracker.covers(e):
            return
        assert e is not None
        if tracker.state(e) == ChangeState.ALL:
            return
        codes.append(e)
    encoding.ligature_table.append(Ligature(
        codes,
        encoding.force_encoding(substitution.out_glyph),
        skip=True,
        context=NO_CONTEXT,
    ))


def _apply_context(
    encoding: GsubEncoding,
    tracker: RewriteTracker,
    substitution: Substitution,
    is_right: bool,
) -> None:
    assert substitution.context is not None
    trigger = encoding.encoding(substitution.in_glyph)
    context = encoding.encoding(substitution.context)
    if trigger is None or context is None:
        return
    first, second = (trigger, context) if is_right else (context, trigger)
    if not tracker.covers(first) or not tracker.covers(second) or tracker.changed_in_context(first, second):
        return
    add_single_context_substitution(encoding, first, second, encoding.force_encoding(substitution.out_glyph), is_right)
    tracker.mark_changed_in_context(first, second)


def apply_substitutions(
    encoding: GsubEncoding,
    substitutions: Iterable[Substitution],
    allow_single: bool = True,
) -> int:
    """Applies substitution rules to an encoding.

    A rule is inapplicable if a glyph it needs was not encoded when this
    pass began or if a code it would change was already rewritten
    unconditionally in this pass. Inapplicable rules are ignored.

    Args:
        encoding: The encoding to apply the rules to.
        substitutions: The rules, in order of precedence.
        allow_single: Whether to apply single and alternate
            substitutions. If not, they are ignored and not counted.

    Returns:
        The number of rules processed, including inapplicable ones.
    """
    tracker = RewriteTracker(len(encoding))
    processed = 0
    for substitution in substitutions:
        match substitution.kind:
            case SubstitutionKind.SINGLE | SubstitutionKind.ALTERNATE:
                if not allow_single:
                    continue
                _apply_single(encoding, tracker, substitution)
            case SubstitutionKind.LIGATURE:
                _apply_ligature(encoding, tracker, substitution)
            case SubstitutionKind.SINGLE_RCONTEXT:
                _apply_context(encoding, tracker, substitution, True)
            case SubstitutionKind.SINGLE_LCONTEXT:
                _apply_context(encoding, tracker, substitution, False)
            case _:
                assert_never(substitution.kind)
        processed += 1
    return processed
