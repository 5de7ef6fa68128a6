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

"""Application and merging of positioning rules.
"""


from __future__ import annotations

from typing import TYPE_CHECKING
from typing import TypeVar
from typing import assert_never

from tfmencoding.rules import PositioningKind
from tfmencoding.tracking import PositioningTracker


if TYPE_CHECKING:
    from collections.abc import Callable
    from collections.abc import Iterable
    from collections.abc import MutableSequence

    from _typeshed import SupportsRichComparison

    from tfmencoding.gsub_encoding import GsubEncoding
    from tfmencoding.rules import Positioning
    from tfmencoding.tables import Kern
    from tfmencoding.tables import Vfpos


def apply_positionings(
    encoding: GsubEncoding,
    positionings: Iterable[Positioning],
) -> int:
    """Applies positioning rules to an encoding.

    Only the first rule for a given code, or for a given pair of codes,
    is applied. Rules for unencoded glyphs are inapplicable and ignored.

    Args:
        encoding: The encoding to apply the rules to.
        positionings: The rules, in order of precedence.

    Returns:
        The number of rules processed, including inapplicable ones.
    """
    tracker = PositioningTracker(len(encoding))
    processed = 0
    # TODO: Handle glyphs that are encoded in more than one slot.
    for positioning in positionings:
        match positioning.kind:
            case PositioningKind.PAIR_KERN:
                assert positioning.right_glyph is not None
                left = encoding.encoding(positioning.left_glyph)
                right = encoding.encoding(positioning.right_glyph)
                if left is not None and right is not None and tracker.claim_pair(left, right):
                    encoding.add_kern(left, right, positioning.adx)
            case PositioningKind.SINGLE:
                code = encoding.encoding(positioning.left_glyph)
                if code is not None and tracker.claim_single(code):
                    encoding.add_single_positioning(code, positioning.pdx, positioning.pdy, positioning.adx)
            case _:
                assert_never(positioning.kind)
        processed += 1
    return processed


T = TypeVar("T", "Kern", "Vfpos")


def _merge_runs(
    entries: MutableSequence[T],
    key: Callable[[T], SupportsRichComparison],
    combine: Callable[[T, T], None],
) -> None:
    live = sorted((entry for entry in entries if not entry.removed), key=key)
    removed = [entry for entry in entries if entry.removed]
    first = None
    for entry in live:
        if first is not None and key(first) == key(entry):
            combine(first, entry)
            entry.remove()
            removed.append(entry)
        else:
            first = entry
    entries[:] = [entry for entry in live if not entry.removed] + removed


def _combine_kerns(first: Kern, other: Kern) -> None:
    first.amount += other.amount


def _combine_vfpos(first: Vfpos, other: Vfpos) -> None:
    first.pdx += other.pdx
    first.pdy += other.pdy
    first.adx += other.adx


def simplify_positionings(encoding: GsubEncoding) -> None:
    """Combines kerns for the same pair of codes and single positionings
    for the same code.

    The live entries end up sorted by code, followed by the removed
    entries. Simplifying again changes nothing.

    Args:
        encoding: The encoding whose positionings to simplify.
    """
    _merge_runs(encoding.kern_table, lambda kern: (kern.left, kern.right), _combine_kerns)
    _merge_runs(encoding.vfpos_table, lambda vfpos: vfpos.code, _combine_vfpos)
