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

"""Conversion of feature files to substitution and positioning rules.

Only the statements an encoding can represent are converted. They are:

* single substitutions, with no context or with one context glyph on
  one side of exactly one marked input glyph
* alternate substitutions without context
* ligature substitutions without context
* pair positionings
* single positionings without context

Glyph classes are expanded, so one statement may become several rules.
"""


from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING
from typing import TypeAlias

import fontTools.feaLib.ast
import fontTools.feaLib.parser

from tfmencoding.rules import Positioning
from tfmencoding.rules import Substitution


if TYPE_CHECKING:
    from collections.abc import Collection
    from collections.abc import Iterator
    from collections.abc import Mapping
    from collections.abc import MutableSequence
    from collections.abc import Sequence
    from io import IOBase

    from _typeshed import StrOrBytesPath


log = logging.getLogger(__name__)


_GlyphContainer: TypeAlias = (
    fontTools.feaLib.ast.GlyphName
    | fontTools.feaLib.ast.GlyphClass
    | fontTools.feaLib.ast.GlyphClassName
)


class _UnknownGlyph(Exception):
    pass


class RuleCollector:
    """A converter of feature file statements to rules.

    Attributes:
        substitutions: The substitution rules collected so far.
        positionings: The positioning rules collected so far.
    """

    def __init__(self, glyph_order: Sequence[str]) -> None:
        """Initializes this `RuleCollector`.

        Args:
            glyph_order: The glyph names indexed by glyph id.
        """
        self._glyph_ids: Mapping[str, int] = {name: gid for gid, name in enumerate(glyph_order)}
        self.substitutions: MutableSequence[Substitution] = []
        self.positionings: MutableSequence[Positioning] = []

    def _ids(self, glyphs: _GlyphContainer) -> Sequence[int]:
        try:
            return [self._glyph_ids[name] for name in glyphs.glyphSet()]
        except KeyError as e:
            raise _UnknownGlyph(e.args[0]) from None

    def _id(self, glyph: str | _GlyphContainer) -> int:
        if isinstance(glyph, str):
            if glyph not in self._glyph_ids:
                raise _UnknownGlyph(glyph)
            return self._glyph_ids[glyph]
        ids = self._ids(glyph)
        assert len(ids) == 1, f'Expected one glyph, got {len(ids)}'
        return ids[0]

    def _add_single(self, statement: fontTools.feaLib.ast.SingleSubstStatement) -> bool:
        inputs = [gid for glyphs in statement.glyphs for gid in self._ids(glyphs)]
        outputs = [gid for glyphs in statement.replacements for gid in self._ids(glyphs)]
        if len(outputs) == 1:
            outputs *= len(inputs)
        if len(outputs) != len(inputs):
            return False
        prefix = [self._ids(glyphs) for glyphs in statement.prefix]
        suffix = [self._ids(glyphs) for glyphs in statement.suffix]
        match len(prefix), len(suffix):
            case 0, 0:
                for input, output in zip(inputs, outputs):
                    self.substitutions.append(Substitution.single(input, output))
            case 0, 1:
                for (input, output), right in itertools.product(zip(inputs, outputs), suffix[0]):
                    self.substitutions.append(Substitution.right_context(input, right, output))
            case 1, 0:
                for (input, output), left in itertools.product(zip(inputs, outputs), prefix[0]):
                    self.substitutions.append(Substitution.left_context(left, input, output))
            case _:
                return False
        return True

    def _add_alternate(self, statement: fontTools.feaLib.ast.AlternateSubstStatement) -> bool:
        if statement.prefix or statement.suffix:
            return False
        outputs = self._ids(statement.replacement)
        for input in self._ids(statement.glyph):
            self.substitutions.append(Substitution.alternate(input, outputs))
        return True

    def _add_ligature(self, statement: fontTools.feaLib.ast.LigatureSubstStatement) -> bool:
        if statement.prefix or statement.suffix:
            return False
        output = self._id(statement.replacement)
        for inputs in itertools.product(*(self._ids(glyphs) for glyphs in statement.glyphs)):
            self.substitutions.append(Substitution.ligature(inputs, output))
        return True

    def _add_pair_pos(self, statement: fontTools.feaLib.ast.PairPosStatement) -> bool:
        value = statement.valuerecord1
        if value is None or not value.xAdvance:
            return False
        for left, right in itertools.product(self._ids(statement.glyphs1), self._ids(statement.glyphs2)):
            self.positionings.append(Positioning.pair_kern(left, right, value.xAdvance))
        return True

    def _add_single_pos(self, statement: fontTools.feaLib.ast.SinglePosStatement) -> bool:
        if statement.prefix or statement.suffix:
            return False
        for glyphs, value in statement.pos:
            if value is None:
                continue
            for glyph in self._ids(glyphs):
                self.positionings.append(Positioning.single(
                    glyph,
                    value.xPlacement or 0,
                    value.yPlacement or 0,
                    value.xAdvance or 0,
                ))
        return True

    def add(self, statement: fontTools.feaLib.ast.Statement) -> None:
        """Converts a statement to rules.

        Unsupported statements and statements that mention a glyph not
        in the glyph order are skipped.

        Args:
            statement: A statement from a feature or lookup block.
        """
        try:
            match statement:
                case fontTools.feaLib.ast.SingleSubstStatement():
                    added = self._add_single(statement)
                case fontTools.feaLib.ast.AlternateSubstStatement():
                    added = self._add_alternate(statement)
                case fontTools.feaLib.ast.LigatureSubstStatement():
                    added = self._add_ligature(statement)
                case fontTools.feaLib.ast.PairPosStatement():
                    added = self._add_pair_pos(statement)
                case fontTools.feaLib.ast.SinglePosStatement():
                    added = self._add_single_pos(statement)
                case _:
                    added = False
        except _UnknownGlyph as e:
            log.debug('Skipping statement with unknown glyph %s: %s', e.args[0], statement.asFea())
            return
        if not added:
            log.debug('Skipping unsupported statement: %s', statement.asFea())


def _statements(
    block: fontTools.feaLib.ast.Block,
    visited: set[int],
) -> Iterator[fontTools.feaLib.ast.Statement]:
    for statement in block.statements:
        match statement:
            case fontTools.feaLib.ast.LookupBlock():
                visited.add(id(statement))
                yield from _statements(statement, visited)
            case fontTools.feaLib.ast.LookupReferenceStatement():
                if id(statement.lookup) not in visited:
                    visited.add(id(statement.lookup))
                    yield from _statements(statement.lookup, visited)
            case fontTools.feaLib.ast.Block():
                pass
            case _:
                yield statement


def read_feature_file(
    file: StrOrBytesPath | IOBase,
    glyph_order: Sequence[str],
    features: Collection[str] | None = None,
) -> tuple[Sequence[Substitution], Sequence[Positioning]]:
    """Reads substitution and positioning rules from a feature file.

    Rules come from feature blocks and from the lookup blocks they
    contain or reference. Lookup blocks that no selected feature uses
    are ignored. The order of the rules is the order of their statements
    in the feature blocks. A lookup used by several selected features
    contributes its rules only once, where it is first used; repeating
    them would change nothing, since the first rule for a code wins.

    Args:
        file: The path to a feature file, or a feature file opened in
            text mode.
        glyph_order: The font’s glyph names indexed by glyph id.
        features: The tags of the features to read, or ``None`` to read
            all of them.

    Returns:
        A tuple of the substitution rules and the positioning rules.

    Raises:
        fontTools.feaLib.error.FeatureLibError: If the feature file is
            invalid.
    """
    feature_file = fontTools.feaLib.parser.Parser(file, glyphNames=glyph_order).parse()
    collector = RuleCollector(glyph_order)
    visited: set[int] = set()
    for block in feature_file.statements:
        if not isinstance(block, fontTools.feaLib.ast.FeatureBlock):
            continue
        if features is not None and block.name not in features:
            continue
        for statement in _statements(block, visited):
            collector.add(statement)
    return collector.substitutions, collector.positionings
