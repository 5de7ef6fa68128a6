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

"""Substitution and positioning rules in terms of glyph ids.

These are the already-resolved rules that an encoding consumes. Each
rule is a single OpenType Layout rule with no glyph classes: a rule with
classes in a feature file becomes several of these.
"""


from __future__ import annotations

import enum
from typing import Final
from typing import Self
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Sequence


@enum.unique
class SubstitutionKind(enum.Enum):
    """The kind of a `Substitution`.
    """

    #: One glyph becomes another glyph everywhere.
    SINGLE = enum.auto()

    #: One glyph becomes one of several alternates. Only the first
    #: alternate is ever used.
    ALTERNATE = enum.auto()

    #: A sequence of two or more glyphs becomes one glyph.
    LIGATURE = enum.auto()

    #: One glyph becomes another glyph when followed by a context glyph.
    SINGLE_RCONTEXT = enum.auto()

    #: One glyph becomes another glyph when preceded by a context glyph.
    SINGLE_LCONTEXT = enum.auto()


@enum.unique
class PositioningKind(enum.Enum):
    """The kind of a `Positioning`.
    """

    #: A horizontal adjustment between two adjacent glyphs.
    PAIR_KERN = enum.auto()

    #: Placement and advance adjustments of one glyph.
    SINGLE = enum.auto()


class Substitution:
    """A glyph substitution rule.

    Attributes:
        kind: What kind of substitution this is.
        inputs: The input glyphs. There is exactly one unless `kind` is
            `SubstitutionKind.LIGATURE`.
        outputs: The output glyphs. There is exactly one unless `kind`
            is `SubstitutionKind.ALTERNATE`.
        context: The context glyph of a contextual single substitution,
            or ``None``.
    """

    def __init__(
        self,
        kind: SubstitutionKind,
        inputs: Sequence[int],
        outputs: Sequence[int],
        context: int | None = None,
    ) -> None:
        """Initializes this `Substitution`.

        The class methods are more convenient.

        Args:
            kind: The ``kind`` attribute.
            inputs: The ``inputs`` attribute.
            outputs: The ``outputs`` attribute.
            context: The ``context`` attribute.
        """
        if kind == SubstitutionKind.LIGATURE:
            assert len(inputs) >= 2, f'A ligature needs at least 2 inputs, given {len(inputs)}'
        else:
            assert len(inputs) == 1, f'A {kind.name.lower()} substitution needs 1 input, given {len(inputs)}'
        if kind == SubstitutionKind.ALTERNATE:
            assert outputs, 'An alternate substitution needs at least 1 output'
        else:
            assert len(outputs) == 1, f'A {kind.name.lower()} substitution needs 1 output, given {len(outputs)}'
        assert (context is not None) == self.is_contextual_kind(kind), (
            'A context glyph is required for, and only for, contextual substitutions')
        self.kind: Final = kind
        self.inputs: Final[Sequence[int]] = tuple(inputs)
        self.outputs: Final[Sequence[int]] = tuple(outputs)
        self.context: Final = context

    @staticmethod
    def is_contextual_kind(kind: SubstitutionKind) -> bool:
        return kind in {SubstitutionKind.SINGLE_RCONTEXT, SubstitutionKind.SINGLE_LCONTEXT}

    @classmethod
    def single(cls, input: int, output: int) -> Self:
        return cls(SubstitutionKind.SINGLE, [input], [output])

    @classmethod
    def alternate(cls, input: int, outputs: Sequence[int]) -> Self:
        return cls(SubstitutionKind.ALTERNATE, [input], outputs)

    @classmethod
    def ligature(cls, inputs: Sequence[int], output: int) -> Self:
        return cls(SubstitutionKind.LIGATURE, inputs, [output])

    @classmethod
    def right_context(cls, input: int, right: int, output: int) -> Self:
        """Returns a substitution of one glyph before a context glyph.

        Args:
            input: The glyph to substitute.
            right: The glyph that must follow `input`.
            output: The glyph to substitute `input` with.
        """
        return cls(SubstitutionKind.SINGLE_RCONTEXT, [input], [output], right)

    @classmethod
    def left_context(cls, left: int, input: int, output: int) -> Self:
        """Returns a substitution of one glyph after a context glyph.

        Args:
            left: The glyph that must precede `input`.
            input: The glyph to substitute.
            output: The glyph to substitute `input` with.
        """
        return cls(SubstitutionKind.SINGLE_LCONTEXT, [input], [output], left)

    @property
    def in_glyph(self) -> int:
        """The only input glyph of a non-ligature substitution.
        """
        assert len(self.inputs) == 1, 'A ligature has more than one input glyph'
        return self.inputs[0]

    @property
    def out_glyph(self) -> int:
        """The output glyph, or the first alternate.
        """
        return self.outputs[0]

    def __repr__(self) -> str:
        context = '' if self.context is None else f', context={self.context}'
        return f'{type(self).__name__}({self.kind.name}, {list(self.inputs)}, {list(self.outputs)}{context})'


class Positioning:
    """A glyph positioning rule.

    Attributes:
        kind: What kind of positioning this is.
        left_glyph: The positioned glyph, or the first glyph of a pair.
        right_glyph: The second glyph of a pair, or ``None``.
        pdx: The x placement of `left_glyph`.
        pdy: The y placement of `left_glyph`.
        adx: The x advance adjustment of `left_glyph`. For a pair, this
            is the kern amount.
    """

    def __init__(
        self,
        kind: PositioningKind,
        left_glyph: int,
        right_glyph: int | None = None,
        *,
        pdx: int = 0,
        pdy: int = 0,
        adx: int = 0,
    ) -> None:
        assert (right_glyph is not None) == (kind == PositioningKind.PAIR_KERN), (
            'A right glyph is required for, and only for, pair kerns')
        self.kind: Final = kind
        self.left_glyph: Final = left_glyph
        self.right_glyph: Final = right_glyph
        self.pdx: Final = pdx
        self.pdy: Final = pdy
        self.adx: Final = adx

    @classmethod
    def pair_kern(cls, left: int, right: int, amount: int) -> Self:
        return cls(PositioningKind.PAIR_KERN, left, right, adx=amount)

    @classmethod
    def single(cls, glyph: int, pdx: int = 0, pdy: int = 0, adx: int = 0) -> Self:
        return cls(PositioningKind.SINGLE, glyph, pdx=pdx, pdy=pdy, adx=adx)

    def __repr__(self) -> str:
        if self.kind == PositioningKind.PAIR_KERN:
            return f'{type(self).__name__}.pair_kern({self.left_glyph}, {self.right_glyph}, {self.adx})'
        return f'{type(self).__name__}.single({self.left_glyph}, {self.pdx}, {self.pdy}, {self.adx})'
