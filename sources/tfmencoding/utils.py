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

"""Miscellaneous constants, functions, and classes.
"""


from __future__ import annotations

import enum
import textwrap
from typing import Final
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterable
    from collections.abc import Iterator
    from collections.abc import Sequence


#: The number of slots in a new encoding, and the usual target size of
#: a compacted one.
DEFAULT_ENCODING_SIZE: Final[int] = 256


#: The glyph stored in a slot that holds a synthesized intermediate
#: glyph. Such a slot is the output of a fake ligature. No real font has
#: this many glyphs.
FAKE_LIGATURE: Final[int] = 0x7FFFFFFF


#: The code that marks a removed ligature, kern, or single positioning,
#: or a code that was dropped by a reassignment.
REMOVED: Final[int] = -1


#: The width to which `fill_lines` wraps lists of glyph names.
FILL_WIDTH: Final[int] = 68


class CodeAll(enum.Enum):
    """The type of `CODE_ALL`.
    """

    _CODE_ALL = enum.auto()


#: An object that the ``remove_*`` methods of ``GsubEncoding`` interpret
#: as matching every code.
CODE_ALL: Final = CodeAll._CODE_ALL


class BitSet:
    """A fixed-size set of small non-negative integers.

    The set is backed by a single Python integer, so it needs no explicit
    release and is cheap to create for every tracked code.

    Attributes:
        size: The exclusive upper bound on the members of this set.
    """

    __slots__ = ('_bits', 'size')

    def __init__(self, size: int) -> None:
        """Initializes this `BitSet` as empty.

        Args:
            size: The ``size`` attribute. It must be non-negative.
        """
        assert size >= 0, f'Negative bit set size: {size}'
        self._bits: int = 0
        self.size: Final = size

    def _check(self, value: int) -> None:
        assert 0 <= value < self.size, f'{value} is out of range for a bit set of size {self.size}'

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, int) or not 0 <= value < self.size:
            return False
        return bool(self._bits >> value & 1)

    def __iter__(self) -> Iterator[int]:
        bits = self._bits
        value = 0
        while bits:
            if bits & 1:
                yield value
            bits >>= 1
            value += 1

    def __len__(self) -> int:
        return self._bits.bit_count()

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.size}, {{{", ".join(map(str, self))}}})'

    def add(self, value: int) -> bool:
        """Adds a member to this set.

        Args:
            value: The integer to add. It must be less than `size`.

        Returns:
            Whether `value` was already a member.
        """
        self._check(value)
        mask = 1 << value
        was_present = bool(self._bits & mask)
        self._bits |= mask
        return was_present


def fill_lines(words: Iterable[str], width: int = FILL_WIDTH, indent: str = '  ') -> str:
    """Joins words with spaces, wrapping them into indented lines.

    Words are never broken, even at hyphens, so a glyph name always
    appears intact on one line.

    Args:
        words: The words to fill.
        width: The maximum line width, including the indentation.
        indent: The prefix of every line.

    Returns:
        The filled lines, without a trailing newline.
    """
    return textwrap.fill(
        ' '.join(words),
        width=width,
        initial_indent=indent,
        subsequent_indent=indent,
        break_long_words=False,
        break_on_hyphens=False,
    )


def glyph_name(glyph: int, glyph_names: Sequence[str | None] | None) -> str:
    """Returns a printable name for a glyph.

    Args:
        glyph: A glyph id.
        glyph_names: The glyph names indexed by glyph id, if known.

    Returns:
        The glyph’s name in `glyph_names` if there is one, ``'LIGATURE'``
        for `FAKE_LIGATURE`, or else ``'g'`` followed by the glyph id.
    """
    if glyph and glyph_names is not None and 0 <= glyph < len(glyph_names) and (name := glyph_names[glyph]):
        return name
    if glyph == FAKE_LIGATURE:
        return 'LIGATURE'
    return f'g{glyph}'
