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

"""The code-to-glyph table underlying an encoding.
"""


from __future__ import annotations

from typing import TYPE_CHECKING

from tfmencoding.utils import DEFAULT_ENCODING_SIZE


if TYPE_CHECKING:
    from collections.abc import Iterator
    from collections.abc import MutableMapping
    from collections.abc import MutableSequence
    from collections.abc import Sequence


class EncodingTable:
    """A mapping from codes to glyphs.

    A slot containing glyph 0 is unencoded. The table also keeps a cache
    mapping glyphs back to codes. The cache is only trustworthy for a
    glyph that appears in at most one slot, so it only ever remembers
    such glyphs; a glyph in several slots is looked up anew every time.
    """

    def __init__(self, size: int = DEFAULT_ENCODING_SIZE) -> None:
        self._encoding: MutableSequence[int] = [0] * size
        # A value of `None` means the glyph is known to be unencoded.
        self._emap: MutableMapping[int, int | None] = {}

    def __len__(self) -> int:
        return len(self._encoding)

    def __getitem__(self, code: int) -> int:
        assert 0 <= code < len(self._encoding), f'Code {code} is out of range'
        return self._encoding[code]

    def __iter__(self) -> Iterator[int]:
        return iter(self._encoding)

    def glyphs(self) -> Sequence[int]:
        """Returns a copy of the table as a list of glyphs.
        """
        return list(self._encoding)

    def encoded(self, code: int) -> bool:
        return 0 <= code < len(self._encoding) and self._encoding[code] != 0

    def hard_encoding(self, glyph: int) -> int | None:
        """Finds a glyph’s code without consulting the cache.

        The result is cached if it is unambiguous.

        Args:
            glyph: A glyph.

        Returns:
            The lowest code whose slot contains `glyph`, or ``None`` if
            there is none.
        """
        if glyph <= 0:
            return None
        codes = [code for code, g in enumerate(self._encoding) if g == glyph]
        if len(codes) < 2:
            self._emap[glyph] = codes[0] if codes else None
        return codes[0] if codes else None

    def encoding(self, glyph: int) -> int | None:
        """Finds a glyph’s code.

        Args:
            glyph: A glyph.

        Returns:
            The code of `glyph`, or ``None`` if it is unencoded. If
            `glyph` is in several slots, this is the lowest of them.
        """
        if glyph <= 0:
            return None
        try:
            return self._emap[glyph]
        except KeyError:
            return self.hard_encoding(glyph)

    def _forget(self, glyph: int) -> None:
        self._emap.pop(glyph, None)

    def clear_cache(self) -> None:
        self._emap.clear()

    def encode(self, code: int, glyph: int) -> None:
        """Puts a glyph in a slot.

        Args:
            code: The slot’s code. If it is past the end of the table,
                the table grows to include it.
            glyph: The glyph.
        """
        assert code >= 0 and glyph >= 0, f'Invalid code or glyph: {code}, {glyph}'
        if code >= len(self._encoding):
            self._encoding.extend([0] * (code + 1 - len(self._encoding)))
        self._forget(self._encoding[code])
        self._forget(glyph)
        self._encoding[code] = glyph

    def append(self, glyph: int) -> int:
        """Puts a glyph in a new slot at the end of the table.

        Args:
            glyph: The glyph.

        Returns:
            The new slot’s code.
        """
        code = len(self._encoding)
        self._encoding.append(glyph)
        self._forget(glyph)
        return code

    def force_encoding(self, glyph: int) -> int:
        """Finds a glyph’s code, encoding it if necessary.

        Args:
            glyph: A glyph other than 0.

        Returns:
            The code of `glyph`. If it was unencoded, it is appended to
            the table.
        """
        assert glyph > 0, f'Cannot encode glyph {glyph}'
        code = self.encoding(glyph)
        if code is None:
            code = self.append(glyph)
            self._emap[glyph] = code
        return code

    def resize(self, size: int) -> None:
        """Truncates the table or pads it with unencoded slots.

        Truncation does not update any references to the removed codes.
        Use ``GsubEncoding.cut_encoding`` for that.

        Args:
            size: The new size.
        """
        assert size >= 0, f'Negative size: {size}'
        if size <= len(self._encoding):
            del self._encoding[size:]
            self._emap.clear()
        else:
            self._encoding.extend([0] * (size - len(self._encoding)))
