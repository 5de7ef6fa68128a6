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

"""Reference encodings.

A reference encoding assigns glyph names to codes. It is the encoding a
user asked for, and compaction tries to keep glyphs where it puts them.
"""


from __future__ import annotations

import re
from typing import Final
from typing import Self
from typing import TYPE_CHECKING

import fontTools.encodings.StandardEncoding

from tfmencoding.utils import DEFAULT_ENCODING_SIZE


if TYPE_CHECKING:
    from collections.abc import Iterable
    from collections.abc import Mapping
    from collections.abc import MutableMapping
    from collections.abc import Sequence


#: The name of the glyph that marks an unused code.
NOTDEF: Final[str] = '.notdef'


COMMENT_PATTERN: Final = re.compile(r'%.*')


ENC_VECTOR_PATTERN: Final = re.compile(r'/\S+\s*\[(?P<names>[^\]]*)\]\s*def', re.DOTALL)


ENC_NAME_PATTERN: Final = re.compile(r'/([^\s/\[\]{}()<>%]+)')


class ReferenceEncoding:
    """A mapping from codes to glyph names.
    """

    def __init__(self, names: Iterable[str | None]) -> None:
        """Initializes this `ReferenceEncoding`.

        Args:
            names: The glyph names indexed by code. ``None`` and
                `NOTDEF` mean the code is unused.
        """
        self._names: Sequence[str | None] = [None if name == NOTDEF else name for name in names]
        self._codes: MutableMapping[str, int] = {}
        for code, name in enumerate(self._names):
            if name is not None:
                self._codes.setdefault(name, code)

    def __len__(self) -> int:
        return len(self._names)

    def glyph_name(self, code: int) -> str | None:
        if 0 <= code < len(self._names):
            return self._names[code]
        return None

    def encoding_of(self, glyph_name: str) -> int | None:
        """Returns the lowest code of a glyph name, or ``None``.
        """
        return self._codes.get(glyph_name)

    def encoded(self, code: int) -> bool:
        return self.glyph_name(code) is not None

    @classmethod
    def standard(cls) -> Self:
        """Returns Adobe StandardEncoding.
        """
        return cls(fontTools.encodings.StandardEncoding.StandardEncoding)

    @classmethod
    def from_cmap(cls, cmap: Mapping[int, str], size: int = DEFAULT_ENCODING_SIZE) -> Self:
        """Returns the encoding of the first code points of a character
        map.

        Args:
            cmap: A mapping from code points to glyph names, such as the
                result of ``TTFont.getBestCmap``.
            size: The number of codes. Code point ``c`` maps to code
                ``c``.
        """
        return cls(cmap.get(code) for code in range(size))

    @classmethod
    def parse_enc(cls, text: str) -> Self:
        """Parses an encoding vector in dvips ``.enc`` syntax.

        The syntax is a PostScript array of glyph names bound to a name,
        for example::

            % A comment.
            /ExampleEncoding [
              /.notdef /A /B
            ] def

        Args:
            text: The contents of an ``.enc`` file.

        Raises:
            ValueError: If `text` does not contain an encoding vector.
        """
        match = ENC_VECTOR_PATTERN.search(COMMENT_PATTERN.sub('', text))
        if match is None:
            raise ValueError('No encoding vector found')
        return cls(ENC_NAME_PATTERN.findall(match['names']))
