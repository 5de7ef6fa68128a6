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

from __future__ import annotations

from typing import Final

import pytest

from tfmencoding.gsub_encoding import GsubEncoding


GLYPH_ORDER: Final = [
    '.notdef',
    'A',
    'V',
    'f',
    'i',
    'l',
    'fi',
    'fl',
    'ff',
    'ffi',
    'f.alt',
    'i.alt',
    'space',
]


#: Glyph ids by name.
G: Final = {name: gid for gid, name in enumerate(GLYPH_ORDER)}


#: The codes of the glyphs in the `encoding` fixture.
CODES: Final = {
    'A': 0x41,
    'V': 0x56,
    'f': 0x66,
    'i': 0x69,
    'l': 0x6C,
}


@pytest.fixture
def glyph_order() -> list[str]:
    return list(GLYPH_ORDER)


@pytest.fixture
def encoding() -> GsubEncoding:
    """An encoding of a few ASCII letters at their ASCII codes.
    """
    encoding = GsubEncoding(len(GLYPH_ORDER))
    for name, code in CODES.items():
        encoding.encode(code, G[name])
    return encoding
