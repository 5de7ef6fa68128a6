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

import pytest

from tfmencoding.reference import ReferenceEncoding


def test_standard() -> None:
    reference = ReferenceEncoding.standard()
    assert len(reference) == 256
    assert reference.encoding_of('A') == 0x41
    assert reference.encoding_of('fi') == 0xAE
    assert reference.glyph_name(0x20) == 'space'
    assert reference.glyph_name(0) is None
    assert not reference.encoded(0)
    assert reference.encoded(0x20)


def test_lowest_code_wins() -> None:
    reference = ReferenceEncoding(['a', 'b', 'a'])
    assert reference.encoding_of('a') == 0
    assert reference.glyph_name(2) == 'a'


def test_holes() -> None:
    reference = ReferenceEncoding([None, '.notdef', 'a'])
    assert not reference.encoded(0)
    assert not reference.encoded(1)
    assert reference.encoding_of('.notdef') is None
    assert reference.glyph_name(3) is None


def test_from_cmap() -> None:
    reference = ReferenceEncoding.from_cmap({0x41: 'A', 0x20: 'space', 0x300: 'gravecomb'})
    assert len(reference) == 256
    assert reference.encoding_of('A') == 0x41
    assert reference.encoding_of('space') == 0x20
    assert reference.encoding_of('gravecomb') is None


def test_parse_enc() -> None:
    reference = ReferenceEncoding.parse_enc('''
        % A small encoding. /B in a comment is not a glyph.
        /SmallEncoding [
          /.notdef /A
          % 0x02
          /V/f
        ] def
    ''')
    assert len(reference) == 4
    assert reference.glyph_name(0) is None
    assert reference.encoding_of('A') == 1
    assert reference.encoding_of('V') == 2
    assert reference.encoding_of('f') == 3
    assert reference.encoding_of('B') is None


def test_parse_enc_without_vector() -> None:
    with pytest.raises(ValueError):
        ReferenceEncoding.parse_enc('% nothing here\n')
