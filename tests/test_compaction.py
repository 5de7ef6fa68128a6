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

import logging
from typing import TYPE_CHECKING

from conftest import CODES
from conftest import G
from conftest import GLYPH_ORDER
import pytest

from tfmencoding.gsub_encoding import GsubEncoding
from tfmencoding.reference import ReferenceEncoding
from tfmencoding.rules import Substitution
from tfmencoding.tables import Kern
from tfmencoding.tables import Vfpos
from tfmencoding.utils import REMOVED


if TYPE_CHECKING:
    from collections.abc import Collection


def full_encoding(free_codes: Collection[int] = ()) -> GsubEncoding:
    """Returns an encoding whose every slot but `free_codes` holds A.
    """
    encoding = GsubEncoding(len(GLYPH_ORDER))
    for code in range(len(encoding)):
        if code not in free_codes:
            encoding.encode(code, G['A'])
    return encoding


def assert_codes_in_range(encoding: GsubEncoding) -> None:
    size = len(encoding)
    for ligature in encoding.ligature_table:
        assert all(code < size for code in ligature.inputs)
        assert ligature.out < size
    for kern in encoding.kern_table:
        assert kern.left < size and kern.right < size
    for vfpos in encoding.vfpos_table:
        assert vfpos.code < size


def test_reassign_codes(encoding: GsubEncoding) -> None:
    encoding.add_twoligature(CODES['f'], CODES['i'], 3)
    encoding.add_kern(CODES['A'], CODES['V'], -80)
    encoding.add_single_positioning(CODES['V'], 0, 0, 5)
    reassignment: list[int | None] = list(range(len(encoding)))
    reassignment[3] = None
    reassignment[CODES['V']] = 0x76
    encoding.reassign_codes(reassignment)
    [ligature] = encoding.ligature_table
    assert ligature.inputs == [CODES['f'], CODES['i']]
    assert ligature.out == REMOVED
    assert encoding.kern_table == [Kern(CODES['A'], 0x76, -80)]
    assert encoding.vfpos_table == [Vfpos(0x76, 0, 0, 5)]


def test_cut_encoding(encoding: GsubEncoding) -> None:
    encoding.apply_substitutions([Substitution.ligature([G['f'], G['i']], G['fi'])])
    assert len(encoding) == 257
    encoding.cut_encoding(256)
    assert len(encoding) == 256
    assert encoding.ligature_table[0].out == REMOVED
    assert encoding.twoligatures(CODES['f']) == []
    assert_codes_in_range(encoding)


def test_cut_encoding_pads(encoding: GsubEncoding) -> None:
    encoding.cut_encoding(300)
    assert len(encoding) == 300
    assert encoding[CODES['A']] == G['A']


def test_shrink_to_reference_code(encoding: GsubEncoding) -> None:
    encoding.apply_substitutions([Substitution.ligature([G['f'], G['i']], G['fi'])])
    encoding.add_kern(CODES['A'], 256, -10)
    unencoded = encoding.shrink_encoding(256, ReferenceEncoding.standard(), GLYPH_ORDER)
    assert unencoded == []
    assert len(encoding) == 256
    assert encoding[0xAE] == G['fi']
    assert encoding.twoligatures(CODES['f']) == [(CODES['i'], 0xAE, 0)]
    assert encoding.kern_table == [Kern(CODES['A'], 0xAE, -10)]
    assert_codes_in_range(encoding)


def test_shrink_avoids_reference_codes() -> None:
    encoding = full_encoding({0x05, 0x20})
    encoding.append(G['ffi'])
    encoding.append(G['ff'])
    unencoded = encoding.shrink_encoding(256, ReferenceEncoding.standard(), GLYPH_ORDER)
    assert unencoded == []
    assert encoding[0x05] == G['ff']
    assert encoding[0x20] == G['ffi']


def test_shrink_overflow(caplog: pytest.LogCaptureFixture) -> None:
    encoding = full_encoding()
    encoding.append(G['fi'])
    encoding.append(G['ff'])
    encoding.add_twoligature(0x10, 0x11, 256)
    encoding.add_kern(0x10, 257, 5)
    with caplog.at_level(logging.WARNING):
        unencoded = encoding.shrink_encoding(256, ReferenceEncoding.standard(), GLYPH_ORDER)
    assert unencoded == ['ff', 'fi']
    assert len(encoding) == 256
    assert encoding.ligature_table[0].out == REMOVED
    assert encoding.kern_table[0].right == REMOVED
    assert_codes_in_range(encoding)
    [record] = caplog.records
    assert record.levelno == logging.WARNING
    assert 'Ignoring 2 unencodable glyphs' in record.getMessage()
    assert 'ff fi' in record.getMessage()


def test_shrink_small_encoding(encoding: GsubEncoding) -> None:
    encoding.resize(100)
    assert encoding.shrink_encoding(256, ReferenceEncoding.standard(), GLYPH_ORDER) == []
    assert len(encoding) == 256
