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

from typing import TYPE_CHECKING

from conftest import CODES
from conftest import G
from conftest import GLYPH_ORDER
from tfmencoding.rules import Substitution
from tfmencoding.tables import Setting
from tfmencoding.tables import SettingOp
from tfmencoding.utils import CODE_ALL


if TYPE_CHECKING:
    from tfmencoding.gsub_encoding import GsubEncoding


A: int = CODES['A']
V: int = CODES['V']
F: int = CODES['f']
I: int = CODES['i']
L: int = CODES['l']


def test_boundary_glyph(encoding: GsubEncoding) -> None:
    assert encoding.boundary_glyph == len(GLYPH_ORDER)


def test_setting(encoding: GsubEncoding) -> None:
    assert encoding.setting(A) == [Setting(SettingOp.SHOW, G['A'])]
    assert encoding.setting(0) is None
    assert encoding.setting(-1) is None
    assert encoding.setting(1000) is None


def test_setting_with_single_positioning(encoding: GsubEncoding) -> None:
    encoding.add_single_positioning(A, 10, 5, 30)
    encoding.add_single_positioning(A, 1, 1, 1)
    assert encoding.setting(A) == [
        Setting(SettingOp.HMOVETO, 10),
        Setting(SettingOp.VMOVETO, 5),
        Setting(SettingOp.SHOW, G['A']),
        Setting(SettingOp.VMOVETO, -5),
        Setting(SettingOp.HMOVETO, 20),
    ]


def test_setting_with_advance_only(encoding: GsubEncoding) -> None:
    encoding.add_single_positioning(V, 0, 0, -7)
    assert encoding.setting(V) == [Setting(SettingOp.SHOW, G['V']), Setting(SettingOp.HMOVETO, -7)]


def test_twoligatures_and_kerns(encoding: GsubEncoding) -> None:
    encoding.add_twoligature(F, I, 0xAE)
    encoding.add_twoligature(F, L, 0xAF)
    encoding.add_twoligature(I, F, 0xB0)
    encoding.add_kern(A, V, -80)
    encoding.add_kern(V, A, -70)
    assert encoding.twoligatures(F) == [(I, 0xAE, 0), (L, 0xAF, 0)]
    assert encoding.twoligatures(A) == []
    assert encoding.kerns(A) == [(V, -80)]
    assert encoding.kern(V, A) == -70
    assert encoding.kern(A, F) == 0


def test_remove_ligatures(encoding: GsubEncoding) -> None:
    encoding.add_twoligature(F, I, 0xAE)
    encoding.add_twoligature(F, L, 0xAF)
    encoding.add_twoligature(I, F, 0xB0)
    encoding.remove_ligatures(F, CODE_ALL)
    assert encoding.twoligatures(F) == []
    assert encoding.twoligatures(I) == [(F, 0xB0, 0)]
    encoding.remove_ligatures(CODE_ALL, F)
    assert encoding.twoligatures(I) == []


def test_remove_kerns(encoding: GsubEncoding) -> None:
    encoding.add_kern(A, V, -80)
    encoding.add_kern(A, F, -10)
    encoding.add_kern(V, A, -70)
    encoding.remove_kerns(A, V)
    assert encoding.kerns(A) == [(F, -10)]
    encoding.remove_kerns(CODE_ALL, CODE_ALL)
    assert encoding.kerns(A) == []
    assert encoding.kerns(V) == []


def test_reencode_right_ligkern(encoding: GsubEncoding) -> None:
    encoding.add_twoligature(F, I, 0xAE)
    encoding.add_twoligature(I, F, 0xB0)
    encoding.add_kern(F, I, -5)
    encoding.add_kern(I, F, -6)
    encoding.reencode_right_ligkern(I, 0x80)
    assert encoding.twoligatures(F) == [(0x80, 0xAE, 0)]
    assert encoding.twoligatures(I) == [(F, 0xB0, 0)]
    assert encoding.kerns(F) == [(0x80, -5)]
    assert encoding.kerns(I) == [(F, -6)]


def test_unparse(encoding: GsubEncoding) -> None:
    encoding.encode(0xAE, G['fi'])
    encoding.add_twoligature(F, I, 0xAE)
    encoding.add_kern(A, V, -80)
    encoding.add_kern(A, F, 15)
    assert encoding.unparse(GLYPH_ORDER) == '\n'.join([
        '  41: A {56/V -80} {66/f +15}',
        '  56: V',
        '  66: f + [69/i =: ae/fi]',
        '  69: i',
        '  6c: l',
        '  ae: fi',
    ])


def test_unparse_fake_ligature(encoding: GsubEncoding) -> None:
    encoding.apply_substitutions([Substitution.ligature([G['f'], G['f'], G['i']], G['ffi'])])
    encoding.simplify_ligatures()
    lines = encoding.unparse(GLYPH_ORDER).splitlines()
    assert lines[-2:] == [
        ' 100: ffi',
        ' 101: =66/f+66/f + [69/i =: 100/ffi]',
    ]


def test_unparse_without_names(encoding: GsubEncoding) -> None:
    assert encoding.unparse().splitlines()[0] == f'  41: g{G["A"]}'
