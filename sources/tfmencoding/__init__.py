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

"""Fitting OpenType Layout features into a flat encoding.

An OpenType font can have thousands of glyphs and arbitrarily complex
substitution and positioning lookups. A TeX font metric file has at most
256 codes, a ligature table that looks at two codes at a time, and a
kern table. This package bridges the two.

The central class is `GsubEncoding`. Substitution rules are applied to
it, turning glyph rewrites into code rewrites and ligatures. Its
ligature table is then simplified to two-input ligatures, and the
encoding is compacted to its final size, moving glyphs toward the slots
a `ReferenceEncoding` assigns them.
"""


from __future__ import annotations


__all__ = [
    'CODE_ALL',
    'FAKE_LIGATURE',
    'EncodingTable',
    'GsubEncoding',
    'Kern',
    'Ligature',
    'Positioning',
    'PositioningKind',
    'ReferenceEncoding',
    'Setting',
    'SettingOp',
    'Substitution',
    'SubstitutionKind',
    'Vfpos',
    'read_feature_file',
]


from tfmencoding.fea import read_feature_file
from tfmencoding.gsub_encoding import GsubEncoding
from tfmencoding.reference import ReferenceEncoding
from tfmencoding.rules import Positioning
from tfmencoding.rules import PositioningKind
from tfmencoding.rules import Substitution
from tfmencoding.rules import SubstitutionKind
from tfmencoding.table import EncodingTable
from tfmencoding.tables import Kern
from tfmencoding.tables import Ligature
from tfmencoding.tables import Setting
from tfmencoding.tables import SettingOp
from tfmencoding.tables import Vfpos
from tfmencoding.utils import CODE_ALL
from tfmencoding.utils import FAKE_LIGATURE
