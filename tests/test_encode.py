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

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
import pytest

from tfmencoding import encode


if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


GLYPHS = ['.notdef', 'A', 'V', 'f', 'i', 'fi']


@pytest.fixture(autouse=True)
def restore_logger() -> Iterator[None]:
    logger = logging.getLogger('tfmencoding')
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def font_path(tmp_path: Path) -> Path:
    builder = FontBuilder(1000, isTTF=True)
    builder.setupGlyphOrder(GLYPHS)
    builder.setupCharacterMap({0x41: 'A', 0x56: 'V', 0x66: 'f', 0x69: 'i'})
    builder.setupGlyf({name: TTGlyphPen(None).glyph() for name in GLYPHS})
    builder.setupHorizontalMetrics({name: (500, 0) for name in GLYPHS})
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable({'familyName': 'Test', 'styleName': 'Regular'})
    builder.setupOS2()
    builder.setupPost()
    path = tmp_path / 'test.ttf'
    builder.save(str(path))
    return path


def test_main(font_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    fea_path = tmp_path / 'test.fea'
    fea_path.write_text('''
        feature liga {
            sub f i by fi;
        } liga;
        feature kern {
            pos A V -80;
        } kern;
    ''', encoding='utf-8')
    assert encode.main([str(font_path), '--fea', str(fea_path)]) == 0
    assert capsys.readouterr().out.splitlines() == [
        '   0: fi',
        '  41: A {56/V -80}',
        '  56: V',
        '  66: f + [69/i =: 0/fi]',
        '  69: i',
    ]


def test_main_with_encoding_file(font_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    fea_path = tmp_path / 'test.fea'
    fea_path.write_text('feature liga { sub f i by fi; } liga;', encoding='utf-8')
    enc_path = tmp_path / 'test.enc'
    enc_path.write_text('/TestEncoding [ /A /V /f /i /fi ] def\n', encoding='utf-8')
    assert encode.main([str(font_path), '--fea', str(fea_path), '--encoding', str(enc_path), '--size', '5']) == 0
    assert capsys.readouterr().out.splitlines() == [
        '   0: A',
        '   1: V',
        '   2: f + [3/i =: 4/fi]',
        '   3: i',
        '   4: fi',
    ]


def test_main_feature_file_error(font_path: Path, tmp_path: Path) -> None:
    fea_path = tmp_path / 'test.fea'
    fea_path.write_text('feature liga { sub f i by } liga;', encoding='utf-8')
    assert encode.main([str(font_path), '--fea', str(fea_path)]) == 1
