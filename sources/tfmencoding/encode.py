#!/usr/bin/env python3

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

import argparse
import logging
from pathlib import Path
import sys
from typing import TYPE_CHECKING

from fontTools import configLogger
import fontTools.feaLib.error
import fontTools.ttLib.ttFont

from tfmencoding.fea import read_feature_file
from tfmencoding.gsub_encoding import GsubEncoding
from tfmencoding.reference import ReferenceEncoding
from tfmencoding.utils import DEFAULT_ENCODING_SIZE


if TYPE_CHECKING:
    from collections.abc import Sequence


log = logging.getLogger('tfmencoding')


def load_reference_encoding(
    options: argparse.Namespace,
    tt_font: fontTools.ttLib.ttFont.TTFont,
) -> ReferenceEncoding:
    if options.encoding is not None:
        return ReferenceEncoding.parse_enc(Path(options.encoding).read_text(encoding='utf-8'))
    cmap = tt_font.getBestCmap()
    if cmap:
        return ReferenceEncoding.from_cmap(cmap, options.size)
    log.info('The font has no Unicode cmap; using StandardEncoding')
    return ReferenceEncoding.standard()


def make_encoding(
    options: argparse.Namespace,
    glyph_order: Sequence[str],
    reference: ReferenceEncoding,
) -> GsubEncoding:
    """Builds an encoding from a reference encoding and a feature file.

    Args:
        options: The command line options.
        glyph_order: The font’s glyph names indexed by glyph id.
        reference: The encoding to start from.

    Returns:
        The simplified encoding, shrunk to ``options.size`` slots.
    """
    glyph_ids = {name: gid for gid, name in enumerate(glyph_order)}
    encoding = GsubEncoding(len(glyph_order))
    for code in range(len(reference)):
        if (name := reference.glyph_name(code)) is not None and (gid := glyph_ids.get(name)):
            encoding.encode(code, gid)
    substitutions, positionings = read_feature_file(options.fea, glyph_order, options.features)
    n = encoding.apply_substitutions(substitutions, not options.no_single_substitutions)
    log.info('Processed %d substitutions', n)
    n = encoding.apply_positionings(positionings)
    log.info('Processed %d positionings', n)
    encoding.simplify_ligatures(not options.no_fake_ligatures)
    encoding.simplify_positionings()
    encoding.shrink_encoding(options.size, reference, glyph_order)
    return encoding


def main(args: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description='Fit OpenType features into a flat single-byte encoding.')
    parser.add_argument('font', help='The path to a font.')
    parser.add_argument('--fea', metavar='FILE', required=True, help='The feature file with the rules to apply.')
    parser.add_argument(
        '--feature', action='append', dest='features', metavar='TAG',
        help='A feature to apply. This may be repeated. (default: all features)',
    )
    parser.add_argument(
        '--encoding', metavar='FILE',
        help="A dvips encoding file to start from. (default: the font's cmap, or StandardEncoding)",
    )
    parser.add_argument(
        '--size', type=int, default=DEFAULT_ENCODING_SIZE,
        help='The number of slots in the output encoding (default: %(default)s).',
    )
    parser.add_argument('--no-fake-ligatures', action='store_true', help='Do not make up intermediate ligatures.')
    parser.add_argument('--no-single-substitutions', action='store_true', help='Ignore single substitutions.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log progress.')
    options = parser.parse_args(args)
    if options.size <= 0:
        parser.error('--size must be positive')

    configLogger(logger=log, level=logging.DEBUG if options.verbose else logging.WARNING)

    with fontTools.ttLib.ttFont.TTFont(options.font, lazy=True) as tt_font:
        glyph_order = tt_font.getGlyphOrder()
        try:
            reference = load_reference_encoding(options, tt_font)
        except ValueError as e:
            parser.error(f'{options.encoding}: {e}')
    try:
        encoding = make_encoding(options, glyph_order, reference)
    except fontTools.feaLib.error.FeatureLibError as e:
        log.error('%s', e)
        return 1
    print(encoding.unparse(glyph_order))
    return 0


if __name__ == '__main__':
    sys.exit(main())
