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

"""Compaction of an encoding to a fixed number of slots.

Compaction is the only operation that moves codes. Whenever it does, it
rewrites every code in the ligature, kern, and single positioning tables
with a single reassignment, so no table ever refers to a code that no
longer exists.
"""


from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from tfmencoding.utils import REMOVED
from tfmencoding.utils import fill_lines
from tfmencoding.utils import glyph_name


if TYPE_CHECKING:
    from collections.abc import MutableSequence
    from collections.abc import Sequence

    from tfmencoding.gsub_encoding import GsubEncoding
    from tfmencoding.reference import ReferenceEncoding
    from tfmencoding.tables import Ligature


log = logging.getLogger(__name__)


def _reassign(code: int, reassignment: Sequence[int | None]) -> int:
    if code < 0:
        return code
    assert code < len(reassignment), f'Code {code} is missing from the reassignment'
    new_code = reassignment[code]
    return REMOVED if new_code is None else new_code


def _reassign_ligature(ligature: Ligature, reassignment: Sequence[int | None]) -> None:
    ligature.inputs[:] = [_reassign(code, reassignment) for code in ligature.inputs]
    ligature.out = _reassign(ligature.out, reassignment)


def reassign_codes(encoding: GsubEncoding, reassignment: Sequence[int | None]) -> None:
    """Rewrites every code in an encoding’s auxiliary tables.

    The encoding table itself is left alone; the caller is responsible
    for moving the glyphs.

    Args:
        encoding: The encoding.
        reassignment: A mapping from old codes to new codes, where
            ``None`` means the old code is dropped. It must have an
            entry for every code in the encoding.
    """
    for ligature in encoding.ligature_table:
        _reassign_ligature(ligature, reassignment)
    for ligature in encoding.fake_ligature_table:
        _reassign_ligature(ligature, reassignment)
    for kern in encoding.kern_table:
        kern.left = _reassign(kern.left, reassignment)
        kern.right = _reassign(kern.right, reassignment)
    for vfpos in encoding.vfpos_table:
        vfpos.code = _reassign(vfpos.code, reassignment)
    encoding.clear_cache()


def _identity_up_to(size: int, total: int) -> MutableSequence[int | None]:
    return [code if code < size else None for code in range(total)]


def cut_encoding(encoding: GsubEncoding, size: int) -> None:
    """Truncates an encoding, dropping every code past the end.

    Args:
        encoding: The encoding.
        size: The new size. If the encoding is smaller, it is padded
            with unencoded slots instead.
    """
    if len(encoding) > size:
        reassign_codes(encoding, _identity_up_to(size, len(encoding)))
    encoding.resize(size)


@dataclasses.dataclass
class _Slot:
    position: int
    value: int
    new_position: int | None = None


def _place_preferred(
    encoding: GsubEncoding,
    slots: Sequence[_Slot],
    size: int,
    reference: ReferenceEncoding,
    glyph_names: Sequence[str | None],
) -> None:
    for slot in slots:
        if not 0 <= slot.value < len(glyph_names) or not (name := glyph_names[slot.value]):
            continue
        e = reference.encoding_of(name)
        if e is not None and e < size and not encoding[e]:
            encoding.encode(e, slot.value)
            slot.new_position = e


def _place_anywhere(
    encoding: GsubEncoding,
    slots: Sequence[_Slot],
    size: int,
    reference: ReferenceEncoding,
) -> None:
    pending = (slot for slot in slots if slot.new_position is None)
    slot = next(pending, None)
    # Leave the slots the reference encoding cares about for last.
    for avoid in [True, False]:
        for e in range(size):
            if slot is None:
                return
            if not encoding[e] and not (avoid and reference.encoded(e)):
                encoding.encode(e, slot.value)
                slot.new_position = e
                slot = next(pending, None)


def shrink_encoding(
    encoding: GsubEncoding,
    size: int,
    reference: ReferenceEncoding,
    glyph_names: Sequence[str | None],
) -> Sequence[str]:
    """Shrinks an encoding by moving glyphs into free slots.

    Every glyph at or past `size` is moved to a free slot below `size`.
    Glyphs are handled in increasing order by glyph id. A glyph first
    tries the slot the reference encoding assigns to its name. Failing
    that, it takes the lowest free slot, preferring slots the reference
    encoding does not use. Glyphs that still do not fit are dropped, and
    a warning lists them.

    Args:
        encoding: The encoding.
        size: The new size.
        reference: The reference encoding.
        glyph_names: The glyph names indexed by glyph id.

    Returns:
        The sorted names of the dropped glyphs.
    """
    if len(encoding) <= size:
        encoding.resize(size)
        return []

    slots = sorted(
        (_Slot(code, encoding[code]) for code in range(size, len(encoding)) if encoding[code]),
        key=lambda slot: slot.value,
    )
    _place_preferred(encoding, slots, size, reference, glyph_names)
    _place_anywhere(encoding, slots, size, reference)

    unencoded = sorted(glyph_name(slot.value, glyph_names) for slot in slots if slot.new_position is None)
    if unencoded:
        log.warning(
            'Ignoring %d unencodable glyph%s; the encoding has no room left for:\n%s',
            len(unencoded),
            '' if len(unencoded) == 1 else 's',
            fill_lines(unencoded),
        )

    reassignment = _identity_up_to(size, len(encoding))
    for slot in slots:
        reassignment[slot.position] = slot.new_position
    reassign_codes(encoding, reassignment)
    encoding.resize(size)
    return unencoded
