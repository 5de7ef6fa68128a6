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

"""An encoding during and after the application of OpenType features.
"""


from __future__ import annotations

from typing import Final
from typing import TYPE_CHECKING

from tfmencoding import compaction
from tfmencoding import ligatures
from tfmencoding import positioning
from tfmencoding import substitution
from tfmencoding.table import EncodingTable
from tfmencoding.tables import Kern
from tfmencoding.tables import Ligature
from tfmencoding.tables import NO_CONTEXT
from tfmencoding.tables import Setting
from tfmencoding.tables import SettingOp
from tfmencoding.tables import Vfpos
from tfmencoding.utils import CODE_ALL
from tfmencoding.utils import FAKE_LIGATURE
from tfmencoding.utils import glyph_name


if TYPE_CHECKING:
    from collections.abc import Iterable
    from collections.abc import MutableSequence
    from collections.abc import Sequence

    from tfmencoding.reference import ReferenceEncoding
    from tfmencoding.rules import Positioning
    from tfmencoding.rules import Substitution
    from tfmencoding.utils import CodeAll


class GsubEncoding(EncodingTable):
    """An encoding together with its ligature, kern, and single
    positioning tables.

    An encoding is built in three stages. First, rules are applied
    (`apply_substitutions`, `apply_positionings`). Second, the tables
    are simplified (`simplify_ligatures`, `simplify_positionings`).
    Third, the encoding is compacted to its final size (`cut_encoding`,
    `shrink_encoding`). After that, it is only queried.

    Attributes:
        boundary_glyph: The glyph standing for the boundary of a word.
            It is one past the last real glyph.
        ligature_table: The ligatures, in order of precedence.
        fake_ligature_table: The fake ligatures made up by
            `simplify_ligatures`.
        kern_table: The kerns.
        vfpos_table: The single positionings.
    """

    def __init__(self, nglyphs: int) -> None:
        """Initializes this `GsubEncoding` with an empty encoding.

        Args:
            nglyphs: The number of glyphs in the font.
        """
        super().__init__()
        self.boundary_glyph: Final = nglyphs
        self.ligature_table: MutableSequence[Ligature] = []
        self.fake_ligature_table: MutableSequence[Ligature] = []
        self.kern_table: MutableSequence[Kern] = []
        self.vfpos_table: MutableSequence[Vfpos] = []

    def apply_substitutions(self, substitutions: Iterable[Substitution], allow_single: bool = True) -> int:
        return substitution.apply_substitutions(self, substitutions, allow_single)

    def apply_positionings(self, positionings: Iterable[Positioning]) -> int:
        return positioning.apply_positionings(self, positionings)

    def simplify_ligatures(self, add_fake: bool = True) -> None:
        ligatures.simplify_ligatures(self, add_fake)

    def simplify_positionings(self) -> None:
        positioning.simplify_positionings(self)

    def reassign_codes(self, reassignment: Sequence[int | None]) -> None:
        compaction.reassign_codes(self, reassignment)

    def cut_encoding(self, size: int) -> None:
        compaction.cut_encoding(self, size)

    def shrink_encoding(
        self,
        size: int,
        reference: ReferenceEncoding,
        glyph_names: Sequence[str | None],
    ) -> Sequence[str]:
        return compaction.shrink_encoding(self, size, reference, glyph_names)

    def add_twoligature(self, code1: int, code2: int, outcode: int) -> None:
        self.ligature_table.append(Ligature([code1, code2], outcode, skip=False, context=NO_CONTEXT))

    def add_kern(self, left: int, right: int, amount: int) -> None:
        self.kern_table.append(Kern(left, right, amount))

    def add_single_positioning(self, code: int, pdx: int, pdy: int, adx: int) -> None:
        self.vfpos_table.append(Vfpos(code, pdx, pdy, adx))

    def remove_ligatures(self, code1: int | CodeAll, code2: int | CodeAll) -> None:
        """Removes two-input ligatures.

        Args:
            code1: The first input of the ligatures to remove, or
                `CODE_ALL` for any.
            code2: The second input of the ligatures to remove, or
                `CODE_ALL` for any.
        """
        for ligature in self.ligature_table:
            if (len(ligature.inputs) == 2
                and (code1 is CODE_ALL or ligature.inputs[0] == code1)
                and (code2 is CODE_ALL or ligature.inputs[1] == code2)
            ):
                ligature.remove()

    def remove_kerns(self, code1: int | CodeAll, code2: int | CodeAll) -> None:
        """Removes kerns.

        Args:
            code1: The left code of the kerns to remove, or `CODE_ALL`
                for any.
            code2: The right code of the kerns to remove, or `CODE_ALL`
                for any.
        """
        for kern in self.kern_table:
            if ((code1 is CODE_ALL or kern.left == code1)
                and (code2 is CODE_ALL or kern.right == code2)
            ):
                kern.remove()

    def reencode_right_ligkern(self, old_code: int, new_code: int) -> None:
        """Replaces a code wherever it is not the first code of a
        ligature or kern.

        Args:
            old_code: The code to replace.
            new_code: The replacement.
        """
        for ligature in self.ligature_table:
            ligature.inputs[1:] = [new_code if code == old_code else code for code in ligature.inputs[1:]]
        for kern in self.kern_table:
            if kern.right == old_code:
                kern.right = new_code

    def setting(self, code: int) -> Sequence[Setting] | None:
        """Returns how to set a code.

        Args:
            code: A code.

        Returns:
            The operations that show the code’s glyph and apply the first
            single positioning of the code, if any; or ``None`` if the
            code is unencoded.
        """
        if not 0 <= code < len(self):
            return None
        pdx = pdy = adx = 0
        for vfpos in self.vfpos_table:
            if vfpos.code == code:
                pdx, pdy, adx = vfpos.pdx, vfpos.pdy, vfpos.adx
                break
        # TODO: Set fake ligatures as the sequence of glyphs they stand for.
        glyph = self[code]
        if glyph <= 0:
            return None
        settings = []
        if pdx:
            settings.append(Setting(SettingOp.HMOVETO, pdx))
        if pdy:
            settings.append(Setting(SettingOp.VMOVETO, pdy))
        settings.append(Setting(SettingOp.SHOW, glyph))
        if pdy:
            settings.append(Setting(SettingOp.VMOVETO, -pdy))
        if adx - pdx:
            settings.append(Setting(SettingOp.HMOVETO, adx - pdx))
        return settings

    def twoligatures(self, code1: int) -> Sequence[tuple[int, int, int]]:
        """Returns the live two-input ligatures starting with a code.

        Args:
            code1: The first input.

        Returns:
            A list of tuples of the second input, the output, and the
            context of each ligature.
        """
        return [
            (ligature.inputs[1], ligature.out, ligature.context)
                for ligature in self.ligature_table
                if len(ligature.inputs) == 2
                    and ligature.inputs[0] == code1
                    and ligature.inputs[1] >= 0
                    and ligature.out >= 0
        ]

    def kerns(self, code1: int) -> Sequence[tuple[int, int]]:
        """Returns the live kerns whose left code is a code.

        Args:
            code1: The left code.

        Returns:
            A list of tuples of the right code and the amount of each
            kern.
        """
        return [(kern.right, kern.amount) for kern in self.kern_table if kern.left == code1 and kern.right >= 0]

    def kern(self, code1: int, code2: int) -> int:
        """Returns the kern between two codes, or 0 if there is none.
        """
        for kern in self.kern_table:
            if kern.left == code1 and kern.right == code2:
                return kern.amount
        return 0

    def unparse(self, glyph_names: Sequence[str | None] | None = None) -> str:
        """Returns a human-readable dump of this encoding.

        There is one line per encoded code. It contains the code in
        hexadecimal, the glyph (or, for a fake ligature, the codes it
        combines), the ligatures starting with the code, and the kerns
        whose left code is the code.

        Args:
            glyph_names: The glyph names indexed by glyph id.
        """
        def describe(code: int) -> str:
            if not 0 <= code < len(self):
                return f'{code:x}/?'
            return f'{code:x}/{glyph_name(self[code], glyph_names)}'

        lines = []
        for code, glyph in enumerate(self):
            if not glyph:
                continue
            parts = [f'{code:4x}:']
            if glyph == FAKE_LIGATURE:
                for fake in self.fake_ligature_table:
                    if fake.out == code:
                        parts.append(f'={"+".join(map(describe, fake.inputs))}')
            else:
                parts.append(glyph_name(glyph, glyph_names))
            for ligature in self.ligature_table:
                if ligature.inputs[0] == code:
                    rest = ','.join(map(describe, ligature.inputs[1:]))
                    marker = '=:|' if ligature.context > 0 else '|=:' if ligature.context < 0 else '=:'
                    parts.append(f'+ [{rest} {marker} {describe(ligature.out)}]')
            for right, amount in self.kerns(code):
                parts.append(f'{{{describe(right)} {amount:+}}}')
            lines.append(' '.join(parts))
        return '\n'.join(lines)
