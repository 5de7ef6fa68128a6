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

"""Entries of the auxiliary tables of an encoding.

Every entry refers to codes, not glyphs. A code of `REMOVED` in the
first position of an entry means the entry has been removed; the entry
stays in its list so that indexes into the list remain stable.
"""


from __future__ import annotations

import dataclasses
import enum
from typing import Final

from tfmencoding.utils import REMOVED


#: The `Ligature.context` value of a plain ligature.
NO_CONTEXT: Final[int] = 0


#: The `Ligature.context` value of a single substitution whose context
#: follows the substituted code.
RIGHT_CONTEXT: Final[int] = 1


#: The `Ligature.context` value of a single substitution whose context
#: precedes the substituted code.
LEFT_CONTEXT: Final[int] = -1


@dataclasses.dataclass
class Ligature:
    """A rule that replaces a sequence of codes.

    A plain ligature replaces all of `inputs` with `out`. A context
    ligature has exactly two inputs and replaces only one of them: the
    first for `RIGHT_CONTEXT`, the second for `LEFT_CONTEXT`. The other
    input is the context, which is left alone.

    Attributes:
        inputs: The codes to match consecutively.
        out: The code produced.
        skip: Whether the output of this ligature starts another
            ligature. Until ligatures are simplified, this is ``True``.
        context: `NO_CONTEXT`, `RIGHT_CONTEXT`, or `LEFT_CONTEXT`.
    """

    inputs: list[int]
    out: int
    skip: bool = True
    context: int = NO_CONTEXT

    @property
    def removed(self) -> bool:
        return self.inputs[0] < 0

    def remove(self) -> None:
        self.inputs[0] = REMOVED

    @property
    def trigger(self) -> int:
        """The code that a context ligature replaces.
        """
        assert self.context != NO_CONTEXT, 'A plain ligature has no trigger'
        return self.inputs[0] if self.context == RIGHT_CONTEXT else self.inputs[1]


@dataclasses.dataclass
class Kern:
    """A horizontal adjustment between two adjacent codes.
    """

    left: int
    right: int
    amount: int

    @property
    def removed(self) -> bool:
        return self.left < 0

    def remove(self) -> None:
        self.left = REMOVED


@dataclasses.dataclass
class Vfpos:
    """Positioning offsets of a single code.

    Attributes:
        code: The positioned code.
        pdx: The x offset to move by before showing the glyph.
        pdy: The y offset to move by before showing the glyph.
        adx: The adjustment to the glyph’s advance width.
    """

    code: int
    pdx: int = 0
    pdy: int = 0
    adx: int = 0

    @property
    def removed(self) -> bool:
        return self.code < 0

    def remove(self) -> None:
        self.code = REMOVED


@enum.unique
class SettingOp(enum.Enum):
    """An operation that a renderer performs to set a code.
    """

    #: Show a glyph at the current point.
    SHOW = enum.auto()

    #: Move the current point horizontally.
    HMOVETO = enum.auto()

    #: Move the current point vertically.
    VMOVETO = enum.auto()


@dataclasses.dataclass(frozen=True)
class Setting:
    """One operation of a code’s setting.

    Attributes:
        op: The operation.
        value: The glyph to show, or the distance to move.
    """

    op: SettingOp
    value: int
