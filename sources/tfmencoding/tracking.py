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

"""Bookkeeping for a single pass of rule application.

A tracker covers the codes that existed when its pass began. Codes
appended during the pass are outside the tracker, which means rules can
never match them in the same pass. A tracker is created at the start of
a pass and discarded at its end.
"""


from __future__ import annotations

import enum
from typing import Final
from typing import TYPE_CHECKING

from tfmencoding.utils import BitSet


if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from collections.abc import MutableSequence


@enum.unique
class ChangeState(enum.Enum):
    """How much of a code has been rewritten in the current pass.
    """

    #: No rule has rewritten the code.
    NO = enum.auto()

    #: Context ligatures take some of the pairs that start with the code.
    SOME = enum.auto()

    #: An unconditional rule has rewritten the code. No later rule in the
    #: same pass may touch it.
    ALL = enum.auto()


class RewriteTracker:
    """Tracks which codes substitutions have rewritten in one pass.

    Attributes:
        size: The number of codes covered.
    """

    def __init__(self, size: int) -> None:
        self.size: Final = size
        self._states: MutableSequence[ChangeState] = [ChangeState.NO] * size
        self._contexts: MutableMapping[int, BitSet] = {}

    def covers(self, code: int | None) -> bool:
        """Returns whether a code is tracked by this tracker.

        Args:
            code: A code, or ``None`` for an unencoded glyph.
        """
        return code is not None and 0 <= code < self.size

    def state(self, code: int) -> ChangeState:
        assert self.covers(code), f'Code {code} is not tracked'
        return self._states[code]

    def mark_all(self, code: int) -> None:
        assert self.covers(code), f'Code {code} is not tracked'
        self._states[code] = ChangeState.ALL

    def contexts(self, code: int) -> BitSet:
        """Returns the codes that follow a code in pairs already taken
        by context ligatures.

        Args:
            code: A tracked code.

        Returns:
            The second codes recorded by `mark_changed_in_context` with
            `code` as the first code. The caller must not modify it.
        """
        assert self.covers(code), f'Code {code} is not tracked'
        return self._contexts.get(code) or BitSet(self.size)

    def changed_in_context(self, first: int, second: int) -> bool:
        """Returns whether a pair of codes already has a context
        ligature.

        A code rewritten unconditionally counts as taking every pair it
        starts.

        Args:
            first: The first code of the pair.
            second: The second code of the pair.
        """
        if not self.covers(first) or not self.covers(second):
            return False
        if self._states[first] == ChangeState.ALL:
            return True
        bits = self._contexts.get(first)
        return bits is not None and second in bits

    def mark_changed_in_context(self, first: int, second: int) -> None:
        """Records that a pair of codes has a context ligature.

        A ligature table holds one entry per pair, so the pair is
        recorded under its first code whichever side the context is on.

        Args:
            first: The first code of the pair. It must not have been
                rewritten unconditionally.
            second: The second code of the pair.
        """
        if not self.covers(first) or not self.covers(second):
            return
        assert self._states[first] != ChangeState.ALL, f'Code {first} has already been rewritten unconditionally'
        bits = self._contexts.get(first)
        if bits is None:
            bits = self._contexts[first] = BitSet(self.size)
        bits.add(second)
        self._states[first] = ChangeState.SOME


class PositioningTracker:
    """Tracks which codes and code pairs have been positioned in one
    pass.

    The first rule to position a code or a pair wins.
    """

    def __init__(self, size: int) -> None:
        self.size: Final = size
        self._singles: BitSet = BitSet(size)
        self._pairs: MutableMapping[int, BitSet] = {}

    def claim_single(self, code: int) -> bool:
        """Claims a code for single positioning.

        Args:
            code: A code less than `size`.

        Returns:
            Whether this is the first claim on `code`.
        """
        return not self._singles.add(code)

    def claim_pair(self, left: int, right: int) -> bool:
        """Claims a pair of codes for kerning.

        Args:
            left: The first code, less than `size`.
            right: The second code, less than `size`.

        Returns:
            Whether this is the first claim on the pair.
        """
        assert 0 <= left < self.size, f'Code {left} is out of range'
        bits = self._pairs.get(left)
        if bits is None:
            bits = self._pairs[left] = BitSet(self.size)
        return not bits.add(right)
