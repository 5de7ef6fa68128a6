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

"""Simplification of an encoding’s ligature table.

A renderer that consults the ligature table only looks at two codes at a
time. Simplification makes the table usable by such a renderer:

1. Every ligature whose output does not start another ligature is
   marked as not skipping (``skip = False``). Only such ligatures can
   stand in for the first two inputs of a longer ligature, since the
   longer ligature must be able to continue from their output.

2. Every ligature with more than two inputs is reduced to two inputs by
   repeatedly replacing its first two inputs with the output of a
   two-input ligature of those inputs. If there is no such ligature, a
   fake one is made up, whose output is a new slot holding
   `FAKE_LIGATURE`. For example, with no ``f f`` ligature, ``f f i ->
   ffi`` becomes ``f f -> LIGATURE`` and ``LIGATURE i -> ffi``.

3. A ligature is removed if an earlier ligature matches a prefix of its
   inputs, because the earlier one always wins.

4. A context ligature that replaces its trigger with itself is removed,
   because it would hide later ligatures for the same pair.
"""


from __future__ import annotations

from typing import TYPE_CHECKING

from tfmencoding.tables import Ligature
from tfmencoding.tables import NO_CONTEXT
from tfmencoding.utils import FAKE_LIGATURE
from tfmencoding.utils import REMOVED


if TYPE_CHECKING:
    from collections.abc import Iterable

    from tfmencoding.gsub_encoding import GsubEncoding


def _find_twoligature(ligatures: Iterable[Ligature], a: int, b: int) -> int | None:
    for ligature in ligatures:
        if (len(ligature.inputs) == 2
            and ligature.inputs[0] == a
            and ligature.inputs[1] == b
            and not ligature.skip
            and ligature.context == NO_CONTEXT
        ):
            return ligature.out
    return None


def find_skippable_twoligature(encoding: GsubEncoding, a: int, b: int, add_fake: bool) -> int | None:
    """Finds the output of a non-skipping plain ligature of two codes.

    Args:
        encoding: The encoding whose ligatures to search.
        a: The first input.
        b: The second input.
        add_fake: Whether to add a fake ligature if there is no real or
            fake ligature of `a` and `b`.

    Returns:
        The output code, or ``None`` if there is no such ligature and
        `add_fake` is false.
    """
    out = _find_twoligature(encoding.ligature_table, a, b)
    if out is None:
        out = _find_twoligature(encoding.fake_ligature_table, a, b)
    if out is None and add_fake:
        out = encoding.append(FAKE_LIGATURE)
        encoding.fake_ligature_table.append(Ligature([a, b], out, skip=False, context=NO_CONTEXT))
    return out


def _mark_skips(ligatures: Iterable[Ligature]) -> None:
    ligatures = list(ligatures)
    first_inputs = {ligature.inputs[0] for ligature in ligatures}
    for ligature in ligatures:
        ligature.skip = ligature.out in first_inputs


def _reduce_chains(encoding: GsubEncoding, add_fake: bool) -> None:
    for ligature in encoding.ligature_table:
        while len(ligature.inputs) > 2:
            if ligature.inputs[0] < 0:
                del ligature.inputs[2:]
                break
            out = find_skippable_twoligature(encoding, ligature.inputs[0], ligature.inputs[1], add_fake)
            ligature.inputs[:2] = [REMOVED if out is None else out]


def _remove_redundant(ligatures: Iterable[Ligature]) -> None:
    ligatures = list(ligatures)
    for i, ligature in enumerate(ligatures):
        if ligature.removed:
            continue
        n = len(ligature.inputs)
        for later in ligatures[i + 1:]:
            if len(later.inputs) >= n and later.inputs[:n] == ligature.inputs:
                later.remove()


def _remove_null(ligatures: Iterable[Ligature]) -> None:
    for ligature in ligatures:
        if not ligature.removed and ligature.context != NO_CONTEXT and ligature.trigger == ligature.out:
            ligature.remove()


def simplify_ligatures(encoding: GsubEncoding, add_fake: bool = True) -> None:
    """Simplifies an encoding’s ligatures.

    Afterwards, every ligature has at most two inputs.

    Args:
        encoding: The encoding whose ligatures to simplify.
        add_fake: Whether to add fake ligatures as necessary. If not, a
            ligature that would need one is left unmatchable.
    """
    _mark_skips(encoding.ligature_table)
    _reduce_chains(encoding, add_fake)
    _remove_redundant(encoding.ligature_table)
    _remove_null(encoding.ligature_table)

