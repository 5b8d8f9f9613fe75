"""
Loop Operators
==============

Walk a ring of cells edge-to-edge without an adjacency structure. Every
step is a linear scan over mesh.cells (get_cell_from_edge).

WALK STATE:
    (left, right, previous cell)

    transition: find the cell across edge (left, right), excluding the
                previous cell; its far edge becomes the new (left, right)
    terminal:   no such cell (open boundary), or the walk is back at the
                cell it started from (closed loop)

    Every walk is bounded by the number of cells present when it starts.
    Exceeding that bound means the mesh is malformed and raises ValueError.

LOCAL SLOTS OF A NEIGHBOUR (entered through edge left-right):

     LT(B)---------RT(C)        far edge
      |              |
      |              |
     LB(A)---------RB(D)        edge we came through

    B is the neighbour of A that is not D, C the neighbour of D that is not
    A. Deriving B/C this way follows the loop whichever way the neighbour
    is wound.

SPLIT LOOP:

    *--------*--------*--------*--------*
    |        |        |        |        |
    *<-------*--------*--cell--*------->*
    |        |        |        |        |
    *--------*--------*--------*--------*

    The target is split at t, then the walk goes out through the top and
    the bottom of the cut. On a closed loop the top walk arrives back at the
    bottom of the target; its last point is welded onto the target's bottom
    point when they are bit-identical, and the bottom walk is skipped.
"""

import warnings
from typing import List, Optional, Tuple

from ..spec.constants import (
    QUAD_SIZE,
    LOOP_SLOTS,
    LOOP_SLOTS_OPPOSITE,
    LOOP_EDGES,
    LOOP_EDGES_OPPOSITE,
    LOOP_KINDS,
)
from ..spec.structures import QuadMesh, check_cell
from .vectors import lerp, normalize
from .merge import weld_positions


def get_cell_from_edge(mesh: QuadMesh,
                       index_a: int,
                       index_b: int,
                       exclude_cell=None) -> Optional[list]:
    """
    First cell having a-b as one of its 4 edges (either direction).

    Args:
        mesh: QuadMesh
        index_a, index_b: position indices
        exclude_cell: a cell (compared by identity) that will not be matched

    Returns:
        the cell, or None when a-b is a boundary edge or not an edge at all
    """
    for cell in mesh.cells:
        if cell is exclude_cell:
            continue
        if index_a in cell:
            slot = cell.index(index_a)
            if cell[(slot + 1) % QUAD_SIZE] == index_b or cell[(slot + 3) % QUAD_SIZE] == index_b:
                return cell
    return None


def _walk_slots(cell, left: int, right: int) -> Tuple[int, int, int, int]:
    """
    Local slots (A, B, C, D) of a cell entered through edge left-right.

    A holds `left`, D holds `right`, B and C hold the far edge.
    """
    slot_a = cell.index(left)
    slot_d = cell.index(right)
    if (slot_a + 1) % QUAD_SIZE == slot_d:
        slot_b = (slot_a + 3) % QUAD_SIZE
        slot_c = (slot_d + 1) % QUAD_SIZE
    else:
        slot_b = (slot_a + 1) % QUAD_SIZE
        slot_c = (slot_d + 3) % QUAD_SIZE
    return slot_a, slot_b, slot_c, slot_d


def _append_interpolated(mesh: QuadMesh, index_a: int, index_b: int, t: float) -> int:
    """Append lerp(a, b, t) with its normalized lerped normal. Returns the new index."""
    index = len(mesh.positions)
    mesh.positions.append(lerp(mesh.positions[index_a], mesh.positions[index_b], t))
    mesh.normals.append(normalize(lerp(mesh.normals[index_a], mesh.normals[index_b], t)))
    return index


def _split_at_slots(mesh: QuadMesh, cell, slots, mid_top: int, mid_bottom: int) -> list:
    """
    Cut `cell` between its left and right sides.

    The cell keeps its left half [LB, LT, MT, MB]; the right half
    [MB, MT, RT, RB] is appended (both in the cell's own slot order).
    """
    slot_a, slot_b, slot_c, slot_d = slots
    right = [0] * QUAD_SIZE
    right[slot_a] = mid_bottom
    right[slot_b] = mid_top
    right[slot_c] = cell[slot_c]
    right[slot_d] = cell[slot_d]

    cell[slot_c] = mid_top
    cell[slot_d] = mid_bottom
    mesh.cells.append(right)
    return right


def _walk_and_split(mesh: QuadMesh,
                    left: int,
                    middle: int,
                    right: int,
                    t: float) -> Tuple[int, Optional[Tuple[int, int]]]:
    """
    Keep splitting cells across edge (left, right), whose cut point is
    `middle`, until the walk runs off the mesh.

     LT----MT---RT
      |    .     |
      |    .     | <- split this cell
      |    .     |
     LB----MB---RB
      |    |     |
      |    |     | <- previous cell
      *----*-----*

    Returns:
        (index of the last created position or -1, last far edge or None)
    """
    limit = len(mesh.cells)
    new_index = -1
    far_edge = None
    steps = 0

    while True:
        cell = get_cell_from_edge(mesh, left, right)
        if cell is None:
            break

        steps += 1
        if steps > limit:
            raise ValueError(f"Loop walk did not terminate after {limit} cells; "
                             f"the mesh is malformed around edge ({left}, {right})")

        slots = _walk_slots(cell, left, right)
        top_left = cell[slots[1]]
        top_right = cell[slots[2]]
        top_middle = _append_interpolated(mesh, top_left, top_right, t)
        _split_at_slots(mesh, cell, slots, top_middle, middle)

        left, middle, right = top_left, top_middle, top_right
        new_index = top_middle
        far_edge = (top_left, top_right)

    return new_index, far_edge


def split_loop(mesh: QuadMesh, cell, t: float = 0.5, opposite: bool = False) -> List[list]:
    """
    Split a cell and every cell in its loop at the same parameter t.

    Args:
        mesh: QuadMesh (mutated)
        cell: starting cell
        t: cut position, 0 at the left side, 1 at the right side
        opposite: cut across the other pair of edges (rotate slots by one)

    Returns:
        list of newly appended cells

    WELD:
        On a closed loop the two cut points meeting at the target are welded
        when bit-identical. If they are not (floating point drift) a
        UserWarning is issued and both points are kept.
    """
    check_cell(mesh, cell)
    first_new_cell = len(mesh.cells)
    slots = LOOP_SLOTS_OPPOSITE if opposite else LOOP_SLOTS
    slot_a, slot_b, slot_c, slot_d = slots

    bottom_left = cell[slot_a]
    top_left = cell[slot_b]
    top_right = cell[slot_c]
    bottom_right = cell[slot_d]

    top_middle = _append_interpolated(mesh, top_left, top_right, t)
    bottom_middle = _append_interpolated(mesh, bottom_left, bottom_right, t)
    _split_at_slots(mesh, cell, slots, top_middle, bottom_middle)

    last_index, far_edge = _walk_and_split(mesh, top_left, top_middle, top_right, t)
    welded = weld_positions(mesh, last_index, bottom_middle)

    if not welded:
        if far_edge is not None and set(far_edge) == {bottom_left, bottom_right}:
            warnings.warn(
                f"split_loop closed the loop but positions {last_index} and {bottom_middle} "
                f"are not bit-identical; they were left unwelded.",
                UserWarning
            )
        _walk_and_split(mesh, bottom_right, bottom_middle, bottom_left, 1 - t)

    return mesh.cells[first_new_cell:]


def inset_loop(mesh: QuadMesh, cell, t: float = 0.5, opposite: bool = False) -> List[list]:
    """
    Inset a whole loop: two split_loop passes leave a thin band of cells
    around the original loop.

        tA = 1 - t/2
        tB = t/2 + (1 - tA)·t

    Returns:
        list of newly appended cells (both passes)
    """
    first_new_cell = len(mesh.cells)
    t_a = 1 - 0.5 * t
    t_b = 0.5 * t + (1 - t_a) * t
    split_loop(mesh, cell, t_a, opposite)
    split_loop(mesh, cell, t_b, opposite)
    return mesh.cells[first_new_cell:]


def _walk_loop(mesh: QuadMesh, start, left: int, right: int) -> Tuple[List[tuple], bool]:
    """
    Non-mutating walk from `start` across edge (left, right).

    Returns:
        steps: list of (cell, far_left, far_right), nearest first
        closed: True if the walk came back to `start`
    """
    limit = len(mesh.cells)
    steps = []
    previous = start

    while True:
        neighbor = get_cell_from_edge(mesh, left, right, exclude_cell=previous)
        if neighbor is None:
            return steps, False
        if neighbor is start:
            return steps, True
        if len(steps) >= limit:
            raise ValueError(f"Loop walk did not terminate after {limit} cells; "
                             f"the mesh is malformed around edge ({left}, {right})")

        slots = _walk_slots(neighbor, left, right)
        left = neighbor[slots[1]]
        right = neighbor[slots[2]]
        steps.append((neighbor, left, right))
        previous = neighbor


def get_loop(mesh: QuadMesh, cell, kind: str = "cells", opposite: bool = False) -> list:
    """
    Collect the loop through a cell without modifying the mesh.

    Args:
        mesh: QuadMesh
        cell: starting cell
        kind: "cells", "positions" or "normals"
        opposite: walk across edges 1-2 / 3-0 instead of 0-1 / 2-3

    Returns:
        kind="cells": the cells from the far end of one side, through `cell`,
                      to the far end of the other side
        otherwise:    the matching attribute vectors; each neighbour adds its
                      far edge (2 vectors), the target adds its 4

    FAIL-FAST:
        Raises ValueError for an unknown kind.
    """
    if kind not in LOOP_KINDS:
        raise ValueError(f"kind must be one of {LOOP_KINDS}, got {kind!r}")
    check_cell(mesh, cell)

    (s0, s1), (s2, s3) = LOOP_EDGES_OPPOSITE if opposite else LOOP_EDGES
    side_one, closed = _walk_loop(mesh, cell, cell[s0], cell[s1])
    side_two = [] if closed else _walk_loop(mesh, cell, cell[s2], cell[s3])[0]

    if kind == "cells":
        return ([step[0] for step in reversed(side_one)]
                + [cell]
                + [step[0] for step in side_two])

    attribute = getattr(mesh, kind)
    loop = []
    for _, far_left, far_right in reversed(side_one):
        loop.extend([attribute[far_left], attribute[far_right]])
    loop.extend(attribute[index] for index in cell)
    for _, far_left, far_right in side_two:
        loop.extend([attribute[far_left], attribute[far_right]])
    return loop
