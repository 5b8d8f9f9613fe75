"""
Inset and Extrude
=================

INSET (joined): shrink a cell toward its centroid by t ∈ [0, 1]:

     b----------c
     |\   q1   /|
     | \      / |
     |  f----g  |
     |q0| tC |q2|        tC = target cell, rewired to [e, f, g, h]
     |  e----h  |
     | /      \ |
     |/   q3   \|
     a----------d

    q0 = [a, b, f, e]   q1 = [f, b, c, g]
    q2 = [h, g, c, d]   q3 = [a, e, h, d]

    t = 0 leaves the target where it was (ring cells are degenerate),
    t = 1 collapses the target onto the centroid.

INSET (disjoint): same geometry, no two of the 5 cells share a position:

         bT----------cT
     bL   \    qT    /   cR
     |\    \        /    /|
     | \    fT----gT    / |
     |  fL  fM----gM  gR  |
     |qL|   |  tC |    |qR|
     |  eL  eM----hM  hR  |
     | /    eB----hB    \ |
     |/    /        \    \|
     aL   /    qB    \   dR
         aB----------dB

    aL, bL, cR, dR reuse a, b, c, d; the other 16 positions are new.

EXTRUDE: inset, then move the target and the ring's inner edge along the
target's face normal (measured before moving). Shared-vertex geometry
re-averages the affected normals; disjoint geometry recomputes face normals
per ring cell.

All four operators return [q0, q1, q2, q3, target].
"""

import numpy as np
from typing import List

from ..spec.structures import QuadMesh, check_cell
from .vectors import lerp, centroid
from .normals import get_cell_normal, average_normal_for_position, update_normals


def _inset_corners(mesh: QuadMesh, cell, t: float) -> List[np.ndarray]:
    """Each corner moved toward the cell centroid by t."""
    corners = [mesh.positions[index] for index in cell]
    center = centroid(*corners)
    return [lerp(corner, center, t) for corner in corners]


def inset(mesh: QuadMesh, cell, t: float = 0.0) -> List[list]:
    """
    Inset a cell, sharing positions between the ring and the target.

    Args:
        mesh: QuadMesh (mutated)
        cell: target cell (rewired in place to the inner positions)
        t: 0 = on the edges, 1 = at the centroid

    Returns:
        [q0, q1, q2, q3, cell]
    """
    check_cell(mesh, cell)
    a, b, c, d = cell
    inner = _inset_corners(mesh, cell, t)

    e = len(mesh.positions)
    f, g, h = e + 1, e + 2, e + 3
    for position, corner in zip(inner, (a, b, c, d)):
        mesh.positions.append(position)
        mesh.normals.append(mesh.normals[corner].copy())

    cell[:] = [e, f, g, h]
    ring = [
        [a, b, f, e],
        [f, b, c, g],
        [h, g, c, d],
        [a, e, h, d],
    ]
    mesh.cells.extend(ring)
    return ring + [cell]


def inset_disjoint(mesh: QuadMesh, cell, t: float = 0.0) -> List[list]:
    """
    Inset a cell so that none of the 5 resulting cells share a position.

    Used for flat-shaded bevels. New normals copy normals[a].

    Returns:
        [qL, qT, qR, qB, cell]
    """
    check_cell(mesh, cell)
    a, b, c, d = cell
    pa, pb, pc, pd = (mesh.positions[index] for index in cell)
    pe, pf, pg, ph = _inset_corners(mesh, cell, t)
    normal = mesh.normals[a]

    # Order fixes the new indices: offset + 0 .. offset + 15
    new_positions = [
        pa,           # aB
        pb,           # bT
        pc,           # cT
        pd,           # dB
        pe, pe, pe,   # eM, eB, eL
        pf, pf, pf,   # fM, fL, fT
        pg, pg, pg,   # gM, gT, gR
        ph, ph, ph,   # hM, hR, hB
    ]
    offset = len(mesh.positions)
    for position in new_positions:
        mesh.positions.append(position.copy())
        mesh.normals.append(normal.copy())

    aB, bT, cT, dB = offset, offset + 1, offset + 2, offset + 3
    eM, eB, eL = offset + 4, offset + 5, offset + 6
    fM, fL, fT = offset + 7, offset + 8, offset + 9
    gM, gT, gR = offset + 10, offset + 11, offset + 12
    hM, hR, hB = offset + 13, offset + 14, offset + 15

    cell[:] = [eM, fM, gM, hM]
    ring = [
        [a, b, fL, eL],      # qL
        [fT, bT, cT, gT],    # qT
        [hR, gR, c, d],      # qR
        [aB, eB, hB, dB],    # qB
    ]
    mesh.cells.extend(ring)
    return ring + [cell]


def _moved_indices(ring: List[list], cell) -> List[int]:
    """
    Indices lifted by an extrude: the target's 4 plus each ring cell's inner
    edge, de-duplicated in first-seen order.
    """
    q_left, q_top, q_right, q_bottom = ring
    candidates = list(cell) + [
        q_left[2], q_left[3],
        q_top[0], q_top[3],
        q_right[0], q_right[1],
        q_bottom[1], q_bottom[2],
    ]
    return list(dict.fromkeys(candidates))


def _translate(mesh: QuadMesh, indices: List[int], translation: np.ndarray) -> None:
    for index in indices:
        mesh.positions[index] = mesh.positions[index] + translation


def extrude(mesh: QuadMesh, cell, inset_t: float = 0.0, distance: float = 0.0) -> List[list]:
    """
    Inset a cell, then push it out along its normal.

    Each moved position is translated exactly once. Afterwards the normals
    of the 8 positions around the ring are re-averaged from their
    neighbouring cells.

    Args:
        mesh: QuadMesh (mutated)
        cell: target cell
        inset_t: inset amount, see inset()
        distance: signed distance along the target's face normal

    Returns:
        [q0, q1, q2, q3, cell]
    """
    outer = list(cell)
    ring = inset(mesh, cell, inset_t)[:4]

    normal = get_cell_normal(mesh, cell)
    _translate(mesh, _moved_indices(ring, cell), normal * distance)

    # Translation along the normal keeps the target's face normal.
    normal_cache = {id(cell): normal}
    for index in outer + list(cell):
        mesh.normals[index] = average_normal_for_position(mesh, index, normal_cache)

    return ring + [cell]


def extrude_disjoint(mesh: QuadMesh, cell, inset_t: float = 0.0, distance: float = 0.0) -> List[list]:
    """
    Disjoint inset, then push the target out along its normal.

    No position is shared, so every moved position takes the face normal of
    its single owning cell.

    Returns:
        [qL, qT, qR, qB, cell]
    """
    ring = inset_disjoint(mesh, cell, inset_t)[:4]

    normal = get_cell_normal(mesh, cell)
    _translate(mesh, _moved_indices(ring, cell), normal * distance)

    for ring_cell in ring:
        update_normals(mesh, ring_cell)
    update_normals(mesh, cell)

    return ring + [cell]
