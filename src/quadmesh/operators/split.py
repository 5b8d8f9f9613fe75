"""
Split Operators
===============

Divide one cell into two along one axis at parameter t ∈ [0, 1].

VERTICAL (cut runs through edges b-c and a-d):

     b---bc---c          b---bc1  bc2---c
     |   |    |          |     |  |     |
     |   |    |          |     |  |     |
     a---ad---d          a---ad1  ad2---d
       joined               disjoint

HORIZONTAL (cut runs through edges a-b and d-c):

     b--------c          b--------c
     |  new   |          | target |
     ab------dc          ab1----dc1
     |        |          ab2----dc2
     | target |          |  new   |
     a--------d          a--------d
       joined               disjoint

The joined horizontal split measures t from the b-c edge and keeps the a-d
half as the target; the disjoint one measures t from the a-d edge and keeps
the b-c half. Either way the appended cell spans the fraction t of the
height. The vertical splits keep corner a in the target. t = 0 or t = 1
produces a zero-area cell; this is left to the caller.

NORMALS:
    joined:   new normals = normalize(lerp(n1, n2, t)) along the split edge
    disjoint: all new normals copy normals[a] (a flat face shares one normal)
"""

from ..spec.structures import QuadMesh, check_cell
from .vectors import lerp, normalize


def _append_vertex(mesh: QuadMesh, position, normal) -> int:
    index = len(mesh.positions)
    mesh.positions.append(position)
    mesh.normals.append(normal)
    return index


def _split_joined(mesh: QuadMesh, cell, t: float, cut) -> list:
    """
    Append the two interpolated vertices of a joined split.

    Args:
        cut: ((s0, e0), (s1, e1)) slot pairs of the two edges being cut

    Returns:
        [i0, i1] new position indices
    """
    positions, normals = mesh.positions, mesh.normals
    (s0, e0), (s1, e1) = cut
    i0 = _append_vertex(mesh,
                        lerp(positions[cell[s0]], positions[cell[e0]], t),
                        normalize(lerp(normals[cell[s0]], normals[cell[e0]], t)))
    i1 = _append_vertex(mesh,
                        lerp(positions[cell[s1]], positions[cell[e1]], t),
                        normalize(lerp(normals[cell[s1]], normals[cell[e1]], t)))
    return [i0, i1]


def split_vertical(mesh: QuadMesh, cell, t: float = 0.5) -> list:
    """
    Split a cell with a cut through edges b-c and a-d.

    The target becomes [a, b, bc, ad]; [ad, bc, c, d] is appended.

    Args:
        mesh: QuadMesh (mutated)
        cell: target cell (rewired in place)
        t: 0 at the a-b edge, 1 at the d-c edge

    Returns:
        the new cell
    """
    check_cell(mesh, cell)
    c, d = cell[2], cell[3]
    bc, ad = _split_joined(mesh, cell, t, cut=((1, 2), (0, 3)))

    cell[2] = bc
    cell[3] = ad
    new_cell = [ad, bc, c, d]
    mesh.cells.append(new_cell)
    return new_cell


def split_vertical_disjoint(mesh: QuadMesh, cell, t: float = 0.5) -> list:
    """
    Vertical split whose two halves share no positions.

    The target becomes [a, b, bc1, ad1]; [ad2, bc2, c, d] is appended, where
    bc1/bc2 and ad1/ad2 are bit-identical copies.

    Returns:
        the new cell
    """
    check_cell(mesh, cell)
    positions, normals = mesh.positions, mesh.normals
    a, b, c, d = cell

    bc_position = lerp(positions[b], positions[c], t)
    ad_position = lerp(positions[a], positions[d], t)
    normal = normals[a]

    bc1 = _append_vertex(mesh, bc_position, normal.copy())
    ad1 = _append_vertex(mesh, ad_position, normal.copy())
    bc2 = _append_vertex(mesh, bc_position.copy(), normal.copy())
    ad2 = _append_vertex(mesh, ad_position.copy(), normal.copy())

    cell[2] = bc1
    cell[3] = ad1
    new_cell = [ad2, bc2, c, d]
    mesh.cells.append(new_cell)
    return new_cell


def split_horizontal(mesh: QuadMesh, cell, t: float = 0.5) -> list:
    """
    Split a cell with a cut through edges a-b and d-c.

    The target becomes [a, ab, dc, d]; [ab, b, c, dc] is appended.

    Args:
        mesh: QuadMesh (mutated)
        cell: target cell (rewired in place)
        t: 0 at the b-c edge, 1 at the a-d edge

    Returns:
        the new cell
    """
    check_cell(mesh, cell)
    b, c = cell[1], cell[2]
    ab, dc = _split_joined(mesh, cell, t, cut=((1, 0), (2, 3)))

    cell[1] = ab
    cell[2] = dc
    new_cell = [ab, b, c, dc]
    mesh.cells.append(new_cell)
    return new_cell


def split_horizontal_disjoint(mesh: QuadMesh, cell, t: float = 0.5) -> list:
    """
    Horizontal split whose two halves share no positions.

    The target becomes [ab1, b, c, dc1]; [a, ab2, dc2, d] is appended.
    t is 0 at the a-d edge, 1 at the b-c edge.

    Returns:
        the new cell
    """
    check_cell(mesh, cell)
    positions, normals = mesh.positions, mesh.normals
    a, b, c, d = cell

    ab_position = lerp(positions[a], positions[b], t)
    dc_position = lerp(positions[d], positions[c], t)
    normal = normals[a]

    ab1 = _append_vertex(mesh, ab_position, normal.copy())
    dc1 = _append_vertex(mesh, dc_position, normal.copy())
    ab2 = _append_vertex(mesh, ab_position.copy(), normal.copy())
    dc2 = _append_vertex(mesh, dc_position.copy(), normal.copy())

    cell[0] = ab1
    cell[3] = dc1
    new_cell = [a, ab2, dc2, d]
    mesh.cells.append(new_cell)
    return new_cell
