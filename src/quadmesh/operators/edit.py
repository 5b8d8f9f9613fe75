"""
Clone, Flip and Mirror
======================

Operators that duplicate or reorient existing cells without changing the
cells they copy from.

CLONE:
    clone(cell) copies 4 positions + normals, giving a coincident disjoint
    cell. clone_cells(cells) copies a group as a unit: an index shared by
    several cells of the group is copied once, so internal sharing survives
    while the group boundary becomes disjoint from the rest of the mesh.

MIRROR:
    Copies positions (memoised per original index), negates one component of
    each copied position and normal, and reverses the winding so the mirrored
    face still points outward.
"""

from typing import Dict, List

from ..spec.constants import VEC_SIZE
from ..spec.structures import QuadMesh, check_cell


def _clone_index(mesh: QuadMesh, index: int, index_map: Dict[int, int]) -> int:
    """Index of the copy of `index`, creating it on first use."""
    cloned = index_map.get(index)
    if cloned is None:
        cloned = len(mesh.positions)
        mesh.positions.append(mesh.positions[index].copy())
        mesh.normals.append(mesh.normals[index].copy())
        index_map[index] = cloned
    return cloned


def clone(mesh: QuadMesh, cell) -> list:
    """
    Duplicate one cell into 4 new positions.

    Returns:
        the new cell
    """
    check_cell(mesh, cell)
    index_map = {}
    cloned_cell = [_clone_index(mesh, index, index_map) for index in cell]
    mesh.cells.append(cloned_cell)
    return cloned_cell


def clone_cells(mesh: QuadMesh, cells) -> List[list]:
    """
    Duplicate a group of cells, preserving sharing inside the group.

    Two cells sharing an edge (2 indices) add 6 positions, not 8.

    Args:
        mesh: QuadMesh (mutated)
        cells: iterable of cells already in the mesh

    Returns:
        list of new cells, in the order of `cells`
    """
    cells = list(cells)
    for cell in cells:
        check_cell(mesh, cell)

    index_map = {}
    cloned_cells = []
    for cell in cells:
        cloned_cell = [_clone_index(mesh, index, index_map) for index in cell]
        mesh.cells.append(cloned_cell)
        cloned_cells.append(cloned_cell)
    return cloned_cells


def flip(mesh: QuadMesh, cell) -> list:
    """
    Point a cell the other way: reverse its winding in place and negate its
    4 normals. Returns the cell.
    """
    check_cell(mesh, cell)
    cell.reverse()
    for index in cell:
        mesh.normals[index] = -mesh.normals[index]
    return cell


def mirror(mesh: QuadMesh, cells, axis: int) -> List[list]:
    """
    Append a mirrored copy of `cells` about the plane `axis = 0`.

    Args:
        mesh: QuadMesh (mutated)
        cells: cells to mirror
        axis: 0, 1 or 2 for x, y, z

    Returns:
        list of new cells; each is the reversed copy [d', c', b', a']

    FAIL-FAST:
        Raises ValueError if axis is not 0, 1 or 2.
    """
    if axis not in range(VEC_SIZE):
        raise ValueError(f"axis must be 0, 1 or 2, got {axis}")

    cells = list(cells)
    for cell in cells:
        check_cell(mesh, cell)

    mirror_map = {}
    mirrored_cells = []
    for cell in cells:
        mirrored = []
        for index in cell:
            mirror_index = mirror_map.get(index)
            if mirror_index is None:
                mirror_index = len(mesh.positions)
                position = mesh.positions[index].copy()
                normal = mesh.normals[index].copy()
                position[axis] *= -1
                normal[axis] *= -1
                mesh.positions.append(position)
                mesh.normals.append(normal)
                mirror_map[index] = mirror_index
            mirrored.append(mirror_index)

        mirrored.reverse()
        mesh.cells.append(mirrored)
        mirrored_cells.append(mirrored)

    return mirrored_cells
