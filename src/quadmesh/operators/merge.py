"""
Merge and Weld
==============

The only operators that delete positions. Every cell index above a deleted
slot shifts down, so cells are renumbered in the same pass.

EQUALITY:
    Bit-exact (no epsilon). Positions produced by clone or by disjoint
    duplication are exact copies, so exact comparison finds them.

MERGE ORDER:
    For a group of equal positions the LAST occurrence survives and the
    survivors keep their relative order. This is the outcome of the classic
    pairwise scan (delete the earlier copy, shift everything above it down,
    rescan from the same slot) computed in one hashed pass.
"""

from ..spec.structures import QuadMesh, position_key, positions_equal
from .normals import compute_normals


def merge_positions(mesh: QuadMesh) -> QuadMesh:
    """
    Collapse every group of bit-identical positions into one and recompute
    all normals by averaging.

    Returns:
        the same mesh
    """
    last_occurrence = {}
    for i, position in enumerate(mesh.positions):
        last_occurrence[position_key(position)] = i

    survivors = sorted(last_occurrence.values())
    new_index_of_survivor = {old: new for new, old in enumerate(survivors)}
    remap = [
        new_index_of_survivor[last_occurrence[position_key(position)]]
        for position in mesh.positions
    ]

    mesh.positions = [mesh.positions[i] for i in survivors]
    mesh.normals = [mesh.normals[i] for i in survivors]
    for cell in mesh.cells:
        cell[:] = [remap[index] for index in cell]

    return compute_normals(mesh)


def weld_positions(mesh: QuadMesh, index_a: int, index_b: int) -> bool:
    """
    Merge two positions if they are bit-identical.

    The lower index is kept, the higher one is deleted, and every cell is
    renumbered. Negative indices (no candidate) are ignored.

    Returns:
        True if the positions were welded
    """
    if index_a < 0 or index_b < 0 or index_a == index_b:
        return False
    if not positions_equal(mesh.positions[index_a], mesh.positions[index_b]):
        return False

    saved = min(index_a, index_b)
    deleted = max(index_a, index_b)

    for cell in mesh.cells:
        for slot, index in enumerate(cell):
            if index == deleted:
                cell[slot] = saved
            elif index > deleted:
                cell[slot] = index - 1

    del mesh.positions[deleted]
    del mesh.normals[deleted]
    return True
