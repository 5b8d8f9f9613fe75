"""
Normal Maintenance
==================

Face normals, per-vertex averaged normals, and the on-demand adjacency
lookups they need.

DEFINITIONS:
    face normal(cell) = normalize(cross(B - A, C - B))
        Uses only the first three corners (cells are assumed planar).

    vertex normal(i) = normalize(Σ face normal(c) for c touching i)
        A position touched by no cell gets the zero vector.

ADJACENCY:
    Nothing is cached on the mesh. Callers doing a batch of lookups may pass
    a map from build_position_to_cells(), valid only until the next
    structural edit.

NORMAL CACHE:
    A dict keyed by id(cell). It only lives for one batch of calls, during
    which every cached cell is still referenced by mesh.cells, so ids cannot
    be recycled.
"""

import numpy as np
from collections import defaultdict
from typing import Dict, List, Optional

from ..spec.structures import QuadMesh
from .vectors import normalize


def get_cell_normal(mesh: QuadMesh, cell) -> np.ndarray:
    """
    Face normal of a cell, independent of its neighbours.

    Args:
        mesh: QuadMesh
        cell: [a, b, c, d]

    Returns:
        (3,) unit normal (zero vector for a degenerate cell)
    """
    pa = mesh.positions[cell[0]]
    pb = mesh.positions[cell[1]]
    pc = mesh.positions[cell[2]]
    return normalize(np.cross(pb - pa, pc - pb))


def get_cells_from_position_index(mesh: QuadMesh, index: int) -> List[list]:
    """All cells that reference a position (linear scan)."""
    return [cell for cell in mesh.cells if index in cell]


def build_position_to_cells(mesh: QuadMesh) -> Dict[int, List[list]]:
    """
    Map each referenced position index to the cells that use it.

    Positions not used by any cell are absent from the map.
    """
    to_cells = defaultdict(list)
    for cell in mesh.cells:
        for index in cell:
            to_cells[index].append(cell)
    return dict(to_cells)


def average_normal_for_position(mesh: QuadMesh,
                                index: int,
                                normal_cache: Optional[dict] = None,
                                position_to_cells: Optional[Dict[int, List[list]]] = None
                                ) -> np.ndarray:
    """
    Average the face normals of every cell around a position.

    Args:
        mesh: QuadMesh
        index: position index
        normal_cache: optional dict id(cell) -> face normal, filled as a side
                      effect so shared cells are computed once per batch
        position_to_cells: optional precomputed adjacency; falls back to a
                           linear scan when omitted

    Returns:
        (3,) unit normal, or the zero vector for an orphan position
    """
    if position_to_cells is not None:
        cells = position_to_cells.get(index, [])
    else:
        cells = get_cells_from_position_index(mesh, index)

    total = np.zeros(3)
    for cell in cells:
        normal = None
        if normal_cache is not None:
            normal = normal_cache.get(id(cell))
        if normal is None:
            normal = get_cell_normal(mesh, cell)
            if normal_cache is not None:
                normal_cache[id(cell)] = normal
        total += normal

    return normalize(total)


def compute_normals(mesh: QuadMesh) -> QuadMesh:
    """
    Rebuild every normal from scratch by averaging.

    Builds one adjacency map and one normal cache for the whole pass, so each
    cell's face normal is computed at most once. Normals is resized to match
    positions.

    Returns:
        the same mesh
    """
    position_to_cells = build_position_to_cells(mesh)
    normal_cache = {}
    mesh.normals = [
        average_normal_for_position(mesh, i, normal_cache, position_to_cells)
        for i in range(len(mesh.positions))
    ]
    return mesh


def update_normals(mesh: QuadMesh, cell) -> np.ndarray:
    """
    Assign a cell's face normal to its 4 vertices.

    Only correct when those vertices are not shared with other cells
    (disjoint geometry). Returns the face normal.
    """
    normal = get_cell_normal(mesh, cell)
    for index in cell:
        mesh.normals[index] = normal.copy()
    return normal
