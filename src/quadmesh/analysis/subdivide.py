"""
Subdivision
===========

Smooth a mesh with an external Catmull-Clark implementation.

COLLABORATOR CONTRACT:
    subdivider(positions, cells, levels) -> (positions', cells')

        positions: (N, 3) float64 array
        cells:     (M, 4) int array
        levels:    number of subdivision passes

    The subdivider is treated as a black box. Its output must again be a
    quad mesh; it is copied into the mesh (owned vectors, list cells) and
    every normal is recomputed, because the topology is new.

    No subdivider ships with quadmesh. Any Catmull-Clark implementation can be
    adapted to this signature, for example a thin wrapper around the
    Catmull-Clark filter of pymeshlab. Without one only levels=0 is accepted.
"""

from typing import Callable, Optional, Tuple

import numpy as np

from ..spec.structures import QuadMesh, validate_mesh
from ..operators.normals import compute_normals

Subdivider = Callable[[np.ndarray, np.ndarray, int], Tuple[np.ndarray, np.ndarray]]


def subdivide(mesh: QuadMesh, levels: int,
              subdivider: Optional[Subdivider] = None) -> QuadMesh:
    """
    Replace the mesh with its subdivided version and rebuild the normals.

    Args:
        mesh: QuadMesh (contents replaced)
        levels: subdivision passes, >= 0 (0 only rebuilds the normals)
        subdivider: Catmull-Clark callable, see module docstring. Required
            when levels > 0.

    Returns:
        the same mesh

    FAIL-FAST:
        Raises ValueError for negative levels, for levels > 0 without a
        subdivider, or if the subdivider returns cells that are not valid quads.
    """
    if levels < 0:
        raise ValueError(f"levels must be >= 0, got {levels}")
    if levels > 0 and subdivider is None:
        raise ValueError(
            f"subdivide(levels={levels}) needs a subdivider callable "
            "(positions, cells, levels) -> (positions, cells); none was given"
        )

    positions, _, cells = mesh.as_arrays()
    if levels > 0:
        positions, cells = subdivider(positions, cells, levels)

    result = QuadMesh.from_arrays(positions, cells)
    mesh.positions = result.positions
    mesh.normals = result.normals
    mesh.cells = result.cells
    validate_mesh(mesh)
    return compute_normals(mesh)
