"""
Primitive Construction
======================

Seed a mesh from scratch: a single quad, or a box.

QUAD LAYOUTS (facing "+", half-extents w, h):

    x:  (0, -w, -h)  (0,  w, -h)  (0,  w,  h)  (0, -w,  h)
    y:  (-w, 0, -h)  (-w, 0,  h)  ( w, 0,  h)  ( w, 0, -h)
    z:  ( w, -h, 0)  ( w,  h, 0)  (-w,  h, 0)  (-w, -h, 0)

    cross(B - A, C - B) points along +axis for each layout. A "-" facing
    builds the "+" quad and flips it.

BOX:
    bottom quad (facing up, lowered by y/2) → clone → flip the clone so it
    faces down → extrude_disjoint the original up by y (it becomes the top).

    create_box_disjoint: 6 cells, 24 positions, no sharing (flat shaded)
    create_box:          merged to 8 positions with averaged normals

    For the box the merged layout is:
        positions: bottom a, b, c, d, then top e, f, g, h
        cells:     [4,5,6,7] top, [3,2,1,0] bottom, [0,1,5,4], [5,1,2,6],
                   [7,6,2,3], [0,4,7,3]
"""

import numpy as np
from typing import Optional, Sequence, Tuple

from ..spec.constants import (
    FACINGS,
    DEFAULT_FACING,
    DEFAULT_QUAD_W,
    DEFAULT_QUAD_H,
    DEFAULT_BOX_SIZE,
    QUAD_SIZE,
)
from ..spec.structures import QuadMesh, as_vector, ensure_mesh
from ..operators.normals import get_cell_normal
from ..operators.edit import clone, flip
from ..operators.inset import extrude_disjoint
from ..operators.merge import merge_positions


def _quad_corners(w: float, h: float, axis: str) -> list:
    """The 4 corners of a "+"-facing quad with half-extents w, h."""
    if axis == "x":
        return [(0, -w, -h), (0, w, -h), (0, w, h), (0, -w, h)]
    if axis == "y":
        return [(-w, 0, -h), (-w, 0, h), (w, 0, h), (w, 0, -h)]
    if axis == "z":
        return [(w, -h, 0), (w, h, 0), (-w, h, 0), (-w, -h, 0)]
    raise ValueError(f"Unsupported facing axis {axis!r}, expected one of x, y, z")


def create_quad(positions: Optional[Sequence] = None,
                w: float = DEFAULT_QUAD_W,
                h: float = DEFAULT_QUAD_H,
                facing: str = DEFAULT_FACING,
                mesh: Optional[QuadMesh] = None) -> Tuple[QuadMesh, list]:
    """
    Create one quad, in a new mesh or appended to `mesh`.

    Args:
        positions: 4 explicit corners; used verbatim, `w`, `h` and `facing`
                   are then ignored
        w, h: full width and height (corners at ±w/2, ±h/2)
        facing: one of "x+", "x-", "y+", "y-", "z+", "z-"
        mesh: optional mesh to append to

    Returns:
        (mesh, cell)

    FAIL-FAST:
        Raises ValueError for an unsupported facing or if `positions` is not
        4 triples.

    Example:
        mesh, cell = create_quad(w=2, h=6, facing="z-")
    """
    if positions is not None:
        if len(positions) != QUAD_SIZE:
            raise ValueError(f"Expected {QUAD_SIZE} positions, got {len(positions)}")
        corners = [as_vector(p) for p in positions]
        flipped = False
    else:
        axis, sign = facing[:1], facing[1:]
        if sign not in ("+", "-"):
            raise ValueError(f"Unsupported facing {facing!r}, expected one of {FACINGS}")
        corners = [as_vector(p) for p in _quad_corners(w / 2, h / 2, axis)]
        flipped = sign == "-"

    mesh = ensure_mesh(mesh)
    index = len(mesh.positions)
    cell = [index, index + 1, index + 2, index + 3]
    mesh.cells.append(cell)
    mesh.positions.extend(corners)

    normal = get_cell_normal(mesh, cell)
    mesh.normals.extend(normal.copy() for _ in range(QUAD_SIZE))

    if flipped:
        flip(mesh, cell)

    return mesh, cell


def create_box_disjoint(x: float = DEFAULT_BOX_SIZE[0],
                        y: float = DEFAULT_BOX_SIZE[1],
                        z: float = DEFAULT_BOX_SIZE[2],
                        mesh: Optional[QuadMesh] = None) -> QuadMesh:
    """
    Box of size x × y × z centred at the origin, no shared positions.

    Renders flat shaded. Appends to `mesh` when given.

    Returns:
        the mesh
    """
    mesh, cell = create_quad(w=x, h=z, mesh=mesh)
    lowered = np.array([0.0, y / 2, 0.0])
    for index in cell:
        mesh.positions[index] = mesh.positions[index] - lowered

    bottom = clone(mesh, cell)
    flip(mesh, bottom)
    extrude_disjoint(mesh, cell, 0, y)
    return mesh


def create_box(x: float = DEFAULT_BOX_SIZE[0],
               y: float = DEFAULT_BOX_SIZE[1],
               z: float = DEFAULT_BOX_SIZE[2],
               mesh: Optional[QuadMesh] = None) -> QuadMesh:
    """
    Box of size x × y × z with shared corners and averaged normals.

    Renders smooth; the usual starting point for subdivision or extrusion.
    Note that merge_positions runs over the whole mesh, so coincident
    positions already in `mesh` are merged as well.

    Returns:
        the mesh
    """
    return merge_positions(create_box_disjoint(x, y, z, mesh))
