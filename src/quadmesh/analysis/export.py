"""
Export and Change Capture
=========================

Read-only views of a finished mesh for a renderer, plus capture of geometry
appended during an edit.

ELEMENTS (per cell [a, b, c, d]):
    triangles: a, b, c,  c, d, a
    lines:     a, b,  b, c,  c, d,  d, a

The caller chooses the integer width of the index buffer. It must hold the
largest position index; otherwise a ValueError is raised rather than
silently wrapping.

No rendering engine is imported here.
"""

import numpy as np
from typing import Callable, Dict

from ..spec.constants import (
    DRAW_TRIANGLES,
    DRAW_MODES,
    ELEMENT_ORDER,
    DEFAULT_ELEMENT_DTYPE,
    DEFAULT_BUFFER_DTYPE,
    GEOMETRY_KEYS,
    QUAD_SIZE,
)
from ..spec.structures import QuadMesh


def elements_from_quads(mesh: QuadMesh,
                        draw_mode: str = DRAW_TRIANGLES,
                        dtype=DEFAULT_ELEMENT_DTYPE) -> np.ndarray:
    """
    Flatten the cells into an index buffer.

    Args:
        mesh: QuadMesh
        draw_mode: "triangles" (6 indices per cell) or "lines" (8)
        dtype: integer dtype of the result

    Returns:
        (n_cells * 6,) or (n_cells * 8,) array of `dtype`

    FAIL-FAST:
        Raises ValueError for an unknown draw mode or when a position index
        does not fit in `dtype`.
    """
    if draw_mode not in DRAW_MODES:
        raise ValueError(f"draw_mode must be one of {DRAW_MODES}, got {draw_mode!r}")

    cells = np.array(mesh.cells, dtype=np.int64).reshape(-1, QUAD_SIZE)
    if cells.size:
        limit = np.iinfo(dtype).max
        largest = int(cells.max())
        if largest > limit:
            raise ValueError(f"Position index {largest} does not fit in "
                             f"{np.dtype(dtype).name} (max {limit})")

    elements = cells[:, list(ELEMENT_ORDER[draw_mode])].astype(dtype).ravel()
    return elements


def to_buffers(mesh: QuadMesh,
               draw_mode: str = DRAW_TRIANGLES,
               dtype=DEFAULT_BUFFER_DTYPE) -> Dict[str, np.ndarray]:
    """
    Flat float32 vertex attributes and an index buffer for a GPU upload.

    Returns:
        dict with 'positions' (N*3,), 'normals' (N*3,) float32 and
        'elements' of `dtype`
    """
    positions, normals, _ = mesh.as_arrays()
    return {
        'positions': positions.astype(np.float32).ravel(),
        'normals': normals.astype(np.float32).ravel(),
        'elements': elements_from_quads(mesh, draw_mode, dtype),
    }


def get_new_geometry(mesh: QuadMesh, key: str, callback: Callable[[], object]) -> list:
    """
    Run `callback` and return what it appended to one attribute list.

    Only appended elements are detected. A callback that deletes or reorders
    elements (merge_positions, a welding split_loop) makes the returned slice
    meaningless; this is the caller's responsibility.

    Args:
        mesh: QuadMesh
        key: "positions", "normals" or "cells"
        callback: performs the edits, takes no arguments

    Returns:
        list of the new elements

    Example:
        new_cells = get_new_geometry(mesh, "cells",
                                     lambda: extrude(mesh, tip, 0.5, 3))
    """
    if key not in GEOMETRY_KEYS:
        raise ValueError(f"key must be one of {GEOMETRY_KEYS}, got {key!r}")

    start = len(getattr(mesh, key))
    callback()
    return getattr(mesh, key)[start:]
