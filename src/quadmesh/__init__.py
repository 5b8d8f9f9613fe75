"""
QUADMESH - Quad-mesh editing kernel
===================================

Pure in-memory geometry. NO rendering engine. NO I/O.

Structure:
    spec/       - Constants and mesh contract (QuadMesh, validation)
    operators/  - Edits: splits, inset/extrude, clone/mirror, loops, merge, normals
    builders/   - Quad and box construction
    analysis/   - Centres, export buffers, change capture, subdivision

Every operator works on a QuadMesh with:
    - positions: list of (3,) float64 arrays
    - normals:   list of (3,) float64 arrays, parallel to positions
    - cells:     list of [a, b, c, d] index lists, clockwise

Typical use:
    mesh = create_box(1, 1, 1)
    q0, q1, q2, q3, top = extrude(mesh, mesh.cells[0], 0.2, 0.5)
    split_loop(mesh, q0, 0.5)
    elements = elements_from_quads(mesh)

Requirements:
    Python >= 3.9
    numpy >= 1.20
"""

import sys

# Python version check
if sys.version_info < (3, 9):
    raise ImportError(f"quadmesh requires Python >= 3.9, got {sys.version}")

# numpy version check
import numpy as np
_numpy_version = tuple(int(p) for p in np.__version__.split('.')[:2] if p.isdigit())
if _numpy_version < (1, 20):
    raise ImportError(f"quadmesh requires numpy >= 1.20, got {np.__version__}")

__version__ = "0.1.0"

from . import spec
from . import operators
from . import builders
from . import analysis

from .spec import QuadMesh, validate_mesh, check_cell

from .builders import create_quad, create_box_disjoint, create_box

from .operators import (
    get_cell_normal,
    get_cells_from_position_index,
    build_position_to_cells,
    average_normal_for_position,
    compute_normals,
    update_normals,
    split_vertical,
    split_vertical_disjoint,
    split_horizontal,
    split_horizontal_disjoint,
    inset,
    inset_disjoint,
    extrude,
    extrude_disjoint,
    clone,
    clone_cells,
    flip,
    mirror,
    merge_positions,
    weld_positions,
    get_cell_from_edge,
    split_loop,
    inset_loop,
    get_loop,
)

from .analysis import (
    compute_cell_center,
    compute_center_positions,
    elements_from_quads,
    to_buffers,
    get_new_geometry,
    subdivide,
)
