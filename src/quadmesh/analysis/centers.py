"""Cell centres (arithmetic mean of the 4 corners)."""

import numpy as np
from typing import List

from ..spec.structures import QuadMesh


def compute_cell_center(mesh: QuadMesh, cell) -> np.ndarray:
    """Centre of a single cell, as a new (3,) array."""
    a, b, c, d = (mesh.positions[index] for index in cell)
    return (a + b + c + d) * 0.25


def compute_center_positions(mesh: QuadMesh) -> List[np.ndarray]:
    """Centres of every cell, in cell order."""
    return [compute_cell_center(mesh, cell) for cell in mesh.cells]
