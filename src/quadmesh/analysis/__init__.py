"""
Read-only and whole-mesh functions - depend on operators layer.

Separated from builders to maintain clean layering:
    builders → operators → spec
    analysis → operators → spec

Includes:
- centers: cell centres
- export: index buffers, flat vertex buffers, change capture
- subdivide: Catmull-Clark through an injected subdivider
"""

from .centers import compute_cell_center, compute_center_positions

from .export import (
    elements_from_quads,
    to_buffers,
    get_new_geometry,
)

from .subdivide import subdivide, Subdivider
