"""Constants and mesh contract."""

from .constants import (
    EPS_ZERO,
    QUAD_SIZE,
    VEC_SIZE,
    FACINGS,
    DEFAULT_FACING,
    AXIS_INDEX,
    DRAW_TRIANGLES,
    DRAW_LINES,
    DRAW_MODES,
    ELEMENTS_PER_CELL,
    DEFAULT_ELEMENT_DTYPE,
    GEOMETRY_KEYS,
    LOOP_KINDS,
)

from .structures import (
    QuadMesh,
    as_vector,
    position_key,
    positions_equal,
    check_cell,
    validate_mesh,
    ensure_mesh,
)
