"""Mesh operators - normals, splits, inset/extrude, clone/mirror, loops, merge."""

from .vectors import (
    lerp,
    normalize,
    centroid,
)

from .normals import (
    get_cell_normal,
    get_cells_from_position_index,
    build_position_to_cells,
    average_normal_for_position,
    compute_normals,
    update_normals,
)

from .split import (
    split_vertical,
    split_vertical_disjoint,
    split_horizontal,
    split_horizontal_disjoint,
)

from .inset import (
    inset,
    inset_disjoint,
    extrude,
    extrude_disjoint,
)

from .edit import (
    clone,
    clone_cells,
    flip,
    mirror,
)

from .merge import (
    merge_positions,
    weld_positions,
)

from .loops import (
    get_cell_from_edge,
    split_loop,
    inset_loop,
    get_loop,
)
