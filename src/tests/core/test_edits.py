"""
Local Edit Tests for quadmesh
=============================

Tests for the single-cell operators:
- split_vertical / split_horizontal (joined and disjoint)
- clone / clone_cells / flip / mirror
- inset / inset_disjoint / extrude / extrude_disjoint

Unit quad used throughout (create_quad default, facing y+):

    b(-.5, 0, .5) ------ c(.5, 0, .5)
         |                   |
    a(-.5, 0, -.5) ----- d(.5, 0, -.5)

Run: python -m pytest tests/core/test_edits.py -v
"""

import numpy as np
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from quadmesh.spec import validate_mesh
from quadmesh.builders import create_quad, create_box
from quadmesh.operators import (
    get_cell_normal,
    compute_normals,
    split_vertical,
    split_vertical_disjoint,
    split_horizontal,
    split_horizontal_disjoint,
    clone,
    clone_cells,
    flip,
    mirror,
    inset,
    inset_disjoint,
    extrude,
    extrude_disjoint,
)


UP = np.array([0.0, 1.0, 0.0])


def quad_area(mesh, cell):
    """Area of a planar quad: |(c - a) × (d - b)| / 2."""
    a, b, c, d = (mesh.positions[index] for index in cell)
    return 0.5 * np.linalg.norm(np.cross(c - a, d - b))


def assert_consistent(mesh):
    """Contract holds and no vector is shared between two slots."""
    validate_mesh(mesh)
    assert len({id(p) for p in mesh.positions}) == mesh.n_positions, "Aliased positions"
    assert len({id(n) for n in mesh.normals}) == mesh.n_positions, "Aliased normals"


# =============================================================================
# TEST A: Splits
# =============================================================================

def test_split_vertical():
    """Joined vertical split: target [a, b, bc, ad], new [ad, bc, c, d]."""
    mesh, cell = create_quad()
    new_cell = split_vertical(mesh, cell, 0.25)
    assert_consistent(mesh)

    assert mesh.n_positions == 6
    assert cell == [0, 1, 4, 5]
    assert new_cell == [5, 4, 2, 3]
    assert new_cell is mesh.cells[-1]
    assert np.allclose(mesh.positions[4], [-0.25, 0.0, 0.5])
    assert np.allclose(mesh.positions[5], [-0.25, 0.0, -0.5])

    for normal in mesh.normals:
        assert np.allclose(normal, UP), f"Split normal {normal}"
    assert np.allclose(get_cell_normal(mesh, new_cell), UP)
    print("✓ split_vertical(t=0.25): cut at x=-0.25, normals kept")


def test_split_horizontal():
    """Joined horizontal split: t runs from the b-c edge, target [a, ab, dc, d]."""
    mesh, cell = create_quad()
    a, b, c, d = (mesh.positions[index].copy() for index in cell)
    new_cell = split_horizontal(mesh, cell, 0.25)
    assert_consistent(mesh)

    assert cell == [0, 4, 5, 3]
    assert new_cell == [4, 1, 2, 5]
    assert np.allclose(mesh.positions[4], b + 0.25 * (a - b)), f"ab at {mesh.positions[4]}"
    assert np.allclose(mesh.positions[5], c + 0.25 * (d - c)), f"dc at {mesh.positions[5]}"
    assert np.allclose(mesh.positions[4], [-0.5, 0.0, 0.25])
    assert np.allclose(mesh.positions[5], [0.5, 0.0, 0.25])

    assert np.isclose(quad_area(mesh, new_cell), 0.25), "New cell should span t of the height"
    assert np.isclose(quad_area(mesh, cell), 0.75)
    assert np.allclose(get_cell_normal(mesh, cell), UP)
    assert np.allclose(get_cell_normal(mesh, new_cell), UP)
    print("✓ split_horizontal(t=0.25): cut at z=0.25, new cell on the b-c side")


def test_split_halves_area():
    """At t=0.5 both halves have half the area."""
    for split in (split_vertical, split_horizontal,
                  split_vertical_disjoint, split_horizontal_disjoint):
        mesh, cell = create_quad()
        new_cell = split(mesh, cell, 0.5)
        assert np.isclose(quad_area(mesh, cell), 0.5), f"{split.__name__}: target area"
        assert np.isclose(quad_area(mesh, new_cell), 0.5), f"{split.__name__}: new area"
    print("✓ All splits at t=0.5: areas 0.5 / 0.5")


def test_split_at_boundary_is_degenerate():
    """t=0 leaves one zero-area cell with coincident vertices."""
    mesh, cell = create_quad()
    new_cell = split_vertical(mesh, cell, 0.0)
    assert np.isclose(quad_area(mesh, cell), 0.0)
    assert np.isclose(quad_area(mesh, new_cell), 1.0)
    assert np.array_equal(mesh.positions[cell[1]], mesh.positions[cell[2]])

    mesh, cell = create_quad()
    new_cell = split_horizontal(mesh, cell, 0.0)
    assert np.isclose(quad_area(mesh, new_cell), 0.0)
    assert np.isclose(quad_area(mesh, cell), 1.0)
    assert np.array_equal(mesh.positions[new_cell[0]], mesh.positions[new_cell[1]])

    # Degenerate face normal is zero, never NaN
    assert np.array_equal(get_cell_normal(mesh, new_cell), np.zeros(3))
    print("✓ Split at t=0: degenerate cell, zero normal")


def test_split_vertical_disjoint():
    """Disjoint vertical split: halves share no index, cut points coincide."""
    mesh, cell = create_quad()
    new_cell = split_vertical_disjoint(mesh, cell, 0.5)
    assert_consistent(mesh)

    assert mesh.n_positions == 8
    assert cell == [0, 1, 4, 5]
    assert new_cell == [7, 6, 2, 3]
    assert not set(cell) & set(new_cell), "Disjoint halves share a position"

    assert np.array_equal(mesh.positions[4], mesh.positions[6])
    assert np.array_equal(mesh.positions[5], mesh.positions[7])
    for index in range(4, 8):
        assert np.array_equal(mesh.normals[index], UP)
    print("✓ split_vertical_disjoint: 4 new positions, no sharing")


def test_split_horizontal_disjoint():
    """Disjoint horizontal split: target keeps the b-c half [ab1, b, c, dc1]."""
    mesh, cell = create_quad()
    new_cell = split_horizontal_disjoint(mesh, cell, 0.75)
    assert_consistent(mesh)

    assert cell == [4, 1, 2, 5]
    assert new_cell == [0, 6, 7, 3]
    assert not set(cell) & set(new_cell), "Disjoint halves share a position"
    assert np.allclose(mesh.positions[4], [-0.5, 0.0, 0.25])
    assert np.allclose(mesh.positions[7], [0.5, 0.0, 0.25])
    assert np.isclose(quad_area(mesh, new_cell), 0.75), "New cell should span t of the height"
    assert np.isclose(quad_area(mesh, cell), 0.25)
    print("✓ split_horizontal_disjoint(t=0.75): cut at z=0.25, target on the b-c side")


def test_split_horizontal_disjoint_target_half():
    """The caller keeps holding the b-c half after a disjoint horizontal split."""
    mesh, cell = create_quad()
    b, c = cell[1], cell[2]
    new_cell = split_horizontal_disjoint(mesh, cell, 0.25)

    assert cell[1] == b and cell[2] == c, f"Target {cell} lost its b-c edge"
    assert new_cell[0] == 0 and new_cell[3] == 3, f"New cell {new_cell} should keep a and d"
    assert np.allclose(mesh.positions[cell[0]], [-0.5, 0.0, -0.25])
    assert np.allclose(get_cell_normal(mesh, cell), UP)
    assert np.allclose(get_cell_normal(mesh, new_cell), UP)
    print("✓ split_horizontal_disjoint(t=0.25): target [ab1, b, c, dc1]")


# =============================================================================
# TEST B: Clone / flip / mirror
# =============================================================================

def test_clone():
    """clone adds 1 cell and 4 positions equal by value, not by identity."""
    mesh, cell = create_quad()
    cloned = clone(mesh, cell)
    assert_consistent(mesh)

    assert mesh.n_cells == 2
    assert mesh.n_positions == 8
    assert cloned == [4, 5, 6, 7]
    for original, copy in zip(cell, cloned):
        assert np.array_equal(mesh.positions[original], mesh.positions[copy])
        assert np.array_equal(mesh.normals[original], mesh.normals[copy])

    mesh.positions[cloned[0]][0] = 10.0
    assert mesh.positions[cell[0]][0] == -0.5, "Clone shares storage with the original"
    print("✓ clone: +1 cell, +4 owned positions")


def test_clone_cells_keeps_shared_edge():
    """Two cells sharing an edge clone into 6 new positions, not 8."""
    mesh, cell = create_quad()
    other = split_vertical(mesh, cell, 0.5)
    n_before = mesh.n_positions

    cloned = clone_cells(mesh, [cell, other])
    assert_consistent(mesh)

    assert mesh.n_positions - n_before == 6, f"Added {mesh.n_positions - n_before} positions"
    assert cloned == [[6, 7, 8, 9], [9, 8, 10, 11]]
    assert len(set(cloned[0]) & set(cloned[1])) == 2, "Cloned pair lost its shared edge"
    print("✓ clone_cells: shared edge survives, 6 new positions")


def test_flip():
    """flip reverses winding in place and negates the 4 normals."""
    mesh, cell = create_quad()
    result = flip(mesh, cell)

    assert result is cell
    assert cell == [3, 2, 1, 0]
    assert np.allclose(get_cell_normal(mesh, cell), -UP)
    for normal in mesh.normals:
        assert np.allclose(normal, -UP)
    print("✓ flip: winding reversed, normals negated")


def test_mirror_single_cell():
    """Mirrored cell has reversed winding and a negated x coordinate."""
    corners = [[1, 2, 3], [1, 3, 3], [2, 3, 3], [2, 2, 3]]
    mesh, cell = create_quad(positions=corners)
    mirrored = mirror(mesh, [cell], axis=0)
    assert_consistent(mesh)

    assert len(mirrored) == 1
    assert mirrored[0] == [7, 6, 5, 4], f"Mirrored cell {mirrored[0]}"
    assert np.array_equal(mesh.positions[mirrored[0][3]], [-1, 2, 3])
    assert np.allclose(get_cell_normal(mesh, mirrored[0]), get_cell_normal(mesh, cell))
    print("✓ mirror(axis=0): [3', 2', 1', 0'], position 0' = [-1, 2, 3]")


def test_mirror_box_memoised():
    """Mirroring a whole box copies each shared corner once and reflects normals."""
    mesh = create_box()
    originals = list(mesh.cells)
    face_normals = [get_cell_normal(mesh, cell) for cell in originals]

    mirrored = mirror(mesh, originals, axis=2)
    assert_consistent(mesh)

    assert mesh.n_positions == 16, "Shared corners should be copied once"
    assert mesh.n_cells == 12
    reflect = np.array([1.0, 1.0, -1.0])
    for cell, normal in zip(mirrored, face_normals):
        assert np.allclose(get_cell_normal(mesh, cell), normal * reflect), \
            f"Mirrored face {cell} points the wrong way"
    print("✓ mirror(box, axis=2): 8 new positions, reflected normals")


# =============================================================================
# TEST C: Inset
# =============================================================================

def test_inset():
    """Joined inset: 4 new positions, ring of 4 cells around the target."""
    mesh, cell = create_quad()
    result = inset(mesh, cell, 0.5)
    assert_consistent(mesh)

    assert len(result) == 5
    assert result[4] is cell
    assert cell == [4, 5, 6, 7]
    assert result[:4] == [[0, 1, 5, 4], [5, 1, 2, 6], [7, 6, 2, 3], [0, 4, 7, 3]]
    assert mesh.n_cells == 5

    for index in range(4):
        assert np.allclose(mesh.positions[4 + index], mesh.positions[index] * 0.5)

    for ring_cell in result:
        assert np.allclose(get_cell_normal(mesh, ring_cell), UP), f"Ring cell {ring_cell} flipped"
    print("✓ inset(t=0.5): target halved, ring faces up")


def test_inset_full_collapses_to_centroid():
    """t=1 collapses the target onto the centroid."""
    mesh, cell = create_quad()
    inset(mesh, cell, 1.0)
    for index in cell:
        assert np.allclose(mesh.positions[index], np.zeros(3))
    print("✓ inset(t=1): target at centroid")


def test_inset_disjoint():
    """Disjoint inset: 16 new positions, every index used exactly once."""
    mesh, cell = create_quad()
    result = inset_disjoint(mesh, cell, 0.5)
    assert_consistent(mesh)

    assert mesh.n_positions == 20
    assert len(result) == 5
    assert result[4] is cell

    used = [index for c in result for index in c]
    assert sorted(used) == list(range(20)), "Disjoint inset cells share positions"

    for index, corner in zip(cell, range(4)):
        assert np.allclose(mesh.positions[index], mesh.positions[corner] * 0.5)
    for c in result:
        assert np.allclose(get_cell_normal(mesh, c), UP)
    print("✓ inset_disjoint: 20 positions, 5 independent cells")


# =============================================================================
# TEST D: Extrude
# =============================================================================

def test_extrude_translates_once():
    """Each lifted position moves exactly `distance` along the normal."""
    mesh, cell = create_quad()
    result = extrude(mesh, cell, 0.5, 2.0)
    assert_consistent(mesh)

    assert mesh.n_positions == 8
    assert mesh.n_cells == 5
    for index in range(4):
        assert mesh.positions[index][1] == 0.0, "Outer corner moved"
    for index in cell:
        assert mesh.positions[index][1] == 2.0, \
            f"Position {index} lifted to {mesh.positions[index][1]}, expected 2.0"

    assert np.allclose(get_cell_normal(mesh, result[4]), UP)
    print("✓ extrude(0.5, 2): target lifted once to y=2")


def test_extrude_normals_are_averaged():
    """After extrude every normal equals a full recompute."""
    mesh, cell = create_quad()
    extrude(mesh, cell, 0.5, 2.0)
    expected = compute_normals(mesh.copy()).normals

    for i, (normal, target) in enumerate(zip(mesh.normals, expected)):
        assert np.allclose(normal, target), f"Normal {i}: {normal} != {target}"
        assert np.isclose(np.linalg.norm(normal), 1.0)
    print("✓ extrude: normals match compute_normals")


def test_extrude_box_top():
    """Extruding the top of a box adds 4 positions and 4 cells."""
    mesh = create_box()
    top = mesh.cells[0]
    extrude(mesh, top, 0.5, 1.0)
    assert_consistent(mesh)

    assert mesh.n_positions == 12
    assert mesh.n_cells == 10
    for index in top:
        assert np.isclose(mesh.positions[index][1], 1.5)

    expected = compute_normals(mesh.copy()).normals
    assert np.allclose(np.array(mesh.normals), np.array(expected))
    print("✓ extrude(box top): 12 positions, 10 cells")


def test_extrude_degenerate_has_no_nan():
    """Zero inset and zero distance leave zero-area ring cells but finite normals."""
    mesh, cell = create_quad()
    extrude(mesh, cell, 0.0, 0.0)
    normals = np.array(mesh.normals)
    assert not np.isnan(normals).any(), "NaN normal after degenerate extrude"
    print("✓ extrude(0, 0): no NaN")


def test_extrude_disjoint():
    """Disjoint extrude: flat normals per cell, target lifted."""
    mesh, cell = create_quad()
    result = extrude_disjoint(mesh, cell, 0.25, 1.0)
    assert_consistent(mesh)

    assert mesh.n_positions == 20
    for index in cell:
        assert mesh.positions[index][1] == 1.0

    for c in result:
        face = get_cell_normal(mesh, c)
        assert np.isclose(np.linalg.norm(face), 1.0)
        for index in c:
            assert np.allclose(mesh.normals[index], face), f"Cell {c}: normal not flat"
    print("✓ extrude_disjoint: flat-shaded walls and cap")
