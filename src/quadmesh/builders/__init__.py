"""Mesh construction - single quads and boxes."""

from .primitives import (
    create_quad,
    create_box_disjoint,
    create_box,
)
