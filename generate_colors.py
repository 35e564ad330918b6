#!/usr/bin/env python3
"""
Generate visually distinct colors from a perceptual color lattice.

Colors are modeled along three opponent axes: green-magenta, red-cyan and
blue-yellow. A cube of evenly spaced nodes is laid over that space, nodes
close to the achromatic diagonal are skipped as low contrast, and a random
sample of the remaining nodes is mapped back to RGB.
"""

import argparse
import math
import sys
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np


# =============================================================================
# Constants
# =============================================================================

CHANNEL_MAX = 255  # Largest 8-bit channel value
OPAQUE = 255  # Alpha for every generated color

# The skipped band around the diagonal is 1/DIAGONAL_BAND of the edge thick.
# A thickness of 1/6 reduces the node count cubic to n^3 - n^2.
DIAGONAL_BAND = 6

NON_POSITIVE_COUNT = "Asked for a non-positive number of colors"


# =============================================================================
# Errors
# =============================================================================

class InvalidArgument(ValueError):
    """Raised when a non-positive number of colors is requested."""


class PaletteInvariantError(RuntimeError):
    """Raised when the lattice runs out of acceptable nodes mid-walk."""


# =============================================================================
# Data
# =============================================================================

@dataclass(frozen=True)
class RGBColor:
    """An opaque 8-bit RGB color."""
    r: int
    g: int
    b: int
    a: int = OPAQUE

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def as_tuple(self) -> tuple:
        return (self.r, self.g, self.b, self.a)


# =============================================================================
# Lattice Geometry
# =============================================================================

def coordinates_from_index(index, edge: int) -> tuple:
    """
    Convert a flat index into (x, y, z) for a cube with `edge` nodes per side.

    Accepts a plain int or a numpy integer array of indices.
    """
    x = index // (edge * edge)
    remainder = index - x * edge * edge
    y = remainder // edge
    z = remainder - y * edge
    return x, y, z


def skip_threshold(edge: int) -> int:
    """Minimum pairwise coordinate distance for a node to count as colorful."""
    return math.ceil(edge / DIAGONAL_BAND)


def is_acceptable(coord: tuple, edge: int) -> bool:
    """True if the node is far enough from the diagonal x == y == z."""
    x, y, z = coord
    threshold = skip_threshold(edge)
    return abs(x - y) >= threshold or abs(y - z) >= threshold or abs(x - z) >= threshold


def acceptance_mask(edge: int) -> np.ndarray:
    """Boolean mask over all flat indices of the cube, True where acceptable."""
    x, y, z = coordinates_from_index(np.arange(edge ** 3), edge)
    threshold = skip_threshold(edge)
    return (
        (np.abs(x - y) >= threshold)
        | (np.abs(y - z) >= threshold)
        | (np.abs(x - z) >= threshold)
    )


def count_acceptable_nodes(edge: int) -> int:
    """Number of cube nodes that survive the diagonal filter."""
    return int(acceptance_mask(edge).sum())


def closed_form_edge(count: int) -> int:
    """
    Edge estimate from the node count model.

    With band thickness L the usable node count is modeled by
    n^3 - 6Ln^2 + (6L-1)n. Choosing L = 1/6 leaves n^3 - n^2 = count, solved
    in closed form (Cardano) and rounded up.
    """
    delta = np.cbrt((math.sqrt(27 * 27 * count * count + 27 * 4 * count) + 27 * count + 2) / 2)
    return int(math.ceil((delta + 1 / delta + 1) / 3))


def solve_edge(count: int) -> int:
    """
    Find how many nodes per side the cube needs to cover `count` colors.

    The model behind closed_form_edge() is an approximation: for some edges
    (13 is the first) the real number of acceptable nodes falls a little
    short of n^3 - n^2, so the estimate is grown until the cube actually
    holds enough nodes. Never returns less than 2.

    Raises:
        InvalidArgument: If count is not positive
    """
    if count <= 0:
        raise InvalidArgument(NON_POSITIVE_COUNT)

    edge = closed_form_edge(count)
    while count_acceptable_nodes(edge) < count:
        edge += 1

    return edge


# =============================================================================
# Color Conversion
# =============================================================================

def rotate_color_space(green_magenta, red_cyan, blue_yellow) -> tuple:
    """
    Convert a color from the opponent-axis model to (red, green, blue).

    Each RGB channel is the mean of the two axes that contribute to it,
    truncated. Works elementwise on numpy arrays.
    """
    red = (green_magenta + blue_yellow) // 2
    green = (red_cyan + blue_yellow) // 2
    blue = (green_magenta + red_cyan) // 2
    return red, green, blue


def node_step(edge: int) -> int:
    """Channel distance between neighboring nodes; 0 for a single-node cube."""
    if edge <= 1:
        return 0
    return CHANNEL_MAX // (edge - 1)


# =============================================================================
# Palette Generation
# =============================================================================

def generate_palette(
    count: int,
    rng: Optional[Union[np.random.Generator, int]] = None,
) -> list[RGBColor]:
    """
    Generate `count` visually distinct opaque colors.

    Args:
        count: Number of colors to generate
        rng: numpy Generator, integer seed, or None for a freshly seeded source

    Returns:
        List of RGBColor in the order their lattice nodes were drawn

    Raises:
        InvalidArgument: If count is not positive
        PaletteInvariantError: If the cube holds fewer acceptable nodes than
            requested (guarded against by solve_edge)
    """
    if count <= 0:
        raise InvalidArgument(NON_POSITIVE_COUNT)

    rng = np.random.default_rng(rng)

    edge = solve_edge(count)
    step = node_step(edge)
    mask = acceptance_mask(edge)

    # Walk a random permutation of the cube, keeping nodes off the diagonal
    order = rng.permutation(edge ** 3)
    accepted = order[mask[order]][:count]
    if len(accepted) < count:
        raise PaletteInvariantError(
            f"Cube of edge {edge} has {len(accepted)} acceptable nodes, "
            f"{count} requested"
        )

    x, y, z = coordinates_from_index(accepted, edge)
    red, green, blue = rotate_color_space(x * step, y * step, z * step)
    rgb = np.clip(np.column_stack([red, green, blue]), 0, CHANNEL_MAX).astype(np.uint8)

    return [RGBColor(int(r), int(g), int(b)) for r, g, b in rgb]


# =============================================================================
# Command Line
# =============================================================================

def format_color(color: RGBColor, fmt: str) -> str:
    """Render a color for terminal output."""
    if fmt == 'rgb':
        return f"{color.r} {color.g} {color.b}"
    return color.hex


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(
        description='Generate visually distinct colors.'
    )
    parser.add_argument(
        'count',
        type=int,
        help='Number of colors to generate'
    )
    parser.add_argument(
        '--seed', '-s',
        type=int,
        default=None,
        help='Seed for a reproducible palette'
    )
    parser.add_argument(
        '--format', '-f',
        choices=['hex', 'rgb'],
        default='hex',
        help='Output as #rrggbb (default) or space-separated channels'
    )

    args = parser.parse_args(argv)

    try:
        palette = generate_palette(args.count, rng=args.seed)
    except InvalidArgument as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    for color in palette:
        print(format_color(color, args.format))

    return 0


if __name__ == '__main__':
    sys.exit(main())
