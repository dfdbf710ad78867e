"""Left panel: top-down grid; each cell draws its mesh's top face, colored by fill."""

import pygame
import numpy as np

from ui.colors import fill_to_rgb, soil_rgb
from world.geometry import top_outline
from world.grid import Grid

BORDER_COLOR = (80, 80, 80)
BORDER_PX = 1
SELECT_COLOR = (240, 240, 120)
SELECT_PX = 2


def _cell_size(rect: pygame.Rect, nx: int, nz: int) -> tuple[int, int]:
    return max(1, rect.width // nx), max(1, rect.height // nz)


def cell_rect(rect: pygame.Rect, shape: tuple[int, int], x: int, z: int) -> pygame.Rect:
    """Screen rect of cell (x, z). x grows right, z grows up the screen."""
    nx, nz = shape
    cell_w, cell_h = _cell_size(rect, nx, nz)
    return pygame.Rect(rect.x + x * cell_w, rect.y + (nz - 1 - z) * cell_h, cell_w, cell_h)


def cell_at(rect: pygame.Rect, shape: tuple[int, int], pos: tuple[int, int]) -> tuple[int, int] | None:
    """Grid cell under a screen position, or None outside the grid."""
    nx, nz = shape
    cell_w, cell_h = _cell_size(rect, nx, nz)
    px, py = pos[0] - rect.x, pos[1] - rect.y
    if px < 0 or py < 0:
        return None
    x = px // cell_w
    z = nz - 1 - py // cell_h
    if 0 <= x < nx and 0 <= z < nz:
        return int(x), int(z)
    return None


def _outline_points(r: pygame.Rect, outline: np.ndarray) -> list[tuple[float, float]]:
    # Mesh x/z in [0, 1] → screen; forward (z = 1) is the top edge of the cell.
    return [(r.x + u * r.width, r.y + (1.0 - v) * r.height) for u, v in outline]


def draw_grid(
    surface: pygame.Surface,
    grid_rect: pygame.Rect,
    grid: Grid,
    selected: tuple[int, int] | None = None,
) -> None:
    """Draw every cell: soil square, then the top face of its current mesh."""
    nx, nz = grid.shape
    if nx == 0 or nz == 0:
        return
    rgb = fill_to_rgb(grid.fill_levels())
    soil = soil_rgb()
    for x, z, cell in grid:
        r = cell_rect(grid_rect, grid.shape, x, z)
        pygame.draw.rect(surface, soil, r)
        if cell.fill_level <= 0.0:
            continue
        color = (int(rgb[x, z, 0]), int(rgb[x, z, 1]), int(rgb[x, z, 2]))
        mesh = getattr(cell, "mesh", None)
        if mesh is None:
            pygame.draw.rect(surface, color, r)
        else:
            pygame.draw.polygon(surface, color, _outline_points(r, top_outline(mesh)))
    if selected is not None and grid.in_bounds(*selected):
        pygame.draw.rect(surface, SELECT_COLOR, cell_rect(grid_rect, grid.shape, *selected), SELECT_PX)
    pygame.draw.rect(surface, BORDER_COLOR, grid_rect, BORDER_PX)
