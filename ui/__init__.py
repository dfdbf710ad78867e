"""UI: grid view, parameter panel and cell inspector."""

from ui.grid_view import cell_at, draw_grid
from ui.panel import ParamPanel
from ui.colors import fill_to_rgb

__all__ = ["cell_at", "draw_grid", "ParamPanel", "fill_to_rgb"]
