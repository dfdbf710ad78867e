"""
App shell: display and main loop. Spreads are tick-driven from elapsed time and
tick_rate (independent of frame rate). World, UI, and config are wired here.
"""

import logging

import pygame

from world.spreader import CreepSpreader
from ui.grid_view import cell_at, draw_grid
from ui.panel import ParamPanel
import config

logger = logging.getLogger(__name__)

TITLE = "Creep"
WIDTH, HEIGHT = 960, 640
BACKGROUND = (0, 0, 0)
GRID_PANEL_WIDTH = 640  # left panel for grid


def _make_spreader(params: dict, seed: int) -> CreepSpreader:
    return CreepSpreader(
        nx=params["nx"],
        nz=params["nz"],
        seed=seed,
        radius_range=(1, params["max_radius"] + 1),
        amount_range=(params["amount_min"], params["amount_max"]),
        normalize_normals=params["normalize_normals"],
    )


def run() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(TITLE)
    clock = pygame.time.Clock()
    config.refresh_index()

    cfg = config.load_config()
    seed = cfg.get("seed", -1)
    if cfg.get("lock_seed") and seed == -1 and "actual_seed_used" in cfg:
        seed = cfg["actual_seed_used"]

    grid_rect = pygame.Rect(0, 0, GRID_PANEL_WIDTH, HEIGHT)
    panel_rect = pygame.Rect(GRID_PANEL_WIDTH, 0, WIDTH - GRID_PANEL_WIDTH, HEIGHT)
    selected: tuple[int, int] | None = None
    spreader: CreepSpreader | None = None

    def do_restart() -> None:
        nonlocal spreader, selected
        params = panel.get_params()
        s = params.get("seed", -1)
        if s == -1 and params.get("lock_seed") and spreader is not None:
            s = spreader.seed_used
        spreader = _make_spreader(params, s)
        selected = None

    def save_current_config() -> None:
        params = panel.get_params()
        name = (params.get("config_name") or "").strip() or "unnamed"
        out = panel.config_dict()
        out["actual_seed_used"] = spreader.seed_used
        config.save_config(out, name)

    def set_selected_fill(value: float) -> None:
        if selected is not None:
            spreader.set_fill(*selected, value)

    def regenerate_selected() -> None:
        if selected is not None:
            spreader.regenerate(*selected)

    def load_saved_config(name: str) -> None:
        cfg = config.load_config(config.get_config_path(name))
        panel.apply_config(cfg, name)
        config.set_last_config(name)
        logger.info("loaded config %s", name)
        do_restart()

    def delete_saved_config(name: str) -> None:
        config.delete_config(name)
        panel.params["config_name"] = ""
        logger.info("deleted config %s", name)

    panel = ParamPanel(
        panel_rect,
        {
            "nx": cfg["world"].get("nx", 30),
            "nz": cfg["world"].get("nz", 30),
            "tick_rate": cfg.get("tick_rate", 10),
            "max_radius": cfg.get("max_radius", 4),
            "amount_min": cfg.get("amount_min", 0.1),
            "amount_max": cfg.get("amount_max", 0.3),
            "seed": seed,
            "lock_seed": cfg.get("lock_seed", False),
            "normalize_normals": cfg.get("normalize_normals", False),
            "config_name": config.get_last_config() or "",
        },
        on_save=save_current_config,
        on_restart=do_restart,
        on_set_fill=set_selected_fill,
        on_regenerate=regenerate_selected,
        on_load_config=load_saved_config,
        on_delete_config=delete_saved_config,
    )
    spreader = _make_spreader(panel.get_params(), seed)

    tick_accum = 0.0
    running = True

    while running:
        dt_ms = clock.tick(60)
        dt_s = dt_ms / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            if panel.handle_event(event):
                continue
            if event.type == pygame.MOUSEBUTTONDOWN and grid_rect.collidepoint(event.pos):
                selected = cell_at(grid_rect, spreader.shape, event.pos)

        params = panel.get_params()
        # Live world size or normals mode: rebuild the spreader with the same seed
        if (params["nx"], params["nz"]) != spreader.shape or (
            params["normalize_normals"] != spreader.cell(0, 0).normalize_normals
        ):
            logger.info("rebuilding grid %dx%d", params["nx"], params["nz"])
            spreader = _make_spreader(params, spreader.seed_used)
            selected = None
        spreader.radius_range = (1, params["max_radius"] + 1)
        spreader.amount_range = (params["amount_min"], params["amount_max"])

        if not params["paused"]:
            tick_rate = max(1, min(60, params["tick_rate"]))
            tick_accum += dt_s * tick_rate
            # Cap ticks per frame so we never freeze when tick rate exceeds what we can do
            max_ticks_per_frame = max(4, tick_rate // 10)
            num_ticks = min(int(tick_accum), max_ticks_per_frame)
            tick_accum -= num_ticks
            tick_accum = min(tick_accum, max_ticks_per_frame)  # prevent unbounded backlog
            for _ in range(num_ticks):
                spreader.tick()

        screen.fill(BACKGROUND)
        draw_grid(screen, grid_rect, spreader.grid, selected)
        cell = spreader.cell(*selected) if selected is not None else None
        panel.draw(
            screen,
            tick_count=spreader.tick_count,
            actual_used_seed=spreader.seed_used,
            selected=selected,
            selected_fill=cell.fill_level if cell is not None else None,
            selected_revision=cell.revision if cell is not None else None,
        )
        panel.draw_tooltip(screen)
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    run()
