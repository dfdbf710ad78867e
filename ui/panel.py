"""Right panel: live sliders (world size, tick rate, spread ranges), play/pause, saved configs, cell inspector."""

import pygame
from typing import Callable

import config

FONT_SIZE = 16
TOOLTIP_FONT_SIZE = 19
TOOLTIP_SMALL_FONT_SIZE = 16
LABEL_COLOR = (200, 200, 200)
SLIDER_COLOR = (100, 100, 100)
KNOB_COLOR = (180, 180, 180)
BUTTON_COLOR = (60, 60, 60)
BUTTON_HOVER = (80, 80, 80)
TOOLTIP_BG = (28, 28, 32)
TOOLTIP_BORDER = (60, 60, 68)
TOOLTIP_TEXT = (240, 240, 235)
TOOLTIP_MINMAX = (150, 150, 148)
TOOLTIP_MAX_WIDTH = 220
TOOLTIP_PAD = 6
LINE_H = 18
GAP = 4
BTN_H = 26
DROP_H = 20

# key -> (label, lo, hi, scale). Slider ints are divided by scale to get the param.
SLIDERS = (
    ("nx", "World X", 4, 64, 1),
    ("nz", "World Z", 4, 64, 1),
    ("tick_rate", "Tick rate (1–60)", 1, 60, 1),
    ("max_radius", "Max radius", 1, 8, 1),
    ("amount_min", "Amount min %", 1, 100, 100),
    ("amount_max", "Amount max %", 1, 100, 100),
)
CONFIG_KEYS = ("tick_rate", "max_radius", "amount_min", "amount_max", "seed", "lock_seed", "normalize_normals")

# (description, what the ends of the range mean), keyed by slider.
PARAM_TOOLTIPS = {
    "max_radius": (
        "Largest spread radius picked each tick (radius is drawn from 1 up to this value). "
        "A spread fills a square of half the radius around the origin plus one-cell tips "
        "reaching the full radius along each axis.",
        "Min = single-cell spreads; max = wide square cores with long tips.",
    ),
    "amount": (
        "Range of fill added per hit. Each spread draws an amount uniformly from this range; "
        "cells clamp at full.",
        "Min = slow creep; max = cells saturate within a few hits.",
    ),
    "fill": (
        "Fill level of the selected cell. The top face sinks to this level and pinches inward "
        "mid-fill, relaxing back to a square when empty or full.",
        "0 = empty (flat); 0.5 = most rounded; 1 = full cube.",
    ),
}
TOOLTIP_KEYS = {"max_radius": "max_radius", "amount_min": "amount", "amount_max": "amount", "fill": "fill"}


class ParamPanel:
    """State: params dict; draw and handle events. Save, load, delete, restart and inspector callbacks."""

    def __init__(
        self,
        rect: pygame.Rect,
        initial: dict,
        on_save: Callable[[], None],
        on_restart: Callable[[], None],
        on_set_fill: Callable[[float], None],
        on_regenerate: Callable[[], None],
        on_load_config: Callable[[str], None] | None = None,
        on_delete_config: Callable[[str], None] | None = None,
    ) -> None:
        self.rect = rect
        self.params = {
            "nx": initial.get("nx", 30),
            "nz": initial.get("nz", 30),
            "tick_rate": initial.get("tick_rate", 10),
            "max_radius": initial.get("max_radius", 4),
            "amount_min": initial.get("amount_min", 0.1),
            "amount_max": initial.get("amount_max", 0.3),
            "seed": initial.get("seed", -1),
            "lock_seed": initial.get("lock_seed", False),
            "normalize_normals": initial.get("normalize_normals", False),
            "config_name": initial.get("config_name", ""),
            "paused": True,
        }
        self.on_save = on_save
        self.on_restart = on_restart
        self.on_set_fill = on_set_fill
        self.on_regenerate = on_regenerate
        self.on_load_config = on_load_config
        self.on_delete_config = on_delete_config
        self._font = None
        self._slider_rects: dict = {}
        self._button_rects: dict = {}
        self._tooltip_rects: dict[str, pygame.Rect] = {}
        self._dragging: str | None = None
        self._seed_focus = False
        self._seed_buffer = ""
        self._config_dropdown_rect: pygame.Rect | None = None
        self._config_dropdown_expanded = False
        self._config_option_rects: list[tuple[str, pygame.Rect]] = []
        self._hover_tooltip_text = None
        self._tooltip_font = None
        self._tooltip_small_font = None

    def _ensure_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, FONT_SIZE)
        return self._font

    def _ensure_tooltip_fonts(self) -> tuple[pygame.font.Font, pygame.font.Font]:
        if self._tooltip_font is None:
            self._tooltip_font = pygame.font.Font(None, TOOLTIP_FONT_SIZE)
            self._tooltip_small_font = pygame.font.Font(None, TOOLTIP_SMALL_FONT_SIZE)
        return self._tooltip_font, self._tooltip_small_font

    def get_params(self) -> dict:
        return self.params.copy()

    def draw(
        self,
        surface: pygame.Surface,
        tick_count: int = 0,
        actual_used_seed: int | None = None,
        selected: tuple[int, int] | None = None,
        selected_fill: float | None = None,
        selected_revision: int | None = None,
    ) -> None:
        font = self._ensure_font()
        x, y = self.rect.x + 8, self.rect.y + 6
        self._slider_rects.clear()
        self._button_rects.clear()
        self._tooltip_rects.clear()
        slider_w = self.rect.width - 16 - 44  # leave 44px for value text
        slider_h = 12

        surface.blit(font.render(f"Tick: {tick_count}", True, LABEL_COLOR), (x, y))
        y += LINE_H + GAP

        # Seed (text input): integer or -1 for random each run
        surface.blit(font.render("Seed", True, LABEL_COLOR), (x, y))
        y += LINE_H
        self._seed_rect = pygame.Rect(x, y, 140, 18)
        pygame.draw.rect(surface, SLIDER_COLOR, self._seed_rect)
        if self._seed_focus:
            display_str = self._seed_buffer
        elif self.params["seed"] == -1 and actual_used_seed is not None:
            display_str = f"-1 ({actual_used_seed})"
        else:
            display_str = str(self.params["seed"])
        surface.blit(font.render(display_str[:20], True, LABEL_COLOR), (x + 4, y + 1))
        y += 18 + GAP

        for key, label, lo, hi, scale in SLIDERS:
            row_y = y
            value = int(round(self.params[key] * scale))
            surface.blit(font.render(label, True, LABEL_COLOR), (x, y))
            y += LINE_H
            sr = _draw_slider(surface, x, y, slider_w, slider_h, value, lo, hi)
            _draw_slider_value(surface, font, x + slider_w + 4, y, str(value))
            self._slider_rects[key] = (sr, lo, hi)
            if key in TOOLTIP_KEYS:
                self._tooltip_rects[key] = pygame.Rect(x, row_y, self.rect.width - 16, LINE_H + slider_h + GAP)
            y += slider_h + GAP

        y = self._draw_toggle(surface, font, x, y, "normalize_normals", "Unit normals")

        # Start / Pause / Resume and Restart (side by side), Lock Seed toggle
        if self.params["paused"]:
            text = "Start" if tick_count == 0 else "Resume"
        else:
            text = "Pause"
        self._draw_button(surface, font, pygame.Rect(x, y, 100, BTN_H), "pause", text)
        self._draw_button(surface, font, pygame.Rect(x + 104, y, 110, BTN_H), "restart", "Restart")
        self._draw_toggle(surface, font, x + 220, y + 4, "lock_seed", "Lock Seed")
        y += BTN_H + GAP

        name = self.params.get("config_name") or ""
        self._draw_button(
            surface, font, pygame.Rect(x, y, 214, BTN_H), "save", f"Save config ({(name or 'unnamed')[:12]})"
        )
        if name and config.config_exists(name):
            self._draw_button(surface, font, pygame.Rect(x + 220, y, 60, BTN_H), "delete_config", "Delete")
        y += BTN_H + GAP

        surface.blit(font.render("Saved configs", True, LABEL_COLOR), (x, y))
        y += LINE_H
        dropdown_y = y
        y += DROP_H + 3 * GAP

        y = self._draw_inspector(surface, font, x, y, slider_w, slider_h, selected, selected_fill, selected_revision)

        # Drawn last so the open list overlays the inspector.
        self._draw_config_dropdown(surface, font, x, dropdown_y, 214)

    def _draw_config_dropdown(self, surface, font, x: int, y: int, w: int) -> None:
        self._config_dropdown_rect = pygame.Rect(x, y, w, DROP_H)
        pygame.draw.rect(surface, SLIDER_COLOR, self._config_dropdown_rect)
        current = self.params.get("config_name") or "—"
        surface.blit(font.render(current[:28], True, LABEL_COLOR), (x + 4, y + 3))
        self._config_option_rects.clear()
        if not self._config_dropdown_expanded:
            return
        for i, cfg_name in enumerate(config.list_configs()):
            opt = pygame.Rect(x, y + (i + 1) * DROP_H, w, DROP_H)
            color = BUTTON_HOVER if opt.collidepoint(pygame.mouse.get_pos()) else BUTTON_COLOR
            pygame.draw.rect(surface, color, opt)
            surface.blit(font.render(cfg_name[:28], True, LABEL_COLOR), (opt.x + 4, opt.y + 3))
            self._config_option_rects.append((cfg_name, opt))

    def _draw_inspector(self, surface, font, x, y, slider_w, slider_h, selected, fill, revision) -> int:
        if selected is None or fill is None:
            surface.blit(font.render("Click a cell to inspect it", True, LABEL_COLOR), (x, y))
            return y + LINE_H + GAP
        surface.blit(font.render(f"Cell {selected}  rev {revision}", True, LABEL_COLOR), (x, y))
        y += LINE_H
        row_y = y
        surface.blit(font.render("Fill %", True, LABEL_COLOR), (x, y))
        y += LINE_H
        value = int(round(fill * 100))
        sr = _draw_slider(surface, x, y, slider_w, slider_h, value, 0, 100)
        _draw_slider_value(surface, font, x + slider_w + 4, y, f"{fill:.2f}")
        self._slider_rects["fill"] = (sr, 0, 100)
        self._tooltip_rects["fill"] = pygame.Rect(x, row_y, self.rect.width - 16, LINE_H + slider_h + GAP)
        y += slider_h + GAP
        self._draw_button(surface, font, pygame.Rect(x, y, 110, BTN_H), "regenerate", "Regenerate")
        return y + BTN_H + GAP

    def _draw_button(self, surface, font, rect: pygame.Rect, key: str, text: str) -> None:
        color = BUTTON_HOVER if rect.collidepoint(pygame.mouse.get_pos()) else BUTTON_COLOR
        pygame.draw.rect(surface, color, rect)
        surface.blit(font.render(text, True, LABEL_COLOR), (rect.x + 6, rect.y + 4))
        self._button_rects[key] = rect

    def _draw_toggle(self, surface, font, x: int, y: int, key: str, text: str) -> int:
        box = pygame.Rect(x, y + 2, 14, 14)
        pygame.draw.rect(surface, KNOB_COLOR if self.params[key] else SLIDER_COLOR, box)
        pygame.draw.rect(surface, LABEL_COLOR, box, 1)
        surface.blit(font.render(text, True, LABEL_COLOR), (x + 18, y + 2))
        self._button_rects[key] = box.union(pygame.Rect(x, y, 18 + font.size(text)[0], 18))
        return y + 18 + GAP

    def update_hover_tooltip(self, pos: tuple[int, int]) -> None:
        self._hover_tooltip_text = None
        for key, r in self._tooltip_rects.items():
            if r.collidepoint(pos):
                self._hover_tooltip_text = PARAM_TOOLTIPS.get(TOOLTIP_KEYS[key])
                return

    def draw_tooltip(self, surface: pygame.Surface) -> None:
        if self._hover_tooltip_text is None:
            return
        tf, sf = self._ensure_tooltip_fonts()
        _draw_tooltip(surface, tf, sf, self._hover_tooltip_text, pygame.mouse.get_pos())

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns True if event was consumed."""
        if event.type == pygame.MOUSEBUTTONDOWN:
            if self._config_dropdown_expanded:
                for cfg_name, opt_rect in self._config_option_rects:
                    if opt_rect.collidepoint(event.pos):
                        self._config_dropdown_expanded = False
                        if self.on_load_config is not None:
                            self.on_load_config(cfg_name)
                        return True
            if self._config_dropdown_rect is not None and self._config_dropdown_rect.collidepoint(event.pos):
                self._config_dropdown_expanded = not self._config_dropdown_expanded
                return True
            self._config_dropdown_expanded = False
            if getattr(self, "_seed_rect", None) and self._seed_rect.collidepoint(event.pos):
                self._seed_focus = True
                self._seed_buffer = str(self.params["seed"])
                return True
            if self._seed_focus:
                self._parse_seed_buffer()
            self._seed_focus = False
            for key, (slider_rect, lo, hi) in self._slider_rects.items():
                if slider_rect.collidepoint(event.pos):
                    self._dragging = key
                    self._set_slider_value(key, event.pos, slider_rect, lo, hi)
                    return True
            for key, btn_rect in self._button_rects.items():
                if btn_rect.collidepoint(event.pos):
                    if key == "pause":
                        self.params["paused"] = not self.params["paused"]
                    elif key == "restart":
                        self.on_restart()
                    elif key in ("lock_seed", "normalize_normals"):
                        self.params[key] = not self.params[key]
                    elif key == "save":
                        self.on_save()
                    elif key == "delete_config" and self.on_delete_config is not None:
                        self.on_delete_config(self.params["config_name"])
                    elif key == "regenerate":
                        self.on_regenerate()
                    return True
            return False
        if event.type == pygame.KEYDOWN and self._seed_focus:
            if event.key == pygame.K_RETURN:
                self._seed_focus = False
                self._parse_seed_buffer()
            elif event.key == pygame.K_BACKSPACE:
                self._seed_buffer = self._seed_buffer[:-1]
            elif event.unicode and (event.unicode.isdigit() or (event.unicode == "-" and not self._seed_buffer)):
                self._seed_buffer += event.unicode
            return True
        if event.type == pygame.MOUSEBUTTONUP:
            self._dragging = None
        elif event.type == pygame.MOUSEMOTION:
            self.update_hover_tooltip(event.pos)
            if self._dragging is not None and self._dragging in self._slider_rects:
                sr, lo, hi = self._slider_rects[self._dragging]
                self._set_slider_value(self._dragging, event.pos, sr, lo, hi)
                return True
        return False

    def _parse_seed_buffer(self) -> None:
        s = self._seed_buffer.strip()
        self._seed_buffer = ""
        if not s:
            return
        try:
            self.params["seed"] = int(s)
        except ValueError:
            return

    def apply_config(self, cfg: dict, name: str = "") -> None:
        """Load a config dict into panel params. A locked random seed replays the seed it ran with."""
        world = cfg.get("world", {})
        self.params["nx"] = world.get("nx", self.params["nx"])
        self.params["nz"] = world.get("nz", self.params["nz"])
        for k in CONFIG_KEYS:
            self.params[k] = cfg.get(k, self.params[k])
        if "actual_seed_used" in cfg and cfg.get("lock_seed"):
            self.params["seed"] = cfg["actual_seed_used"]
        self.params["config_name"] = name

    def _set_slider_value(self, key: str, pos: tuple[int, int], slider_rect: pygame.Rect, lo: int, hi: int) -> None:
        t = (pos[0] - slider_rect.x) / max(1, slider_rect.width - 8)
        t = max(0, min(1, t))
        val = int(lo + t * (hi - lo))
        if key == "fill":
            self.on_set_fill(val / 100.0)
            return
        scale = next(s for k, _label, _lo, _hi, s in SLIDERS if k == key)
        self.params[key] = val / scale if scale != 1 else val
        # Keep the amount range ordered.
        if key == "amount_min":
            self.params["amount_max"] = max(self.params["amount_max"], self.params["amount_min"])
        elif key == "amount_max":
            self.params["amount_min"] = min(self.params["amount_min"], self.params["amount_max"])

    def config_dict(self) -> dict:
        out = {"world": {"nx": self.params["nx"], "nz": self.params["nz"]}}
        out.update((k, self.params[k]) for k in CONFIG_KEYS)
        return out


def _draw_slider(
    surface: pygame.Surface, x: int, y: int, w: int, h: int, value: int, vmin: int, vmax: int
) -> pygame.Rect:
    rect = pygame.Rect(x, y, w, h)
    pygame.draw.rect(surface, SLIDER_COLOR, rect)
    t = (value - vmin) / max(1, vmax - vmin)
    knob_x = x + 4 + int(t * (w - 8))
    pygame.draw.rect(surface, KNOB_COLOR, (knob_x, y, 8, h))
    return rect


def _draw_slider_value(
    surface: pygame.Surface, font: pygame.font.Font, x: int, y: int, value_str: str
) -> None:
    text = font.render(value_str, True, LABEL_COLOR)
    surface.blit(text, (x, y))


def wrap_text(text: str, font: pygame.font.Font, max_width: int) -> list[str]:
    """Greedy word wrap; a single word wider than max_width gets its own line."""
    lines: list[str] = []
    for word in text.split():
        if lines and font.size(f"{lines[-1]} {word}")[0] <= max_width:
            lines[-1] = f"{lines[-1]} {word}"
        else:
            lines.append(word)
    return lines


def _draw_tooltip(
    surface: pygame.Surface,
    font: pygame.font.Font,
    small_font: pygame.font.Font,
    tip: tuple[str, str],
    mouse_pos: tuple[int, int],
) -> None:
    desc, ends = tip
    rows = [(line, font, TOOLTIP_TEXT) for line in wrap_text(desc, font, TOOLTIP_MAX_WIDTH)]
    rows += [(line, small_font, TOOLTIP_MINMAX) for line in wrap_text(ends, small_font, TOOLTIP_MAX_WIDTH)]
    box_w = max(f.size(line)[0] for line, f, _c in rows) + 2 * TOOLTIP_PAD
    box_h = sum(f.get_height() for _l, f, _c in rows) + GAP + 2 * TOOLTIP_PAD
    mx, my = mouse_pos
    sw, sh = surface.get_size()
    # Below-right of the cursor, flipped to the other side near the screen edge.
    tx = mx + 12 if mx + 12 + box_w <= sw else mx - 12 - box_w
    ty = my + 8 if my + 8 + box_h <= sh else my - 8 - box_h
    box = pygame.Rect(max(0, min(tx, sw - box_w)), max(0, min(ty, sh - box_h)), box_w, box_h)
    pygame.draw.rect(surface, TOOLTIP_BG, box)
    pygame.draw.rect(surface, TOOLTIP_BORDER, box, 1)
    y = box.y + TOOLTIP_PAD
    for i, (line, f, color) in enumerate(rows):
        if f is small_font and (i == 0 or rows[i - 1][1] is not small_font):
            y += GAP
        surface.blit(f.render(line, True, color), (box.x + TOOLTIP_PAD, y))
        y += f.get_height()
