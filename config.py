"""Load/save run parameters. Configs live in configs/ as {name}.json; grid state is never saved."""

import json
import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent / "configs"
LAST_FILE = CONFIG_DIR / "last.txt"

# In-memory index of names so we avoid disk access for exists/dropdown.
_CONFIG_INDEX: set[str] = set()

_TOP_LEVEL_KEYS = (
    "tick_rate", "max_radius", "amount_min", "amount_max",
    "seed", "lock_seed", "actual_seed_used", "normalize_normals",
)


def refresh_index() -> None:
    """Rebuild _CONFIG_INDEX from disk. Call at startup and after external changes."""
    global _CONFIG_INDEX
    _CONFIG_INDEX = set()
    if not CONFIG_DIR.exists():
        return
    for f in CONFIG_DIR.glob("*.json"):
        _CONFIG_INDEX.add(f.stem)


def _sanitize_name(name: str) -> str:
    s = (name or "").strip()
    s = re.sub(r"[^\w\s-]", "", s)
    s = re.sub(r"[\s-]+", "_", s).strip("_")
    return s[:64] or "unnamed"


def get_config_path(name: str) -> Path:
    return CONFIG_DIR / f"{_sanitize_name(name)}.json"


def list_configs() -> list[str]:
    """Saved config names, from the in-memory index."""
    return sorted(_CONFIG_INDEX, key=str.lower)


def config_exists(name: str) -> bool:
    return _sanitize_name(name) in _CONFIG_INDEX


def get_last_config() -> str | None:
    if not LAST_FILE.exists():
        return None
    try:
        raw = LAST_FILE.read_text().strip()
    except OSError:
        return None
    return raw or None


def set_last_config(name: str) -> None:
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    LAST_FILE.write_text(_sanitize_name(name))


def load_config(path: Path | str | None = None) -> dict:
    """Config at path, else the last saved one, else defaults. Unreadable files fall back to defaults."""
    if path is None:
        last = get_last_config()
        if last is None:
            return _default_config()
        path = get_config_path(last)
    p = Path(path)
    if not p.exists():
        return _default_config()
    try:
        with open(p, "r") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", p, exc)
        return _default_config()
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: expected an object, got %s", p, type(data).__name__)
        return _default_config()
    return _merge_defaults(data)


def save_config(params: dict, name: str) -> Path:
    """Write params as {name}.json and remember it as the last config."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    path = get_config_path(name)
    with open(path, "w") as f:
        json.dump(params, f, indent=2)
    set_last_config(name)
    _CONFIG_INDEX.add(_sanitize_name(name))
    logger.info("saved config %s", path)
    return path


def delete_config(name: str) -> None:
    """Remove config from disk and index. Clear last if this was last."""
    key = _sanitize_name(name)
    _CONFIG_INDEX.discard(key)
    get_config_path(name).unlink(missing_ok=True)
    if get_last_config() == key:
        LAST_FILE.unlink(missing_ok=True)


def _default_config() -> dict:
    return {
        "world": {"nx": 30, "nz": 30},
        "tick_rate": 10,
        "max_radius": 4,
        "amount_min": 0.1,
        "amount_max": 0.3,
        "seed": -1,
        "lock_seed": False,
        "normalize_normals": False,
    }


def _merge_defaults(data: dict) -> dict:
    d = _default_config()
    if isinstance(data.get("world"), dict):
        d["world"] = {**d["world"], **data["world"]}
    for k in _TOP_LEVEL_KEYS:
        if k in data:
            d[k] = data[k]
    return d
