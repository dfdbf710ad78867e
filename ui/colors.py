"""
Fill level to color. Empty cells are dark soil; creep runs from a deep violet
through magenta to a pale hot pink as cells fill up.
"""

import numpy as np

SOIL = np.array([0.08, 0.07, 0.06], dtype=np.float64)

# Creep gradient: soil → deep violet → magenta → hot pink → pale pink
_CREEP_STOPS = np.array([
    [0.08, 0.07, 0.06], [0.22, 0.06, 0.3], [0.5, 0.1, 0.55],
    [0.85, 0.25, 0.6], [1.0, 0.8, 0.9],
], dtype=np.float64)
_CREEP_T = np.array([0.0, 0.2, 0.5, 0.8, 1.0], dtype=np.float64)


def _apply_gradient(t: np.ndarray, stops: np.ndarray, t_vals: np.ndarray) -> np.ndarray:
    """Map t in [0,1] to RGB via piecewise-linear stops. t 1D, returns (n, 3)."""
    t = np.clip(np.asarray(t, dtype=np.float64).reshape(-1), 0.0, 1.0)
    out = np.zeros((t.size, 3), dtype=np.float64)
    for i in range(len(t_vals) - 1):
        t0, t1 = t_vals[i], t_vals[i + 1]
        mask = (t >= t0) & (t < t1) if i < len(t_vals) - 2 else (t >= t0)
        s = np.where(mask, (t - t0) / max(1e-9, t1 - t0), 0.0)
        s1 = s[mask].reshape(-1, 1)
        out[mask] = s1 * stops[i + 1] + (1.0 - s1) * stops[i]
    return out


def fill_to_rgb(levels: np.ndarray) -> np.ndarray:
    """(nx, nz) fill levels → (nx, nz, 3) uint8 RGB. Fill is already in [0, 1]; no normalization."""
    nx, nz = levels.shape
    rgb = _apply_gradient(levels.reshape(-1), _CREEP_STOPS, _CREEP_T).reshape(nx, nz, 3)
    return (np.clip(rgb, 0, 1) * 255).astype(np.uint8)


def soil_rgb() -> tuple[int, int, int]:
    r, g, b = (SOIL * 255).astype(np.uint8)
    return int(r), int(g), int(b)
