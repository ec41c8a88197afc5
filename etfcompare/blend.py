from __future__ import annotations

import numpy as np
import pandas as pd


def _pair(a, b) -> tuple[np.ndarray, np.ndarray]:
    ra = np.asarray(a, dtype=float)
    rb = np.asarray(b, dtype=float)
    if ra.shape != rb.shape:
        raise ValueError(f"Length mismatch: {ra.shape[0]} vs {rb.shape[0]} periods")
    return ra, rb


def _like(template, values: np.ndarray, name: str):
    if isinstance(template, pd.Series):
        return pd.Series(values, index=template.index, name=name)
    return values


def blend_returns(a, b, weight: float):
    """Constant-weight blend: ``a * weight + b * (1 - weight)``."""
    ra, rb = _pair(a, b)
    w = float(weight)
    return _like(a, ra * w + rb * (1.0 - w), "fixed_blend")


def glide_weights(count: int, start: float, end: float) -> np.ndarray:
    # Interpolated over position in the aligned sequence, not over calendar time.
    if count <= 1:
        return np.array([float(end)])
    return np.linspace(float(start), float(end), int(count))


def glide_blend(a, b, weights):
    ra, rb = _pair(a, b)
    w = np.asarray(weights, dtype=float)
    if w.shape != ra.shape:
        raise ValueError(f"Length mismatch: {w.shape[0]} weights for {ra.shape[0]} periods")
    return _like(a, ra * w + rb * (1.0 - w), "glide_blend")
