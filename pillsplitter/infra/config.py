"""Splitter configuration and env loading."""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from pillsplitter.core.models import DEFAULT_PALETTE

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SplitterConfig:
    """Immutable canvas interaction configuration."""

    min_size_to_draw: float = 20.0
    min_size_to_split: float = 30.0
    adjust_gap: float = 2.0
    tap_distance_threshold: float = 4.0
    tap_time_threshold_ms: float = 300.0
    palette: tuple[str, ...] = field(default_factory=lambda: DEFAULT_PALETTE)
    shape_radius: float = 14.0
    initial_cursor: tuple[float, float] = (200.0, 200.0)

    def __post_init__(self) -> None:
        numbers = (
            self.min_size_to_draw,
            self.min_size_to_split,
            self.adjust_gap,
            self.tap_distance_threshold,
            self.tap_time_threshold_ms,
            self.shape_radius,
        )
        if not all(math.isfinite(value) for value in numbers):
            raise ValueError("numeric settings must be finite")
        if self.min_size_to_draw <= 0:
            raise ValueError("min_size_to_draw must be > 0")
        if self.min_size_to_split <= 0:
            raise ValueError("min_size_to_split must be > 0")
        if self.adjust_gap < 0:
            raise ValueError("adjust_gap must be >= 0")
        if self.tap_distance_threshold < 0:
            raise ValueError("tap_distance_threshold must be >= 0")
        if self.tap_time_threshold_ms < 0:
            raise ValueError("tap_time_threshold_ms must be >= 0")
        if not self.palette:
            raise ValueError("palette must not be empty")
        if self.shape_radius < 0:
            raise ValueError("shape_radius must be >= 0")


def _float(name: str, default: float, *, positive: bool = False) -> float:
    """Read a finite number; out-of-range or unparsable values fall back to ``default``."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    too_small = value <= 0 if positive else value < 0
    if not math.isfinite(value) or too_small:
        logger.warning("config_invalid_number name=%s value=%r default=%s", name, raw, default)
        return default
    return value


def _csv(name: str) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return ()
    values = [part.strip() for part in raw.split(",")]
    return tuple(value for value in values if value)


def load_splitter_config() -> SplitterConfig:
    """Load splitter configuration from ``PILLS_*`` env vars."""
    defaults = SplitterConfig()
    config = SplitterConfig(
        min_size_to_draw=_float("PILLS_MIN_SIZE_TO_DRAW", defaults.min_size_to_draw, positive=True),
        min_size_to_split=_float("PILLS_MIN_SIZE_TO_SPLIT", defaults.min_size_to_split, positive=True),
        adjust_gap=_float("PILLS_ADJUST_GAP", defaults.adjust_gap),
        tap_distance_threshold=_float("PILLS_TAP_DISTANCE", defaults.tap_distance_threshold),
        tap_time_threshold_ms=_float("PILLS_TAP_TIME_MS", defaults.tap_time_threshold_ms),
        palette=_csv("PILLS_PALETTE") or defaults.palette,
        shape_radius=_float("PILLS_SHAPE_RADIUS", defaults.shape_radius),
    )
    logger.debug(
        "splitter_config min_draw=%s min_split=%s gap=%s tap_distance=%s tap_time_ms=%s palette=%d",
        config.min_size_to_draw,
        config.min_size_to_split,
        config.adjust_gap,
        config.tap_distance_threshold,
        config.tap_time_threshold_ms,
        len(config.palette),
    )
    return config


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = Path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load ``.env`` then ``.env.local``; later files win."""
    to_load = tuple(paths) if paths is not None else (".env", ".env.local")
    for path in to_load:
        load_env_file(path, override_existing=override_existing)
