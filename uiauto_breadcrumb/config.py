# uiauto_breadcrumb/config.py
"""
@file config.py
@brief Centralized geometry threshold configuration for the resolver.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

from .exceptions import ConfigError
from .layout import LAYOUT_FIELDS, build_preset_values, list_presets


class LayoutConfig:
    """
    Geometry thresholds used by every resolver pass.

    Deterministic precedence is applied per run via build/install APIs:
      base defaults -> preset -> CLI overrides
    """

    _default_instance: Optional[LayoutConfig] = None
    _local = threading.local()
    _lock = threading.Lock()

    same_row_threshold: int
    max_horizontal_distance: int
    min_indent_diff: int
    title_search_depth: int

    def __init__(self, preset: Optional[str] = None):
        self.preset = preset or "default"
        try:
            values = build_preset_values(self.preset)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        self._apply_values(values)

    @classmethod
    def _fields(cls) -> Dict[str, int]:
        return LAYOUT_FIELDS

    def _apply_values(self, values: Dict[str, Any]) -> None:
        for name in self._fields():
            if name not in values:
                raise ConfigError(f"Missing layout setting for {name}")
            setattr(self, name, _coerce(name, values[name]))

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self._fields()}

    def clone(self) -> LayoutConfig:
        """Return a deep clone of this config."""
        clone = LayoutConfig()
        clone.preset = self.preset
        clone._apply_values(self.to_dict())
        return clone

    def __repr__(self) -> str:
        settings = ", ".join(f"{k}={v}" for k, v in self.to_dict().items())
        return f"LayoutConfig(preset={self.preset!r}, {settings})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LayoutConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @classmethod
    def build_from(
        cls,
        *,
        preset: str = "default",
        overrides: Optional[Dict[str, Any]] = None,
    ) -> LayoutConfig:
        """Build a deterministic run-scope config snapshot."""
        cfg = cls(preset)
        if overrides:
            _apply_overrides(cfg, overrides)
        return cfg

    @classmethod
    def default(cls) -> LayoutConfig:
        """Get the process default configuration (singleton)."""
        if cls._default_instance is None:
            with cls._lock:
                if cls._default_instance is None:
                    cls._default_instance = cls()
        return cls._default_instance

    @classmethod
    def install_run_config(cls, config: LayoutConfig) -> None:
        """Install per-thread run configuration snapshot."""
        cls._local.run_config = config

    @classmethod
    def clear_run_config(cls) -> None:
        """Clear per-thread run configuration snapshot."""
        cls._local.run_config = None

    @classmethod
    def current(cls) -> LayoutConfig:
        """Get the current effective configuration."""
        override = getattr(cls._local, "override", None)
        if override is not None:
            return override

        run_cfg = getattr(cls._local, "run_config", None)
        if run_cfg is not None:
            return run_cfg

        return cls.default()

    @classmethod
    @contextmanager
    def override(cls, **kwargs: Any) -> Generator[LayoutConfig, None, None]:
        """Context manager for temporary configuration overrides."""
        previous = getattr(cls._local, "override", None)
        new_config = cls.current().clone()
        _apply_overrides(new_config, kwargs)

        cls._local.override = new_config
        try:
            yield new_config
        finally:
            cls._local.override = previous

    @classmethod
    def reset_to_defaults(cls) -> None:
        """Reset default and clear all thread-local config state."""
        with cls._lock:
            cls._default_instance = cls()
        cls._local.override = None
        cls._local.run_config = None


def _coerce(name: str, value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid layout setting for {name}: {value!r}") from e
    if number <= 0:
        raise ConfigError(f"Layout setting {name} must be positive, got {number}")
    return number


def _apply_overrides(config: LayoutConfig, overrides: Dict[str, Any]) -> None:
    for key, value in overrides.items():
        if value is None:
            continue
        if key not in config._fields():
            raise ConfigError(f"Unknown LayoutConfig field: {key}")
        setattr(config, key, _coerce(key, value))


def available_presets() -> Dict[str, Dict[str, Any]]:
    return list_presets()
