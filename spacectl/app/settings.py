"""Typed runtime settings assembled from defaults, file, environment and flags."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from ..adapters.settings_file import SettingsFile
from ..domain.errors import ConfigurationError

ENV_PREFIX = "SPACECTL_"


@dataclass(frozen=True)
class SettingsConfig:
    """Connection, timeout and tooling settings for one invocation."""

    host: str = "localhost"
    port: int = 8090
    websocket_path: str = "/websocket"
    upload_url: str = "http://{host}:8080/master/activity/upload"
    request_timeout_s: int = 30
    retries: int = 2
    open_timeout_s: float = 10.0
    response_timeout_s: Optional[float] = None
    settle_delay_s: float = 3.0
    workbench: str = "workbench"

    @property
    def websocket_url(self) -> str:
        path = self.websocket_path if self.websocket_path.startswith("/") else f"/{self.websocket_path}"
        return f"ws://{self.host}:{self.port}{path}"

    @property
    def resolved_upload_url(self) -> str:
        return self.upload_url.format(host=self.host, port=self.port)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_INT_KEYS = {"port", "request_timeout_s", "retries"}
_FLOAT_KEYS = {"open_timeout_s", "settle_delay_s"}
_OPTIONAL_FLOAT_KEYS = {"response_timeout_s"}
_STR_KEYS = {"host", "websocket_path", "upload_url", "workbench"}


def apply_dict(config: SettingsConfig, payload: Mapping[str, Any]) -> SettingsConfig:
    """Return ``config`` updated with the recognised keys of ``payload``."""
    if not isinstance(payload, Mapping):
        raise ConfigurationError("Settings payload must be a mapping of flat keys.")
    known = {f.name for f in fields(SettingsConfig)}
    unknown = set(payload) - known
    if unknown:
        raise ConfigurationError(f"Unsupported settings keys: {', '.join(sorted(map(str, unknown)))}")
    updates = {key: _coerce(key, value) for key, value in payload.items()}
    return replace(config, **updates) if updates else config


def settings_from_env(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Collect ``SPACECTL_<FIELD>`` overrides, e.g. ``SPACECTL_HOST``."""
    found: Dict[str, Any] = {}
    for f in fields(SettingsConfig):
        raw = environ.get(f"{ENV_PREFIX}{f.name.upper()}")
        if raw is not None and raw.strip():
            found[f.name] = raw.strip()
    return found


def load_settings(
    *,
    path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> SettingsConfig:
    """Layer defaults < settings file < environment < command-line overrides."""
    config = SettingsConfig()
    config = apply_dict(config, SettingsFile(path).load())
    config = apply_dict(config, settings_from_env(os.environ if environ is None else environ))
    explicit = {key: value for key, value in (overrides or {}).items() if value is not None}
    return apply_dict(config, explicit)


def _coerce(key: str, value: Any) -> Any:
    if key in _INT_KEYS:
        return _coerce_int(key, value)
    if key in _FLOAT_KEYS:
        return _coerce_float(key, value)
    if key in _OPTIONAL_FLOAT_KEYS:
        if value is None or (isinstance(value, str) and value.strip().lower() in {"", "none"}):
            return None
        return _coerce_float(key, value)
    if key in _STR_KEYS:
        text = str(value).strip() if value is not None else ""
        if not text:
            raise ConfigurationError(f"{key} must not be empty.")
        return text
    raise ConfigurationError(f"Unhandled config field: {key}")


def _coerce_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer.")
    try:
        coerced = int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer.") from None
    if coerced < 0:
        raise ConfigurationError(f"{name} must not be negative.")
    return coerced


def _coerce_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a number.")
    try:
        coerced = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number.") from None
    if coerced < 0:
        raise ConfigurationError(f"{name} must not be negative.")
    return coerced


__all__ = ["SettingsConfig", "apply_dict", "load_settings", "settings_from_env"]
