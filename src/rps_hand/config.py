from __future__ import annotations

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

def _env(key: str, default: str | None = None) -> str | None:
    v = os.getenv(key)
    if v is None or v == "":
        return default
    return v

def _env_int(key: str, default: int) -> int:
    v = _env(key)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError:
        return default

def _env_bool(key: str, default: bool) -> bool:
    v = _env(key)
    if v is None:
        return default
    return v.lower() in ("true", "1", "yes", "on")

def _env_float(key: str, default: float) -> float:
    v = _env(key)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError:
        return default

@dataclass(frozen=True)
class Settings:
    # Serial link to the hand
    serial_port: str | None = None
    baud_rate: int = 9600
    hand_mode: str = "serial"  # serial|sim

    # Timing
    settle_delay_s: float = 2.0  # firmware boot after the port opens
    idle_interval_s: float = 10.0  # rotation between idle animations
    animation_interval_s: float = 1.0  # tick inside one animation

    # Metrics
    metrics_enabled: bool = False
    metrics_host: str = "127.0.0.1"
    metrics_port: int = 9101

def load_settings(port: str | None = None, baud_rate: int | None = None, mode: str | None = None) -> Settings:
    """Load settings from the environment; non-None arguments (CLI flags) win."""
    mode = (mode or _env("HAND_MODE", "serial") or "serial").lower()
    port = port or _env("HAND_SERIAL_PORT")
    if mode not in ("serial", "sim"):
        raise RuntimeError(f"HAND_MODE must be 'serial' or 'sim', got '{mode}'")
    if mode == "serial" and not port:
        raise RuntimeError("HAND_SERIAL_PORT is required in serial mode. Set it in .env or environment.")
    s = Settings(
        serial_port=port,
        baud_rate=baud_rate or _env_int("HAND_BAUD_RATE", 9600),
        hand_mode=mode,
        settle_delay_s=_env_float("HAND_SETTLE_DELAY_S", 2.0),
        idle_interval_s=_env_float("HAND_IDLE_INTERVAL_S", 10.0),
        animation_interval_s=_env_float("HAND_ANIMATION_INTERVAL_S", 1.0),
        metrics_enabled=_env_bool("HAND_METRICS_ENABLED", False),
        metrics_host=_env("HAND_METRICS_HOST", "127.0.0.1") or "127.0.0.1",
        metrics_port=_env_int("HAND_METRICS_PORT", 9101),
    )
    if s.idle_interval_s <= s.animation_interval_s:
        raise ValueError(
            f"HAND_IDLE_INTERVAL_S ({s.idle_interval_s}) must exceed HAND_ANIMATION_INTERVAL_S ({s.animation_interval_s})"
        )
    return s
