"""Runtime services: telemetry and configuration."""

from . import telemetry
from .config import EngineConfig

__all__ = ["telemetry", "EngineConfig"]
