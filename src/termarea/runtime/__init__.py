"""Runtime services shared by the buffer and its adapters."""

from . import telemetry

__all__ = ["telemetry"]
