"""Engine settings, optionally read from ROOF_TAKEOFF_* environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

ENV_DEFAULT_PITCH = "ROOF_TAKEOFF_DEFAULT_PITCH"
ENV_SNAP_TOLERANCE_FT = "ROOF_TAKEOFF_SNAP_TOLERANCE_FT"
ENV_LOG_LEVEL = "ROOF_TAKEOFF_LOG_LEVEL"


class EngineSettings(BaseModel):
    """Tunables for a drawing session."""

    default_pitch: str = "4/12"
    snap_tolerance_ft: float = Field(default=3.0, ge=0.0)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineSettings:
        """Build settings from the environment; unset variables keep their defaults.

        Malformed values raise ``pydantic.ValidationError``.
        """
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for field_name, var in (
            ("default_pitch", ENV_DEFAULT_PITCH),
            ("snap_tolerance_ft", ENV_SNAP_TOLERANCE_FT),
            ("log_level", ENV_LOG_LEVEL),
        ):
            raw = env.get(var, "").strip()
            if raw:
                values[field_name] = raw
        return cls(**values)
