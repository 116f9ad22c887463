"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, cadence.toml only contains
overrides.  An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from cadence.domain.occurrence import HORIZON_MINUTES


class ScheduleConfig(BaseModel):
    """[schedule] section."""

    model_config = {"frozen": True}

    upcoming_count: int = Field(default=5, ge=1, le=100)
    horizon_minutes: int = Field(default=HORIZON_MINUTES, ge=1, le=HORIZON_MINUTES)
