"""
Configuration for Sociogram.

Defaults live as module constants; SociogramConfig bundles them and can be
overridden from the environment or by CLI options.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional


# Default paths
DEFAULT_DB_PATH = ".sociogram/sociogram.db"

# Canvas used for the non-physical layouts
DEFAULT_WIDTH = 800.0
DEFAULT_HEIGHT = 800.0

# Camera fit after a layout switch
FIT_DELAY_MS = 100
FIT_DURATION_MS = 400
FIT_PADDING = 50.0

BACKGROUND_COLOR = "#1a1a2e"


@dataclass(frozen=True)
class SociogramConfig:
    """
    Runtime settings.

    Attributes:
        db_path: SQLite file holding the working dataset
        width: Canvas width for layout computation
        height: Canvas height for layout computation
        fit_delay_ms: Delay before the one-shot fit-to-view after a layout switch
        fit_duration_ms: Duration of the fit-to-view camera transition
        fit_padding: Padding around the node bounds when fitting
        background: Canvas background color
    """

    db_path: Path = Path(DEFAULT_DB_PATH)
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    fit_delay_ms: int = FIT_DELAY_MS
    fit_duration_ms: int = FIT_DURATION_MS
    fit_padding: float = FIT_PADDING
    background: str = BACKGROUND_COLOR

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SociogramConfig":
        """
        Build a config from SOCIOGRAM_* environment variables.

        Recognised: SOCIOGRAM_DB_PATH, SOCIOGRAM_WIDTH, SOCIOGRAM_HEIGHT.
        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        config = cls()

        if env.get("SOCIOGRAM_DB_PATH"):
            config = replace(config, db_path=Path(env["SOCIOGRAM_DB_PATH"]))
        if env.get("SOCIOGRAM_WIDTH"):
            config = replace(config, width=float(env["SOCIOGRAM_WIDTH"]))
        if env.get("SOCIOGRAM_HEIGHT"):
            config = replace(config, height=float(env["SOCIOGRAM_HEIGHT"]))

        return config

    def with_overrides(self, **changes: object) -> "SociogramConfig":
        """Return a copy with the non-None values replaced."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
