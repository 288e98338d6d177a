"""
Configuration data model for dashsync.

Defines the structure of the optional project file `.dashsync.json`, with
validation via Pydantic.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class SyncConfig(BaseModel):
    """
    Run configuration.

    Example .dashsync.json:
        {"uid_mode": true, "export_dir": "sqlite", "debug": 1}
    """

    model_config = ConfigDict(extra="ignore")

    uid_mode: bool = Field(
        default=False,
        description="Match imported JSON to dashboards by uid instead of by title",
    )
    export_dir: Path = Field(
        default=Path("sqlite"),
        description="Directory exported dashboards are written to",
    )
    debug: int = Field(
        default=0,
        ge=0,
        le=2,
        description="Verbosity: 1 logs per-tag and per-update details, 2 full comparisons",
    )
