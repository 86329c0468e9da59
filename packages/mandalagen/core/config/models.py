"""Application configuration models for mandalagen."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(
        default=False, description="Emit JSON lines instead of plain text records"
    )


class RenderConfig(BaseModel):
    """Render job settings shared by every effect in a job."""

    width: int = Field(default=1024, gt=0, description="Canvas width in pixels")
    height: int = Field(default=1024, gt=0, description="Canvas height in pixels")
    total_frames: int = Field(default=120, ge=1, description="Frames in one loop")
    seed: int | None = Field(
        default=None, description="Seed for one-time config picks (None = random)"
    )


class AppConfig(BaseModel):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")

    preset_dir: str | None = Field(
        default=None, description="Extra directory searched for preset files"
    )
    render: RenderConfig = RenderConfig()
    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("mandalagen.yaml")
