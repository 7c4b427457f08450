"""Build settings for one build invocation."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Orientation(str, Enum):
    AUTO = "auto"
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class BuildSettings(BaseModel):
    """Recognized configuration options.

    Constructed once per build and never mutated afterwards. Every option
    is exposed to build templates under its camelCase name.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(default="App Title", description="Application title")
    name: str = Field(default="AppName", description="Application name")
    package: str = Field(default="com.example.app", description="Application package id")
    version: str = Field(default="0.0.1")
    company: str = Field(default="My Company")
    initial_width: int = Field(default=1280, ge=0)
    initial_height: int = Field(default=720, ge=0)
    orientation: Orientation = Orientation.AUTO
    embed_resources: bool = True
    assets: list[Path] = Field(
        default_factory=list, description="Asset trees copied wholesale into the staging area"
    )
    icon: str | None = None
    libraries: list[str] = Field(
        default_factory=list, description="Extra libraries ('name' or 'name:version')"
    )
    minimize_names: bool = False
    release: bool = False
    analyzer_enabled: bool = False
