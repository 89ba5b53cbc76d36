from __future__ import annotations

import os
from pathlib import Path

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, ConfigDict, Field, computed_field

from filecat.config import DEFAULT_HEADER, HEADER_ENV_VAR

ENV_FILE = find_dotenv(usecwd=True)


def default_header() -> str:
    """Header template from ``FILECAT_HEADER`` (environment first, then ``.env``)."""
    if HEADER_ENV_VAR in os.environ:
        return os.environ[HEADER_ENV_VAR]
    if ENV_FILE:
        value = dotenv_values(ENV_FILE).get(HEADER_ENV_VAR)
        if value:
            return value
    return DEFAULT_HEADER


class Settings(BaseModel):
    """Configuration settings for a filecat run."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    paths: list[str] = Field(default_factory=list, description="Glob patterns or literal paths.")
    recursive: bool = Field(default=False, description="Recursively read directories.")
    exclude: list[str] = Field(default_factory=list, description="Exclusion glob or literal path.")
    header: str = Field(default_factory=default_header, description="Header template.")
    verbose: bool = Field(default=False, description="Raw decoded text rendering.")
    hex: bool = Field(default=False, description="Hex dump for non-text content.")
    color: bool = Field(default=False, description="Colorize header lines.")
    no_log_color: bool = Field(default=False, description="Disable colored log tags.")
    output: Path | None = Field(default=None, description="Output file to create.")
    counter: bool = Field(default=False, description="Log processed-file counts.")
    skip_non_text: bool = Field(default=False, description="Marker instead of binary content.")
    log_file: str = Field(default="", description="Log file path.")

    @computed_field
    @property
    def use_log_color(self) -> bool:
        """Whether log level tags are colored."""
        return not self.no_log_color
