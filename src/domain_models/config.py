import os
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain_models.constants import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_FILE_SIZE_BYTES,
    DEFAULT_SERVER_PORT,
    MAX_DEPTH_LIMIT,
)
from domain_models.types import OutputFormat


def _safe_getenv_int(key: str, default: int) -> int:
    """Safely get an integer environment variable with fallback."""
    val = os.getenv(key)
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError:
        return default


class RenderConfig(BaseModel):
    """
    Configuration for a narration render and the surfaces around it.

    Defaults are defined directly in the model or via default_factory using os.getenv.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Traversal guards
    max_depth: int = Field(
        default_factory=lambda: _safe_getenv_int("AXNARRATOR_MAX_DEPTH", DEFAULT_MAX_DEPTH),
        ge=1,
        description="Deepest node nesting rendered before a depth error is emitted.",
    )
    detect_cycles: bool = Field(
        default=True,
        description="Render a cycle error instead of recursing into an ancestor again.",
    )

    # Input limits
    max_file_size_bytes: int = Field(
        default=DEFAULT_MAX_FILE_SIZE_BYTES,
        ge=1,
        description="Largest accepted tree dump, in bytes.",
    )

    # Output
    output_format: OutputFormat = Field(
        default=OutputFormat.TEXT, description="Default exporter used by the CLI."
    )

    # Viewer
    server_port: int = Field(
        default=DEFAULT_SERVER_PORT, ge=1, le=65535, description="Port of the viewer server."
    )

    @field_validator("max_depth", mode="after")
    @classmethod
    def validate_max_depth(cls, v: int) -> int:
        """Keep the recursive render well inside the interpreter's recursion limit."""
        if v > MAX_DEPTH_LIMIT:
            msg = f"max_depth must be at most {MAX_DEPTH_LIMIT} (got {v})."
            raise ValueError(msg)
        return v

    @classmethod
    def default(cls) -> Self:
        """
        Returns the default configuration using Pydantic defaults.
        """
        return cls()
