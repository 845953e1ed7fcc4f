"""Flattening options shared by the kernel, the API and the CLI."""

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_MAX_DEPTH = 16
# Keeps the recursive parse and walk well inside the interpreter's stack
MAX_DEPTH_LIMIT = 256
DEFAULT_SEPARATOR = "."
DEFAULT_PLACEHOLDER = "[...]"


class FlattenOptions(BaseModel):
    """Knobs for a flatten/project pass."""
    max_depth: int = Field(
        DEFAULT_MAX_DEPTH, ge=1, le=MAX_DEPTH_LIMIT, description="Maximum expanded relation nesting"
    )
    separator: str = Field(DEFAULT_SEPARATOR, min_length=1, description="Label path separator")
    placeholder: str = Field(
        DEFAULT_PLACEHOLDER,
        description="Value shown for a collapsed relation with no local column",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")


DEFAULT_OPTIONS = FlattenOptions()


def resolve_options(options: FlattenOptions | None) -> FlattenOptions:
    """Return options, falling back to the module defaults."""
    return DEFAULT_OPTIONS if options is None else options
