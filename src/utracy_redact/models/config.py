"""Configuration models for utracy-redact.

ProjectConfig captures utracy-redact.yaml fields with the default
marker sets. MarkerConfig is the immutable per-run value handed to the
rewrite engine; nothing about markers is held in process-wide state.
"""

from __future__ import annotations

import string
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from utracy_redact.errors import ConfigurationError

CONFIG_FILENAME = "utracy-redact.yaml"
DEFAULT_MARKER = "<redacted>"
DEFAULT_FILE_MARKERS: list[str] = ["code_secret"]
DEFAULT_FN_MARKERS: list[str] = ["secret"]

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def ascii_lower(value: str) -> str:
    """Lower-case A-Z only; other characters, including non-ASCII letters, are kept."""
    return value.translate(_ASCII_LOWER)


class MarkerConfig(BaseModel):
    """Marker sets and replacement string for one redaction run.

    Markers are ASCII case-insensitive substrings and are stored with
    A-Z lower-cased. Empty markers are dropped, since an empty substring
    would match every entry.
    """

    model_config = {"extra": "forbid", "frozen": True}

    file_markers: tuple[str, ...] = ()
    fn_markers: tuple[str, ...] = ()
    marker: str = DEFAULT_MARKER

    @field_validator("file_markers", "fn_markers")
    @classmethod
    def _normalize_markers(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(ascii_lower(m) for m in value if m)


class ProjectConfig(BaseModel):
    """Project-level configuration loaded from utracy-redact.yaml."""

    model_config = {"extra": "forbid"}

    file_markers: list[str] = Field(default_factory=lambda: list(DEFAULT_FILE_MARKERS))
    fn_markers: list[str] = Field(default_factory=lambda: list(DEFAULT_FN_MARKERS))
    marker: str = DEFAULT_MARKER

    def marker_config(
        self,
        file_markers: list[str] | None = None,
        fn_markers: list[str] | None = None,
    ) -> MarkerConfig:
        """Build the MarkerConfig for a run.

        Command-line marker lists replace (not extend) the configured
        ones when given.
        """
        return MarkerConfig(
            file_markers=tuple(self.file_markers if file_markers is None else file_markers),
            fn_markers=tuple(self.fn_markers if fn_markers is None else fn_markers),
            marker=self.marker,
        )


def find_config_file(start: Path | None = None) -> Path | None:
    """Walk up from start (default: cwd) looking for utracy-redact.yaml.

    Args:
        start: Starting path (file or directory). Defaults to cwd.

    Returns:
        Path to the config file, or None if no directory up to the
        filesystem root contains one.
    """
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def load_project_config(start: Path | None = None) -> ProjectConfig:
    """Load ProjectConfig from the nearest utracy-redact.yaml.

    Returns defaults if no config file is found or the file is empty.

    Raises:
        ConfigurationError: If the file is not valid YAML or has unknown
            or mistyped fields.
    """
    config_path = find_config_file(start)
    if config_path is None:
        return ProjectConfig()
    import yaml

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc
    if raw is None:
        return ProjectConfig()
    try:
        return ProjectConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {config_path}: {exc}") from exc
