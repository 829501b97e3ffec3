"""Rewrite result model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class RewriteMode(str, Enum):
    """Whether a rewrite pass emits output or only counts matches."""

    WRITE = "write"
    DRY_RUN = "dry_run"


class RewriteResult(BaseModel):
    """Outcome of one rewrite pass over a capture.

    output_bytes is only populated by the in-memory WRITE pass; dry runs
    and streaming rewrites leave it as None.
    """

    total_srclocs: int
    redacted_count: int
    redacted_indices: list[int] = Field(default_factory=list)
    redacted_functions: list[str] = Field(default_factory=list)
    output_bytes: bytes | None = Field(default=None, exclude=True, repr=False)
