"""utracy-redact data models - re-exports all public model classes."""

from utracy_redact.models.config import MarkerConfig, ProjectConfig
from utracy_redact.models.result import RewriteMode, RewriteResult

__all__ = [
    "MarkerConfig",
    "ProjectConfig",
    "RewriteMode",
    "RewriteResult",
]
