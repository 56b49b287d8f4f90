"""Small helpers shared across the validator packages."""

from .format_version import (
    SemanticVersion,
    VersionCheckResult,
    check_format_version,
    parse_format_version,
    select_version,
)
from .logging_utils import configure_split_stream_logging

__all__ = [
    "SemanticVersion",
    "VersionCheckResult",
    "check_format_version",
    "parse_format_version",
    "select_version",
    "configure_split_stream_logging",
]
