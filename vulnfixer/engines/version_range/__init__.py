"""Version range engine — turn advisory range text into a concrete version."""

from vulnfixer.engines.version_range.parser import (
    RangeOperator,
    VersionRange,
    parse_range,
    parse_target_version,
)

__all__ = ["RangeOperator", "VersionRange", "parse_range", "parse_target_version"]
