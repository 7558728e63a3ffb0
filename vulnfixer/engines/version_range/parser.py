"""Parse vulnerable-version-range strings such as ``">= 1.0, <= 1.2.3"``.

Only two forms yield a version: an inclusive upper bound (``<=``) and an
equality marker (``=``, ``==``, or the ``=`` of ``>=``). The boundary is
returned as written; there is no version arithmetic.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from vulnfixer.exceptions import UnsupportedRangeFormat

_LESS_OR_EQUAL_RE = re.compile(r"<=\s*([^\s,]*)")
# "=", "==" or the "=" of ">="; "<=" is matched first and "!=" never counts
_EQUAL_RE = re.compile(r"(?<![<=!])==?(?!=)\s*([^\s,]*)")
_LESS_THAN_RE = re.compile(r"<(?!=)")


class RangeOperator(enum.Enum):
    LESS_OR_EQUAL = "<="
    EQUAL = "="
    LESS_THAN = "<"
    UNKNOWN = "?"


@dataclass(frozen=True)
class VersionRange:
    raw: str
    operator: RangeOperator
    boundary: str = ""


def parse_range(range_text: str) -> VersionRange:
    """Classify *range_text*; first matching rule wins.

    >>> parse_range(">= 1.0, <= 1.2.3")
    VersionRange(raw='>= 1.0, <= 1.2.3', operator=<RangeOperator.LESS_OR_EQUAL: '<='>, boundary='1.2.3')
    """
    m = _LESS_OR_EQUAL_RE.search(range_text)
    if m:
        return VersionRange(range_text, RangeOperator.LESS_OR_EQUAL, m.group(1).strip())

    m = _EQUAL_RE.search(range_text)
    if m:
        return VersionRange(range_text, RangeOperator.EQUAL, m.group(1).strip())

    m = _LESS_THAN_RE.search(range_text)
    if m:
        boundary = range_text[m.end() :].strip().split(",")[0].strip()
        return VersionRange(range_text, RangeOperator.LESS_THAN, boundary)

    return VersionRange(range_text, RangeOperator.UNKNOWN)


def parse_target_version(range_text: str, *, cve: str | None = None) -> str:
    """Return the concrete version named by *range_text*.

    Raises :class:`UnsupportedRangeFormat` for strict ``<`` bounds, ranges
    with no recognised marker, and markers with nothing after them.
    """
    parsed = parse_range(range_text)
    if parsed.operator in (RangeOperator.LESS_OR_EQUAL, RangeOperator.EQUAL) and parsed.boundary:
        return parsed.boundary
    # TODO: derive the last vulnerable release for "< X" once we can list
    # published versions from the package index.
    raise UnsupportedRangeFormat(range_text, cve=cve)
