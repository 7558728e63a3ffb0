"""Advisory selector engine — choose one fixable advisory."""

from vulnfixer.engines.advisory_selector.selector import (
    DEFAULT_WINDOW,
    AdvisorySelector,
    rejection_reason,
)

__all__ = ["DEFAULT_WINDOW", "AdvisorySelector", "rejection_reason"]
