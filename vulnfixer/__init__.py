"""vulnfixer — open dependency-pin pull requests for known advisories."""

__version__ = "0.1.0"
