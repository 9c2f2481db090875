"""SoConnect - two-party chat service keyed by five-digit user codes."""

__version__ = "1.0.0"
