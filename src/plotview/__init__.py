"""plotview: mark rectangular regions over a scanned plot and export them as color-keyed crops."""

__version__ = "0.1.0"
