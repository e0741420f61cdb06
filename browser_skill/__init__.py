"""Command-line scripts that drive a running Chrome over the DevTools Protocol."""

__version__ = "0.1.0"
