"""Portwatch - inspect listening ports and the processes behind them."""

from portwatch.version import __version__

__all__ = ["__version__"]
