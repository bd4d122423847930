"""Process monitor: process listing, CPU sampling, a text table and a curses front end."""

__version__ = "0.1.0"

__all__ = ["__version__"]