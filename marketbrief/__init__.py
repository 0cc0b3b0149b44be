"""Daily newspaper and stock exchange digest."""

__version__ = "0.1.0"
