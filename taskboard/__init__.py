"""REST service for managing tasks with tags, filtering and sorting, stored in SQLite."""

__version__ = "0.1.0"
__all__ = ["__version__"]