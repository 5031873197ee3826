"""Todo list service - multi-tenant task core with recycle bin and statistics."""

__version__ = "0.1.0"
