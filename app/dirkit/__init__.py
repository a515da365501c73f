"""dirkit - filesystem entities with bounded recursive search."""

__version__ = "0.1.0"
