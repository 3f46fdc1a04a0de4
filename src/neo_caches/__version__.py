"""Version information for neo-caches."""

__version__ = "1.0.0"
