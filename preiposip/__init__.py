"""Database seeders for the PreIPOsip platform."""

__version__ = "1.0.0"
