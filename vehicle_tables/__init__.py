"""Convert vehicle component tables (guns, turrets, hulls) to JSON."""

__version__ = "0.1.0"
