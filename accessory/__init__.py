"""Generate getter/setter methods for tagged Go struct fields."""

__version__ = "0.1.0"
