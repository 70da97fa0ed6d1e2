"""liftpal: workout generation, set logging and partner progress tracking."""

__version__ = "0.1.0"
