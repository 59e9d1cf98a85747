"""daily-digest: GitHub organization activity digest."""

__version__ = "0.1.0"
