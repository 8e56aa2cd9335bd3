"""countdown: a minutes-and-seconds countdown timer."""

__version__ = "0.1.0"
