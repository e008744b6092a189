"""memoapp - single-user memo notebook for the command line."""

__version__ = "0.1.0"
