"""JointsGalore: a small photo-sharing backend on flat-file collections."""

__version__ = "0.1.0"
