"""Service helpers built on top of the repositories."""
