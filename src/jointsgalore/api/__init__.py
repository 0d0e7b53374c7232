"""HTTP API for JointsGalore."""
