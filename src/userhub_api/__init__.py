"""HTTP API for userhub."""
