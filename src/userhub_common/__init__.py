"""Domain models, services and infrastructure for userhub."""
