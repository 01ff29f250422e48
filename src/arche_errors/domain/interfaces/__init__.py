"""Domain capability protocols."""
