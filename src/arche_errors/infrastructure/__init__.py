"""Infrastructure layer: logging and metrics adapters."""
