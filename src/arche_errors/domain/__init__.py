"""Domain layer: error entities, capture and normalization services."""
