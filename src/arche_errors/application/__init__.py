"""Application layer: read-only projections of domain errors."""
