"""Application layer: services and adapters."""
