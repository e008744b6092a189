"""Core domain layer: entities, protocols and shared helpers."""
