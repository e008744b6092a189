"""Application services: configuration loading and memo use cases."""
