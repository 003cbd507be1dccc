"""API types - Pydantic request/response models."""
