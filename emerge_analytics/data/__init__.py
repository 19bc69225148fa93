"""Data access layer: models, repositories and the in-memory document store."""
