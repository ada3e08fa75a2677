"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks that every feature uses (DB wiring,
settings, logging, error envelope, payload validation). Feature-specific SQL
and business logic live in the feature packages (`auth/`, `posts/`).
"""
