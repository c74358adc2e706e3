"""
Core utilities shared across the Kontakt API.

This package hosts:
- configuration helpers (env vars, paths)
- logging setup
- URL helpers used when building absolute links for e-mail clients
"""
