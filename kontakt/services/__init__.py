"""
High-level use cases for the Kontakt API.

The rendering core lives in three pure modules: theme_resolver,
vcard_builder and signature_html. The remaining service modules load
cards/settings from the repositories and feed them to that core.

Routers (FastAPI endpoints) call these services instead of reading the
store directly.
"""
