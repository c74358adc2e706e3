"""
Persistence adapters.

These modules encapsulate how cards, signatures and settings are
stored/retrieved. Services depend on them instead of touching files.
"""
