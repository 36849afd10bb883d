"""
Catalog source.

Responsibilities:
- Define the canonical food item schema consumed by the recommendation engine.
- Load the catalog snapshot from disk and expose it newest-first.
"""
