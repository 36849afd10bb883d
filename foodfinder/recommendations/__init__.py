"""
Free-text recommendation engine.

Responsibilities:
- Extract hard constraints (city, cuisine, dietary, budget) from a prompt.
- Narrow and rank the catalog before consulting the generation oracle.
- Reconcile oracle answers back to catalog items and re-validate them.
- Degrade through a fixed fallback chain instead of returning unrelated items.
"""
