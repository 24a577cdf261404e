"""
Listings layer.

Responsibilities:
- Define the Item, Profile, Match and Message records.
- Express item lookups as immutable ``ItemQuery`` values.
- Provide the repository contract and the seeded in-memory store.
"""
