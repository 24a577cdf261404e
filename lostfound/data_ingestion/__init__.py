"""
Bulk listing import.

Responsibilities:
- Read lost-property logs exported as CSV.
- Normalize them into the canonical Item schema.
- Load the cleaned rows into a listing repository.
"""
