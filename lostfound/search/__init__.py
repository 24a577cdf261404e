"""
Search and match suggestion.

Responsibilities:
- Score listings against a free-text query.
- Estimate distances from the user's position to listing locations.
- Select the strongest candidates as smart matches.
- Return ranked, distance-annotated results ready for API serialisation.
"""
