"""
Destination search.

Responsibilities:
- Score a single text field against a query (fuzzy matcher).
- Rank one autocomplete suggestion per destination, first matching field wins.
- Rank full-text results averaged over every matching field.
- Cache deterministic search results per catalog version.
"""
