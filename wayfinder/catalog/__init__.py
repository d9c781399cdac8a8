"""
Destination catalog.

Responsibilities:
- Define the immutable CatalogEntry value object.
- Load the processed destination dataset into an in-memory snapshot.
- Swap the whole snapshot atomically when the catalog is refreshed.
- Answer simple discovery queries (trending, hidden gems, budget picks).
"""
