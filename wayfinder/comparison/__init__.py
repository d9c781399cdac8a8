"""
Side-by-side destination comparison.

Responsibilities:
- Evaluate a declarative table of criteria for two destinations.
- Decide a per-criterion winner (higher-better, lower-better or advisory).
- Summarise the comparison in a short narrative verdict.
"""
