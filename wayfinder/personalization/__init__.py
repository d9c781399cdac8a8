"""
Personalization engine.

Responsibilities:
- Infer recency-weighted implicit interests from interaction history.
- Rank unseen destinations for a user from popularity, inferred interests
  and explicit preferences, with a small random jitter for freshness.
- Find destinations similar to a given one.
- Keep per-user interaction history and preferences in memory.
"""
