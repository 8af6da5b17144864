"""
Model catalog engine.

Responsibilities:
- Map rating tiers to scores and blend price and rating into a value score.
- Filter the roster by search text, tier, tags, recordings and prospect flag.
- Order the roster by rating, name, recency, price or recordings.
- Reduce the full roster into dashboard statistics.
"""
