"""
Roster ingestion package.

Responsibilities:
- Read the raw CSV export produced by the profile crawler.
- Normalize each row into the canonical ModelRecord schema.
- Persist the accepted records as the roster snapshot served by the API.
"""
