"""
Pydantic schema definitions for API payloads.

Schemas are separated from the database rows to decouple the JSON
contract (``_id``, ``userId`` and friends) from column names.
"""
