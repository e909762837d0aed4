"""
Pydantic schema definitions for API payloads.

Schemas describe deal records and the ``{"data": ...}`` and
``{"error": ...}`` envelopes returned by the API.
"""
