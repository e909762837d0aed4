"""
Pydantic models for power‑purchase‑agreement deals.

``DealBase`` holds the seven caller‑supplied fields; ``DealCreate``
describes a create or full‑replacement update payload and ``DealRead``
adds the store‑assigned ``id``.  Responses wrap records in a ``data``
envelope, errors in an ``error`` envelope.
"""

from typing import List

from pydantic import BaseModel, Field


class DealBase(BaseModel):
    seller: str = Field(..., examples=["Generic Utility Co"])
    buyer: str = Field(..., examples=["Buyer Industries"])
    country: str = Field(..., examples=["Germany"])
    technology: str = Field(..., examples=["Solar"])
    capacity: int = Field(..., examples=[15])
    term: str = Field(..., examples=["12 months"])
    date: str = Field(..., examples=["2021-07-07"])


class DealCreate(DealBase):
    """Schema for creating or fully replacing a deal."""
    pass


class DealRead(DealBase):
    """Schema for a stored deal."""

    id: int


class DealResponse(BaseModel):
    """Envelope for a single deal."""

    data: DealRead


class DealListResponse(BaseModel):
    """Envelope for a sequence of deals."""

    data: List[DealRead]


class ErrorResponse(BaseModel):
    error: str
