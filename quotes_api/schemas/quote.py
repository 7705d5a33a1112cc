"""Pydantic schemas for quote responses."""

from __future__ import annotations

from pydantic import BaseModel, Field


class QuoteResponse(BaseModel):
    """One quote row from the static dataset."""

    quote_id: int = Field(..., description="Row id in the quotes table.")
    quote: str = Field(..., description="The quote text.")
    author: str = Field(..., description="Character who says the quote.")
    context: str = Field(..., description="Narrative context of the quote.")
    source: str = Field(..., description="Title of the game the quote comes from.")
