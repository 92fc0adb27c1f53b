"""Pydantic base schema utilities for Gluon models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base Pydantic model for Gluon value objects.

    - ``populate_by_name=True``: allow initialization by alias or field name.
    - ``extra="forbid"``: unknown fields are rejected.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
    )
