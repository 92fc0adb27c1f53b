from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field

from sparxstar_gluon.schemas.base import BaseSchema


class ConsentCategory(str, Enum):
    """Purpose categories under which a visitor grants or denies consent."""

    functional = "functional"
    preferences = "preferences"
    statistics = "statistics"
    statistics_anonymous = "statistics-anonymous"
    marketing = "marketing"

    @classmethod
    def parse(cls, value: object) -> Optional["ConsentCategory"]:
        """Return the matching category, or None for anything unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class ConsentType(str, Enum):
    optin = "optin"
    optout = "optout"


class CookieInfo(BaseSchema):
    """A cookie declared to the consent provider for display to visitors."""

    name: str
    plugin_or_service: str
    category: ConsentCategory = ConsentCategory.functional
    expires: str = Field(description="Human readable lifetime shown to visitors.")
    function: str = Field(description="What the cookie is used for.")
    collects_personal_data: bool = False
    member_cookie: bool = False
    administrator_cookie: bool = False
