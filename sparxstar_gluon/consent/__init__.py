"""Consent categories, the host consent contract and the consent gate."""

from .gate import ConsentGate
from .models import ConsentCategory, ConsentType, CookieInfo
from .provider import ConsentProvider, InMemoryConsentProvider

__all__ = [
    "ConsentCategory",
    "ConsentGate",
    "ConsentProvider",
    "ConsentType",
    "CookieInfo",
    "InMemoryConsentProvider",
]
