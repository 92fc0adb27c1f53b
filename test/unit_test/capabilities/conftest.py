from typing import Any, Callable, Dict

import pytest

from sparxstar_gluon.capabilities.base import CancellationToken, CapabilityDescriptor, CategoryDescriptor
from sparxstar_gluon.capabilities.registry import CapabilityRegistry


def _echo(payload: Dict[str, Any], token: CancellationToken) -> Dict[str, Any]:
    return {"echo": payload}


@pytest.fixture
def make_descriptor() -> Callable[..., CapabilityDescriptor]:
    """Factory for visible descriptors in the ``tools`` category."""

    def _make(name: str = "acme/echo", category: str = "tools", **kwargs: Any) -> CapabilityDescriptor:
        params: Dict[str, Any] = {
            "name": name,
            "label": name.split("/")[-1].title(),
            "description": f"{name} capability",
            "category": category,
            "execute_callback": _echo,
            "show_in_rest": True,
        }
        params.update(kwargs)
        return CapabilityDescriptor(**params)

    return _make


@pytest.fixture
def registry() -> CapabilityRegistry:
    registry = CapabilityRegistry()
    registry.register_category(CategoryDescriptor(name="tools", label="Tools"))
    return registry
