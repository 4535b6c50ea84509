"""Routing collaborator contract."""

from livechatkit.routing.base import RoutingProvider
from livechatkit.routing.mock import MockRoutingProvider

__all__ = ["MockRoutingProvider", "RoutingProvider"]
