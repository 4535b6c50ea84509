"""External policy contracts."""

from livechatkit.policy.base import (
    AccessPolicy,
    AllowAllAccessPolicy,
    AlwaysOpenPolicy,
    BusinessHoursPolicy,
)
from livechatkit.policy.mock import MockAccessPolicy, MockBusinessHoursPolicy

__all__ = [
    "AccessPolicy",
    "AllowAllAccessPolicy",
    "AlwaysOpenPolicy",
    "BusinessHoursPolicy",
    "MockAccessPolicy",
    "MockBusinessHoursPolicy",
]
