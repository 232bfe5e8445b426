# -*- coding: utf-8 -*-
"""Device capability authorization data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Capability(str, Enum):
    """Permission-gated device features queried by the dashboard."""

    CONTACTS = "contacts"
    CAMERA = "camera"
    PHOTOS = "photos"
    MICROPHONE = "microphone"
    LOCATION = "location"
    MOTION = "motion"
    NOTIFICATIONS = "notifications"
    BLUETOOTH = "bluetooth"


class AuthorizationStatus(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"
    NOT_DETERMINED = "not-determined"
    RESTRICTED = "restricted"
    UNKNOWN = "unknown"


_RAW_STATUS_MAP: dict[str, AuthorizationStatus] = {
    "granted": AuthorizationStatus.GRANTED,
    "authorized": AuthorizationStatus.GRANTED,
    "authorizedalways": AuthorizationStatus.GRANTED,
    "authorizedwheninuse": AuthorizationStatus.GRANTED,
    "allowedalways": AuthorizationStatus.GRANTED,
    "allowed": AuthorizationStatus.GRANTED,
    "limited": AuthorizationStatus.GRANTED,
    "provisional": AuthorizationStatus.GRANTED,
    "ephemeral": AuthorizationStatus.GRANTED,
    "denied": AuthorizationStatus.DENIED,
    "notdetermined": AuthorizationStatus.NOT_DETERMINED,
    "undetermined": AuthorizationStatus.NOT_DETERMINED,
    "restricted": AuthorizationStatus.RESTRICTED,
    "unknown": AuthorizationStatus.UNKNOWN,
}


def normalize_status(raw: Any) -> AuthorizationStatus:
    """Map a provider's platform-specific answer onto the shared status set.

    Booleans are a plain yes/no prompt, ``None`` means the user was never asked.
    """
    if isinstance(raw, AuthorizationStatus):
        return raw
    if raw is None:
        return AuthorizationStatus.NOT_DETERMINED
    if isinstance(raw, bool):
        return AuthorizationStatus.GRANTED if raw else AuthorizationStatus.DENIED
    key = str(raw).strip().replace("-", "").replace("_", "").replace(" ", "").lower()
    return _RAW_STATUS_MAP.get(key, AuthorizationStatus.UNKNOWN)


@dataclass
class CapabilityStatus:
    """Last queried authorization state of one capability."""

    capability: Capability
    status: AuthorizationStatus = AuthorizationStatus.UNKNOWN
    checked_at: datetime | None = field(default=None)

    @classmethod
    def checked_now(cls, capability: Capability, status: AuthorizationStatus) -> CapabilityStatus:
        return cls(capability=capability, status=status, checked_at=datetime.now(timezone.utc))
