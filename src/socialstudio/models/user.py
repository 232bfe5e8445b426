# -*- coding: utf-8 -*-
"""Signed-in user data model."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any

from socialstudio.constants import DEFAULT_FEATURES, DEFAULT_THEME_COLOR
from socialstudio.models.association import Association


@dataclass
class Profile:
    id: int
    name: str
    avatar_url: str | None = None
    bio: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Profile:
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            avatar_url=data.get("avatar_url") or data.get("avatarURL"),
            bio=data.get("bio"),
        )


@dataclass
class AppSettings:
    """Per-user app branding and feature flags delivered by the backend."""

    app_name: str = ""
    bundle_id: str = ""
    version: str = "1.0.0"
    theme_color_hex: str = DEFAULT_THEME_COLOR
    backend_url: str = ""
    features: dict[str, bool] = field(default_factory=lambda: deepcopy(DEFAULT_FEATURES))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppSettings:
        features = deepcopy(DEFAULT_FEATURES)
        features.update({str(k): bool(v) for k, v in (data.get("features") or {}).items()})
        return cls(
            app_name=str(data.get("app_name", "")),
            bundle_id=str(data.get("bundle_id", "")),
            version=str(data.get("version", "1.0.0")),
            theme_color_hex=str(data.get("theme_color_hex", DEFAULT_THEME_COLOR)),
            backend_url=str(data.get("backend_url", "")),
            features=features,
        )


@dataclass
class User:
    email: str = ""
    profile: Profile | None = None
    app_settings: AppSettings = field(default_factory=AppSettings)
    associations: list[Association] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        profile = data.get("profile")
        return cls(
            email=str(data.get("email", "")),
            profile=Profile.from_dict(profile) if isinstance(profile, dict) else None,
            app_settings=AppSettings.from_dict(data.get("app_settings") or {}),
            associations=[Association.from_dict(item) for item in data.get("associations") or []],
        )
