# -*- coding: utf-8 -*-
"""Error taxonomy and conversion to user-facing messages."""

from __future__ import annotations


class SocialStudioError(Exception):
    """Base class for every failure surfaced by the client."""


class NetworkError(SocialStudioError):
    """Transport failure: no connectivity, timeout, malformed URL."""


class ServerError(SocialStudioError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status: int, action: str = "request", body: str = "") -> None:
        self.status = int(status)
        self.action = action
        self.body = body
        super().__init__(f"Failed {action} (status: {self.status})")


class DecodeError(SocialStudioError):
    """A payload did not have the expected JSON shape."""


class ValidationError(SocialStudioError):
    """Client-side form validation failed before any request was sent."""


class MediaError(SocialStudioError):
    """Base class for composition and export failures."""


class MissingTrackError(MediaError):
    """A required picture or audio track is absent from the source."""


class ExportError(MediaError):
    """The export step failed."""


class ExportCancelledError(ExportError):
    """The export process was terminated before completion."""


class ToolNotFoundError(MediaError):
    """ffmpeg or ffprobe is not installed."""


def describe_error(exc: BaseException) -> str:
    """Return the message string shown to the user for a failed operation."""
    if isinstance(exc, ServerError):
        return str(exc)
    if isinstance(exc, ValidationError):
        return str(exc) or "Please fill all fields correctly"
    if isinstance(exc, DecodeError):
        return "Invalid server response"
    if isinstance(exc, NetworkError):
        return f"Error: {exc}"
    if isinstance(exc, MissingTrackError):
        return f"Missing track: {exc}"
    if isinstance(exc, ExportCancelledError):
        return "Export cancelled"
    if isinstance(exc, MediaError):
        return f"Failed to export: {exc}"
    return f"Error: {exc}" if str(exc) else "Unknown error"
