# -*- coding: utf-8 -*-
"""HTTP client for the social backend: auth, posting and JSON fetch."""

from __future__ import annotations

import json
import logging
import time
import uuid
from pathlib import Path
from typing import Any, Callable
from urllib import error, parse, request

from PIL import Image

from socialstudio.constants import FETCH_MAX_RETRIES, FETCH_RETRY_DELAY_SECONDS, JPEG_QUALITY
from socialstudio.errors import DecodeError, NetworkError, ServerError, SocialStudioError, ValidationError
from socialstudio.utils.image_utils import encode_jpeg

logger = logging.getLogger(__name__)

TOKEN_FIELDS = ("auth_token", "authentication_token", "token")


class BackendClient:
    """Thin urllib wrapper; every failure is raised as a SocialStudioError."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 15.0,
        max_retries: int = FETCH_MAX_RETRIES,
        retry_delay: float = FETCH_RETRY_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, int(max_retries))
        self.retry_delay = retry_delay
        self._sleep = sleep

    def _url(self, path: str) -> str:
        url = f"{self.base_url}/{path.lstrip('/')}"
        parsed = parse.urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise NetworkError(f"Malformed URL: {url}")
        return url

    def _send(self, req: request.Request, action: str) -> bytes:
        try:
            with request.urlopen(req, timeout=self.timeout) as response:
                status = int(getattr(response, "status", 200))
                body = response.read()
        except error.HTTPError as exc:
            err_body = exc.read().decode("utf-8", errors="ignore") if exc.fp is not None else ""
            raise ServerError(exc.code, action, err_body) from exc
        except error.URLError as exc:
            raise NetworkError(str(exc.reason)) from exc
        except (OSError, ValueError) as exc:
            raise NetworkError(str(exc)) from exc
        if not 200 <= status < 300:
            raise ServerError(status, action, body.decode("utf-8", errors="ignore"))
        return body

    def _post_json(self, path: str, payload: dict[str, Any], action: str) -> bytes:
        req = request.Request(
            self._url(path),
            data=json.dumps(payload).encode("utf-8"),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            method="POST",
        )
        return self._send(req, action)

    def login(self, email: str, password: str) -> str:
        """Authenticate and return the auth token from ``user.auth_token``."""
        if not email.strip() or not password:
            raise ValidationError("Please fill all fields correctly")

        body = self._post_json("login", {"email": email, "password": password}, "authorization")
        try:
            data = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodeError("login response is not JSON") from exc

        user = data.get("user") if isinstance(data, dict) else None
        if isinstance(user, dict):
            for field_name in TOKEN_FIELDS:
                token = user.get(field_name)
                if isinstance(token, str) and token:
                    logger.info("Login succeeded for %s", email)
                    return token
        raise DecodeError("login response has no user auth token")

    def register(self, email: str, password: str, password_confirmation: str) -> None:
        if not email.strip() or not password or password != password_confirmation:
            raise ValidationError("Please fill all fields correctly")
        payload = {
            "user": {
                "email": email,
                "password": password,
                "password_confirmation": password_confirmation,
            }
        }
        self._post_json("register", payload, "to register")
        logger.info("Registered %s", email)

    def create_post(
        self,
        content: str,
        *,
        token: str,
        image: Image.Image | None = None,
        video_path: str | Path | None = None,
        jpeg_quality: int = JPEG_QUALITY,
    ) -> None:
        """Upload a post as multipart/form-data with optional JPEG and QuickTime parts."""
        boundary = uuid.uuid4().hex
        body_parts: list[bytes] = []

        body_parts.append(f"--{boundary}\r\n".encode("utf-8"))
        body_parts.append(b'Content-Disposition: form-data; name="content"\r\n\r\n')
        body_parts.append(f"{content}\r\n".encode("utf-8"))

        files: list[tuple[str, str, str, bytes]] = []
        if image is not None:
            files.append(("image", "image.jpg", "image/jpeg", encode_jpeg(image, quality=jpeg_quality)))
        if video_path is not None:
            files.append(("video", "video.mov", "video/quicktime", Path(video_path).read_bytes()))

        for name, filename, mimetype, data in files:
            body_parts.append(f"--{boundary}\r\n".encode("utf-8"))
            body_parts.append(
                f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'.encode("utf-8")
            )
            body_parts.append(f"Content-Type: {mimetype}\r\n\r\n".encode("utf-8"))
            body_parts.append(data)
            body_parts.append(b"\r\n")
        body_parts.append(f"--{boundary}--\r\n".encode("utf-8"))

        req = request.Request(
            self._url("posts"),
            data=b"".join(body_parts),
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": f"multipart/form-data; boundary={boundary}",
            },
            method="POST",
        )
        self._send(req, "post")
        logger.info("Post created (%d attachment(s))", len(files))

    def fetch_json(self, endpoint: str, decode: Callable[[Any], Any] | None = None) -> Any:
        """GET ``{base_url}/{endpoint}`` and decode it, retrying any failure.

        Attempts are separated by a fixed delay; the last error is raised
        once ``max_retries`` attempts have failed. Anything ``decode`` raises
        counts as a :class:`DecodeError`.
        """
        url = self._url(endpoint)
        attempt = 0
        while True:
            attempt += 1
            try:
                body = self._send(request.Request(url, headers={"Accept": "application/json"}, method="GET"), "fetch")
                return self._decode(endpoint, body, decode)
            except SocialStudioError as exc:
                logger.error("Attempt %d failed for endpoint '%s': %s", attempt, endpoint, exc)
                if attempt >= self.max_retries:
                    raise
                self._sleep(self.retry_delay)

    @staticmethod
    def _decode(endpoint: str, body: bytes, decode: Callable[[Any], Any] | None) -> Any:
        try:
            payload = json.loads(body.decode("utf-8"))
            return decode(payload) if decode is not None else payload
        except SocialStudioError:
            raise
        except Exception as exc:
            raise DecodeError(f"unexpected payload from {endpoint}: {exc!r}") from exc
