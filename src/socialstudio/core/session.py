# -*- coding: utf-8 -*-
"""Explicit per-run session: settings, signed-in user, navigation and services."""

from __future__ import annotations

import logging
import queue
from concurrent.futures import Future
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from PIL import Image

from socialstudio.config import feature_enabled, load_config, save_config
from socialstudio.constants import AUTH_TOKEN_KEY, DEFAULT_SECRETS_FILE, DEFAULT_SETTINGS_FILE
from socialstudio.core.image_editor import ImageBinding, ImageEditor
from socialstudio.core.secret_store import FileSecretStore, MemorySecretStore, SecretStore
from socialstudio.core.task_runner import TaskRunner, failed_future
from socialstudio.errors import ValidationError
from socialstudio.integrations.backend_client import BackendClient
from socialstudio.models.user import User
from socialstudio.pipeline.audio_merger import AudioMerger
from socialstudio.pipeline.exporter import CompositionExporter
from socialstudio.pipeline.video_trimmer import VideoTrimmer

logger = logging.getLogger(__name__)

UiCall = Callable[[], None]
Dispatcher = Callable[[UiCall], None]


class ViewMode(str, Enum):
    DASHBOARD = "dashboard"
    FORUM = "forum"
    PROFILE = "profile"
    STORE = "store"


class Session:
    """Everything the screens share, passed down explicitly.

    Open it with :meth:`open` (or construct it directly in tests) and close it
    when the app exits; it also works as a context manager.

    Network calls run on the task runner, but the session's own state (the
    signed-in user) is only changed on the UI thread. Successful results are
    handed to ``dispatcher`` as zero-argument updates. Without a dispatcher
    they wait in a queue until :meth:`process_pending` is called from the UI
    thread; a Qt app passes ``gui.workers.UiDispatcher`` instead.
    """

    def __init__(
        self,
        config: dict[str, Any],
        *,
        secret_store: SecretStore | None = None,
        client: BackendClient | None = None,
        runner: TaskRunner | None = None,
        config_path: str | Path | None = None,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        self.config = config
        self.config_path = Path(config_path) if config_path else None
        self.secret_store = secret_store or MemorySecretStore()
        backend = config.get("backend", {})
        self.client = client or BackendClient(
            str(backend.get("base_url", "")),
            timeout=float(backend.get("timeout_seconds", 15.0)),
            max_retries=int(backend.get("max_retries", 3)),
            retry_delay=float(backend.get("retry_delay_seconds", 0.5)),
        )
        self.runner = runner or TaskRunner(thread_name_prefix="socialstudio-session")
        self._pending: queue.SimpleQueue[UiCall] = queue.SimpleQueue()
        self.dispatcher: Dispatcher = dispatcher or self._pending.put
        self._exporter: CompositionExporter | None = None
        self.user = User()
        self.current_view = ViewMode.DASHBOARD
        self.previous_view = ViewMode.PROFILE
        self._closed = False

    @classmethod
    def open(
        cls,
        config_path: str | Path | None = None,
        secret_store: SecretStore | None = None,
        dispatcher: Dispatcher | None = None,
    ) -> Session:
        """Load settings from disk; secrets default to a file beside them."""
        path = Path(config_path or DEFAULT_SETTINGS_FILE)
        secret_store = secret_store or FileSecretStore(path.parent / DEFAULT_SECRETS_FILE)
        session = cls(load_config(path), secret_store=secret_store, config_path=path, dispatcher=dispatcher)
        logger.info("Session opened (signed in: %s)", session.is_authenticated)
        return session

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.runner.shutdown(wait_for_tasks=True)
        if self.config_path is not None:
            save_config(self.config, self.config_path)
        logger.info("Session closed")

    def __enter__(self) -> Session:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def auth_token(self) -> str:
        data = self.secret_store.load(AUTH_TOKEN_KEY)
        return data.decode("utf-8") if data else ""

    @property
    def is_authenticated(self) -> bool:
        return bool(self.auth_token)

    def feature_enabled(self, key: str) -> bool:
        return feature_enabled(self.config, key)

    def navigate(self, mode: ViewMode | str) -> None:
        target = ViewMode(mode)
        if target is self.current_view:
            return
        self.previous_view = self.current_view
        self.current_view = target

    def process_pending(self) -> int:
        """Apply queued state updates on the calling thread; returns how many ran."""
        applied = 0
        while True:
            try:
                update = self._pending.get_nowait()
            except queue.Empty:
                return applied
            update()
            applied += 1

    def _submit(self, name: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        if self._closed:
            return failed_future(RuntimeError("Session is closed"))
        return self.runner.submit(name, func, *args, **kwargs)

    def _on_success(self, future: Future, apply: Callable[[Any], None]) -> Future:
        """Chain ``future`` so it resolves only after ``apply`` has been dispatched."""
        chained: Future = Future()

        def _done(done: Future) -> None:
            if done.cancelled():
                chained.cancel()
                return
            exc = done.exception()
            if exc is not None:
                chained.set_exception(exc)
                return
            result = done.result()
            self.dispatcher(lambda: apply(result))
            chained.set_result(result)

        future.add_done_callback(_done)
        return chained

    def login(self, email: str, password: str) -> Future:
        """Sign in; on success the token is kept in the secret store."""

        def _login() -> str:
            token = self.client.login(email, password)
            if not self.secret_store.save(AUTH_TOKEN_KEY, token.encode("utf-8")):
                logger.error("Auth token could not be persisted")
            return token

        return self._on_success(self._submit("login", _login), lambda _token: self._signed_in(email))

    def _signed_in(self, email: str) -> None:
        self.user.email = email

    def logout(self) -> None:
        self.secret_store.delete(AUTH_TOKEN_KEY)
        self.user = User()
        self.current_view = ViewMode.DASHBOARD

    def register(self, email: str, password: str, password_confirmation: str) -> Future:
        return self._submit("register", self.client.register, email, password, password_confirmation)

    def create_post(
        self,
        content: str,
        image: Image.Image | None = None,
        video_path: str | Path | None = None,
    ) -> Future:
        token = self.auth_token
        if not token:
            return failed_future(ValidationError("Sign in before posting"))
        quality = int(self.config.get("media", {}).get("jpeg_quality", 80))
        return self._submit(
            "create_post",
            self.client.create_post,
            content,
            token=token,
            image=image,
            video_path=video_path,
            jpeg_quality=quality,
        )

    def fetch(self, endpoint: str, decode: Callable[[Any], Any] | None = None) -> Future:
        return self._submit(f"fetch:{endpoint}", self.client.fetch_json, endpoint, decode)

    def refresh_user(self, endpoint: str = "me") -> Future:
        """Fetch the user document; the session user is replaced once the update is dispatched."""
        future = self._submit("refresh_user", self.client.fetch_json, endpoint, User.from_dict)
        return self._on_success(future, self._replace_user)

    def _replace_user(self, user: User) -> None:
        self.user = user

    def _shared_exporter(self) -> CompositionExporter:
        if self._exporter is None:
            self._exporter = CompositionExporter(runner=self.runner)
        return self._exporter

    def video_trimmer(self) -> VideoTrimmer:
        """Trimmer writing where ``media`` settings say, on the session's runner."""
        return VideoTrimmer.from_config(self.config, exporter=self._shared_exporter())

    def audio_merger(self) -> AudioMerger:
        return AudioMerger.from_config(self.config, exporter=self._shared_exporter())

    def image_editor(self, binding: ImageBinding) -> ImageEditor:
        return ImageEditor.from_config(binding, self.config)
