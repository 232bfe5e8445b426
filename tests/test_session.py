# -*- coding: utf-8 -*-
"""Tests for the explicit app session."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from socialstudio.constants import AUTH_TOKEN_KEY
from socialstudio.core.secret_store import MemorySecretStore
from socialstudio.core.session import Session, ViewMode
from socialstudio.errors import ServerError, ValidationError


@pytest.fixture
def session(default_config: dict):
    client = MagicMock()
    session = Session(default_config, secret_store=MemorySecretStore(), client=client)
    yield session
    session.close()


def test_login_stores_token_in_secret_store(session: Session) -> None:
    session.client.login.return_value = "tok-1"
    assert session.login("a@b.c", "pw").result(timeout=5) == "tok-1"
    assert session.secret_store.load(AUTH_TOKEN_KEY) == b"tok-1"
    assert session.is_authenticated
    assert session.process_pending() == 1
    assert session.user.email == "a@b.c"


def test_failed_login_keeps_user_signed_out(session: Session) -> None:
    session.client.login.side_effect = ServerError(401, "authorization")
    future = session.login("a@b.c", "bad")
    assert isinstance(future.exception(timeout=5), ServerError)
    assert session.is_authenticated is False
    assert session.process_pending() == 0


def test_logout_clears_token_and_user(session: Session) -> None:
    session.secret_store.save(AUTH_TOKEN_KEY, b"tok")
    session.user.email = "a@b.c"
    session.navigate(ViewMode.STORE)
    session.logout()
    assert session.auth_token == ""
    assert session.user.email == ""
    assert session.current_view is ViewMode.DASHBOARD


def test_create_post_requires_sign_in(session: Session) -> None:
    future = session.create_post("hello")
    assert isinstance(future.exception(timeout=5), ValidationError)
    session.client.create_post.assert_not_called()


def test_create_post_passes_token_and_quality(session: Session) -> None:
    session.secret_store.save(AUTH_TOKEN_KEY, b"tok")
    session.create_post("hello").result(timeout=5)
    kwargs = session.client.create_post.call_args.kwargs
    assert kwargs["token"] == "tok"
    assert kwargs["jpeg_quality"] == 80


def test_refresh_user_replaces_session_user(session: Session) -> None:
    document = {"email": "me@x.y", "associations": [{"id": "1", "type": "store", "label": "Shop"}]}
    session.client.fetch_json.side_effect = lambda endpoint, decode: decode(document)
    user = session.refresh_user().result(timeout=5)
    session.process_pending()
    assert session.user is user
    assert user.associations[0].label == "Shop"


def test_navigation_remembers_previous_view(session: Session) -> None:
    session.navigate("forum")
    session.navigate(ViewMode.PROFILE)
    assert session.current_view is ViewMode.PROFILE
    assert session.previous_view is ViewMode.FORUM


def test_feature_flags_come_from_config(session: Session) -> None:
    assert session.feature_enabled("Comments") is True
    assert session.feature_enabled("E-Commerce") is False


def test_closed_session_rejects_work(default_config: dict) -> None:
    with Session(default_config, client=MagicMock()) as session:
        pass
    future = session.login("a@b.c", "pw")
    assert isinstance(future.exception(timeout=5), RuntimeError)
    session.close()


def test_open_and_close_persist_settings(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    session = Session.open(path, secret_store=MemorySecretStore())
    session.config["appearance"]["theme"] = "dark"
    session.config["auth"]["auth_token"] = "should-not-persist"
    session.close()

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["appearance"]["theme"] == "dark"
    assert saved["auth"]["auth_token"] == ""


def test_open_defaults_to_file_secret_store(tmp_path: Path) -> None:
    from socialstudio.core.secret_store import FileSecretStore

    session = Session.open(tmp_path / "settings.json")
    session.secret_store.save(AUTH_TOKEN_KEY, b"tok")
    session.close()

    assert isinstance(session.secret_store, FileSecretStore)
    assert (tmp_path / ".secrets.json").exists()
    assert Session.open(tmp_path / "settings.json").auth_token == "tok"


def test_user_state_changes_only_on_dispatching_thread(default_config: dict) -> None:
    task_threads: list[str] = []
    update_threads: list[str] = []
    client = MagicMock()

    def _login(email, password):
        task_threads.append(threading.current_thread().name)
        return "tok"

    client.login.side_effect = _login

    def _dispatch(update):
        update_threads.append(threading.current_thread().name)

    session = Session(default_config, client=client, dispatcher=_dispatch)
    session.login("a@b.c", "pw").result(timeout=5)
    session.close()

    assert task_threads[0].startswith("socialstudio-session")
    assert session.user.email == ""
    assert len(update_threads) == 1


def test_queued_updates_wait_for_process_pending(session: Session) -> None:
    session.client.fetch_json.side_effect = lambda endpoint, decode: decode({"email": "me@x.y"})
    session.refresh_user().result(timeout=5)
    assert session.user.email == ""

    assert session.process_pending() == 1
    assert session.user.email == "me@x.y"


def test_media_services_follow_settings(default_config: dict, tmp_path: Path) -> None:
    from socialstudio.core.image_editor import ImageBinding

    default_config["media"].update(
        {"temp_dir": str(tmp_path), "trim_output_name": "cut.mov", "merge_output_name": "mix.mov", "display_width": 200, "display_height": 100}
    )
    with Session(default_config, client=MagicMock()) as session:
        trimmer = session.video_trimmer()
        merger = session.audio_merger()
        editor = session.image_editor(ImageBinding(None))

        assert trimmer.default_output_path() == tmp_path / "cut.mov"
        assert merger.default_output_path() == tmp_path / "mix.mov"
        assert editor.display_size == (200.0, 100.0)
        assert trimmer.exporter is merger.exporter
        assert trimmer.exporter.runner is session.runner
