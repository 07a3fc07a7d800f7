"""Unit tests for core/notify.py"""

import pytest
import requests

from mdvault.core import notify
from mdvault.core.notify import build_payload, find_conflicts, send_notification


class _Response:
    def __init__(self, status: int = 200):
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")


@pytest.fixture(name="posts")
def posts_fixture(monkeypatch):
    """Capture requests.post calls made by the notify module."""
    calls = []

    def fake_post(url, **kwargs):
        calls.append((url, kwargs))
        return _Response()

    monkeypatch.setattr(notify.requests, "post", fake_post)
    return calls


def test_find_conflicts_uses_given_pattern(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "note.sync-conflict-1.md").write_text("x")
    (tmp_path / "sub" / "b.sync-conflict-2.md").write_text("x")
    (tmp_path / "note.md").write_text("x")
    assert find_conflicts(tmp_path, "*.sync-conflict-*") == [
        "note.sync-conflict-1.md",
        "sub/b.sync-conflict-2.md",
    ]


def test_find_conflicts_none(tmp_path):
    (tmp_path / "note.md").write_text("x")
    assert find_conflicts(tmp_path, "*conflict*") == []


def test_build_payload():
    headers, message = build_payload(["a.md", "b.md"])
    assert headers == {"Title": "2 sync conflicts found", "Priority": "high"}
    assert message == "a.md\nb.md"


def test_send_notification_posts_to_topic(posts):
    send_notification("https://ntfy.example/", "vault", ["a.md"])
    (url, kwargs), = posts
    assert url == "https://ntfy.example/vault"
    assert kwargs["data"] == b"a.md"
    assert kwargs["headers"]["Title"] == "1 sync conflicts found"
    assert kwargs["timeout"] == notify.DEFAULT_TIMEOUT


def test_send_notification_raises_on_http_error(monkeypatch):
    monkeypatch.setattr(notify.requests, "post", lambda url, **kwargs: _Response(500))
    with pytest.raises(requests.HTTPError):
        send_notification("https://ntfy.example", "vault", ["a.md"])
