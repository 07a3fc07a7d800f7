"""Sync-conflict file listing and ntfy push notification"""

import logging
from pathlib import Path

import requests


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def find_conflicts(root: Path, pattern: str) -> list[str]:
    """Return vault-relative paths of files matching the caller-supplied glob pattern."""
    return sorted(p.relative_to(root).as_posix() for p in root.rglob(pattern) if p.is_file())


def build_payload(conflicts: list[str]) -> tuple[dict[str, str], str]:
    """Return (headers, message) for an ntfy notification listing the conflicts."""
    headers = {
        "Title": f"{len(conflicts)} sync conflicts found",
        "Priority": "high",
    }
    return headers, "\n".join(conflicts)


def send_notification(ntfy_url: str, topic: str, conflicts: list[str], timeout: float = DEFAULT_TIMEOUT) -> None:
    """POST the conflict list to <ntfy_url>/<topic>; raises requests.RequestException on failure."""
    headers, message = build_payload(conflicts)
    url = f"{ntfy_url.rstrip('/')}/{topic}"
    logger.info("Sending %d conflict(s) to %s", len(conflicts), url)
    resp = requests.post(url, data=message.encode("utf-8"), headers=headers, timeout=timeout)
    resp.raise_for_status()
