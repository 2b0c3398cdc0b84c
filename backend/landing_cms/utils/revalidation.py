"""
Cache revalidation client.

The public site renders pages statically; after a production publish the
backend asks it to drop the cached copy of each affected path.

Used endpoint:
- POST {REVALIDATE_URL}  {"path": "/home"}  -> 2xx
"""

from __future__ import annotations

from typing import Iterable, Optional

import httpx
from flask import current_app


class RevalidationError(RuntimeError):
    pass


class CacheRevalidator:
    def __init__(self, *, url: Optional[str], secret: Optional[str] = None, timeout_s: float = 5.0):
        self.url = (url or "").strip() or None
        self.secret = secret
        self.timeout_s = timeout_s

    def revalidate(self, path: str) -> None:
        if not self.url:
            current_app.logger.debug("Revalidation disabled, skipping %s", path)
            return

        headers = {}
        if self.secret:
            headers["Authorization"] = f"Bearer {self.secret}"

        try:
            resp = httpx.post(self.url, json={"path": path}, headers=headers, timeout=self.timeout_s)
        except httpx.HTTPError as exc:
            raise RevalidationError(f"Revalidation request failed for {path}: {exc}") from exc

        if resp.status_code >= 300:
            body = resp.text[:200]
            raise RevalidationError(f"Revalidation of {path} returned {resp.status_code} {body}")


def get_revalidator() -> CacheRevalidator:
    return current_app.extensions["revalidator"]


def revalidate_paths(paths: Iterable[str]) -> list[str]:
    """
    Best-effort revalidation, run after the publish has committed.

    Failures are logged and returned, never raised.
    """
    revalidator = get_revalidator()
    failed: list[str] = []

    for path in paths:
        try:
            revalidator.revalidate(path)
        except Exception as exc:
            current_app.logger.error("Error revalidating path %s: %s", path, exc)
            failed.append(path)

    return failed
