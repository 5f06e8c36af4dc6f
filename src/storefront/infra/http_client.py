"""Shared HTTP client for the storefront REST API.

Wraps a ``requests.Session`` with optional retry on rate limiting and a
uniform error type, so every adapter reports transport and status
failures the same way.
"""

import logging
import time

import requests

from ..domain.errors import HttpError

logger = logging.getLogger(__name__)


class HttpClient:
    """Thin ``requests`` wrapper with retry on 429 and bearer auth support.

    Args:
        timeout: Per-request timeout in seconds. ``None`` leaves the
            transport default in place.
        max_retries: Attempts for idempotent GETs. POSTs are never retried.
    """

    def __init__(self, timeout: float | None = None, max_retries: int = 1):
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self.timeout = timeout
        self.max_retries = max(1, max_retries)

    @staticmethod
    def _auth_headers(token: str | None) -> dict:
        return {"Authorization": f"Bearer {token}"} if token else {}

    def get(
        self,
        url: str,
        params: dict | None = None,
        *,
        token: str | None = None,
        retry: bool = True,
    ) -> list | dict:
        """GET ``url`` and return the decoded JSON body.

        ``retry=False`` forces a single attempt regardless of ``max_retries``.

        Raises HttpError on a transport failure or non-2xx status.
        """
        attempts = self.max_retries if retry else 1
        headers = self._auth_headers(token)

        for attempt in range(attempts):
            try:
                resp = self.session.get(
                    url, params=params, headers=headers, timeout=self.timeout,
                )
            except requests.exceptions.RequestException as exc:
                if attempt == attempts - 1:
                    raise HttpError(f"GET {url} failed: {exc}") from exc
                wait = 2 ** (attempt + 1)
                logger.warning(
                    "Request error: %s. Retry in %ds (%d/%d)",
                    exc, wait, attempt + 1, attempts,
                )
                time.sleep(wait)
                continue

            if resp.ok:
                return resp.json()

            if resp.status_code == 429 and attempt < attempts - 1:
                wait = 2 ** (attempt + 1)
                logger.warning("Rate limited (429). Waiting %ds...", wait)
                time.sleep(wait)
                continue

            raise HttpError(
                f"HTTP {resp.status_code}: {resp.text}", status=resp.status_code,
            )

        raise HttpError(f"Max retries ({attempts}) exceeded for {url}")

    def post(self, url: str, payload: dict, *, token: str | None = None) -> dict:
        """POST ``payload`` as JSON. Single attempt, never retried.

        Returns the decoded JSON body, or an empty dict when the server
        answers without one.
        """
        headers = {"Content-Type": "application/json", **self._auth_headers(token)}
        try:
            resp = self.session.post(
                url, json=payload, headers=headers, timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            raise HttpError(f"POST {url} failed: {exc}") from exc

        if not resp.ok:
            raise HttpError(
                f"HTTP {resp.status_code}: {resp.text}", status=resp.status_code,
            )
        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError:
            return {}

    def close(self):
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
