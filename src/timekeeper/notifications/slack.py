"""Slack notification sinks."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from timekeeper.logging import sanitize_for_log, truncate_output
from timekeeper.notifications.exceptions import DeliveryFailed

logger = logging.getLogger("timekeeper.notifications")

SLACK_API_BASE = "https://slack.com/api"


class Notifier(Protocol):
    """Interface for a notification sink."""

    def send(self, identity: str, text: str) -> None:
        """Deliver ``text`` to ``identity``; raise DeliveryFailed on failure."""
        ...


class SlackNotifier:
    """Posts direct messages through Slack's chat.postMessage."""

    def __init__(self, token: str, base_url: str = SLACK_API_BASE) -> None:
        """Initialize the Slack notifier.

        Args:
            token: Slack bot token with chat:write scope
            base_url: Slack Web API base URL (for testing)
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the Slack Web API."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Content-Type": "application/json; charset=utf-8",
                },
                timeout=30.0,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def send(self, identity: str, text: str) -> None:
        """Send a message to a Slack user or channel ID.

        Raises:
            DeliveryFailed: If Slack cannot be reached or rejects the message
        """
        payload: dict[str, Any] = {
            "channel": identity,
            "text": text,
            "unfurl_links": False,
            "unfurl_media": False,
        }
        try:
            response = self.client.post("/chat.postMessage", json=payload)
        except httpx.HTTPError as e:
            raise DeliveryFailed(identity, sanitize_for_log(str(e))) from e

        if response.status_code != 200:
            detail = truncate_output(sanitize_for_log(response.text), max_length=500)
            raise DeliveryFailed(identity, f"{response.status_code} - {detail}")

        try:
            data = response.json()
        except ValueError as e:
            raise DeliveryFailed(identity, "invalid JSON response") from e
        if not isinstance(data, dict):
            raise DeliveryFailed(identity, "unexpected response shape")
        if not data.get("ok"):
            raise DeliveryFailed(identity, str(data.get("error", "unknown error")))


class LogNotifier:
    """Dry-run sink that logs messages instead of sending them."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def send(self, identity: str, text: str) -> None:
        self.messages.append((identity, text))
        logger.info("[dry-run] Message for %s:\n%s", identity, text)

    def close(self) -> None:
        pass
