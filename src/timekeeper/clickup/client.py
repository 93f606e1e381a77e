"""ClickUpClient - Read-only access to the ClickUp v2 REST API."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any

import httpx

from timekeeper.clickup.exceptions import SourceUnavailable
from timekeeper.logging import sanitize_for_log, truncate_output

logger = logging.getLogger("timekeeper.clickup")

API_BASE = "https://api.clickup.com/api/v2"


class ClickUpClient:
    """Fetches spaces, folders, lists, tasks and comments from ClickUp.

    Every request passes through a bounded semaphore, so no matter how many
    threads share the client, at most ``max_concurrency`` calls are in flight.
    The client is safe to share between threads.
    """

    def __init__(
        self,
        token: str,
        max_concurrency: int = 5,
        request_delay: float = 0.1,
        base_url: str = API_BASE,
    ) -> None:
        """Initialize ClickUp client.

        Args:
            token: ClickUp personal API token
            max_concurrency: Maximum simultaneous in-flight requests
            request_delay: Seconds to pause after each comment fetch
            base_url: ClickUp API base URL (for testing)
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.request_delay = request_delay
        self._limit = threading.BoundedSemaphore(max_concurrency)
        self._client: httpx.Client | None = None
        self._client_lock = threading.Lock()

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the ClickUp API."""
        with self._client_lock:
            if self._client is None:
                self._client = httpx.Client(
                    base_url=self.base_url,
                    headers={"Authorization": self.token},
                    timeout=30.0,
                )
            return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> ClickUpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get(self, endpoint: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Issue a GET request under the concurrency limit.

        Args:
            endpoint: Path relative to the API base, e.g. "/space/1/folder"
            params: Query parameters

        Returns:
            Decoded JSON body

        Raises:
            SourceUnavailable: On transport errors, non-200 responses or bad JSON
        """
        with self._limit:
            try:
                response = self.client.get(endpoint, params=params)
            except httpx.HTTPError as e:
                logger.error("ClickUp API error at %s: %s", endpoint, e)
                raise SourceUnavailable(f"ClickUp request to {endpoint} failed: {e}") from e

        if response.status_code != 200:
            detail = truncate_output(sanitize_for_log(response.text), max_length=500)
            logger.error(
                "ClickUp API error at %s: %s - %s", endpoint, response.status_code, detail
            )
            raise SourceUnavailable(
                f"ClickUp request to {endpoint} failed: {response.status_code} - {detail}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SourceUnavailable(f"ClickUp returned invalid JSON for {endpoint}") from e
        if not isinstance(data, dict):
            raise SourceUnavailable(f"ClickUp returned unexpected payload for {endpoint}")
        return data

    def list_spaces(self, team_id: str) -> list[dict[str, Any]]:
        """Get all spaces in a workspace (team)."""
        spaces: list[dict[str, Any]] = self._get(f"/team/{team_id}/space").get("spaces") or []
        logger.info("Fetched %d spaces", len(spaces))
        return spaces

    def list_folders(self, space_id: str) -> list[dict[str, Any]]:
        """Get all folders in a space."""
        folders: list[dict[str, Any]] = self._get(f"/space/{space_id}/folder").get("folders") or []
        logger.info("Fetched %d folders in space %s", len(folders), space_id)
        return folders

    def list_lists(self, folder_id: str) -> list[dict[str, Any]]:
        """Get all lists (sprints) in a folder, active or not."""
        lists: list[dict[str, Any]] = self._get(f"/folder/{folder_id}/list").get("lists") or []
        logger.debug("Fetched %d lists in folder %s", len(lists), folder_id)
        return lists

    def list_tasks(self, list_id: str, include_closed: bool = True) -> list[dict[str, Any]]:
        """Get the tasks in a list.

        Args:
            list_id: ClickUp list ID
            include_closed: Whether closed tasks are included

        Returns:
            Raw task payloads
        """
        params = {"include_closed": "true" if include_closed else "false"}
        tasks: list[dict[str, Any]] = self._get(f"/list/{list_id}/task", params).get("tasks") or []
        logger.info("Fetched %d tasks in list %s", len(tasks), list_id)
        return tasks

    def list_comments(self, task_id: str) -> list[dict[str, Any]]:
        """Get the comments on a task."""
        comments: list[dict[str, Any]] = self._get(f"/task/{task_id}/comment").get("comments") or []
        if self.request_delay:
            time.sleep(self.request_delay)
        return comments
