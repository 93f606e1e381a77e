"""Unit tests for TaskEnricher and activity signals."""

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

from timekeeper.clickup import SourceUnavailable
from timekeeper.config import ConfigError
from timekeeper.enrichment import (
    CommentActivity,
    StatusFieldActivity,
    StatusKind,
    TaskEnricher,
    build_activity_signal,
)
from timekeeper.hierarchy import RawTask


def _millis(moment: datetime) -> str:
    return str(int(moment.timestamp() * 1000))


def _comment(author: str, moment: datetime) -> dict:
    return {"user": {"username": author}, "date": _millis(moment)}


@pytest.fixture
def mock_source() -> MagicMock:
    """Create a mock comment source with no comments."""
    source = MagicMock()
    source.list_comments.return_value = []
    return source


@pytest.fixture
def enricher(mock_source: MagicMock) -> TaskEnricher:
    return TaskEnricher(CommentActivity(mock_source), max_concurrency=2)


@pytest.mark.unit
class TestEnrich:
    """Tests for enrich."""

    def test_basic_fields(self, enricher: TaskEnricher, task_payload) -> None:
        payload = task_payload(
            task_id="t9",
            name="Build login",
            status="In Progress",
            assignees=["Jane Doe"],
            custom_fields=[{"name": "Time Tracked", "value": "90"}],
        )

        task = enricher.enrich(RawTask(payload=payload, space_name="Alpha"))

        assert task is not None
        assert task.id == "t9"
        assert task.name == "Build login"
        assert task.url == "https://app.clickup.com/t/t9"
        assert task.space_name == "Alpha"
        assert task.status == "in progress"
        assert task.status_kind == StatusKind.DEFAULT
        assert task.time_spent == 90.0
        assert task.responsible_identities == ("Jane Doe",)
        assert task.needs_reviewer_assignment is False

    def test_missing_status_skipped(self, enricher: TaskEnricher, task_payload) -> None:
        raw = RawTask(payload=task_payload(status=None), space_name="Alpha")

        assert enricher.enrich(raw) is None

    def test_code_review_without_reviewer_needs_assignment(
        self, enricher: TaskEnricher, task_payload
    ) -> None:
        payload = task_payload(status="code review", assignees=["Jane Doe"])

        task = enricher.enrich(RawTask(payload=payload, space_name="Alpha"))

        assert task.responsible_identities == ()
        assert task.assignees == ("Jane Doe",)
        assert task.needs_reviewer_assignment is True

    def test_code_review_uses_review_field_only(
        self, enricher: TaskEnricher, task_payload
    ) -> None:
        payload = task_payload(
            status="code review",
            assignees=["Jane Doe"],
            custom_fields=[
                {"name": "Code Review & QA", "value": [{"username": "Rev Iewer"}]},
                {"name": "Code Reviewer & QA Time Tracked", "value": "15"},
                {"name": "Time Tracked", "value": "120"},
            ],
        )

        task = enricher.enrich(RawTask(payload=payload, space_name="Alpha"))

        assert task.responsible_identities == ("Rev Iewer",)
        assert task.time_spent == 15.0
        assert task.needs_reviewer_assignment is False

    def test_deployer_missing_does_not_need_reviewer(
        self, enricher: TaskEnricher, task_payload
    ) -> None:
        payload = task_payload(status="ready to prod", assignees=["Jane Doe"])

        task = enricher.enrich(RawTask(payload=payload, space_name="Alpha"))

        assert task.status_kind == StatusKind.DEPLOY
        assert task.responsible_identities == ()
        assert task.needs_reviewer_assignment is False

    def test_enrich_all_keeps_order_and_drops_skips(
        self, enricher: TaskEnricher, task_payload
    ) -> None:
        raws = [
            RawTask(payload=task_payload(task_id=f"t{i}", status=s), space_name="Alpha")
            for i, s in enumerate(["in progress", None, "testing", "done"])
        ]

        tasks = enricher.enrich_all(raws)

        assert [t.id for t in tasks] == ["t0", "t2", "t3"]


@pytest.mark.unit
class TestCommentActivity:
    """Tests for the comment-based activity signal."""

    def test_latest_comment_by_responsible_person(
        self, mock_source: MagicMock, now: datetime
    ) -> None:
        mock_source.list_comments.return_value = [
            _comment("janedoe", now - timedelta(days=2)),
            _comment("JANE DOE", now - timedelta(hours=1)),
            _comment("Someone Else", now),
        ]

        last = CommentActivity(mock_source).last_activity({"id": "t1"}, ("Jane Doe",))

        assert last == now - timedelta(hours=1)

    def test_no_matching_comments(self, mock_source: MagicMock, now: datetime) -> None:
        mock_source.list_comments.return_value = [_comment("Someone Else", now)]

        assert CommentActivity(mock_source).last_activity({"id": "t1"}, ("Jane Doe",)) is None

    def test_no_responsible_skips_fetch(self, mock_source: MagicMock) -> None:
        assert CommentActivity(mock_source).last_activity({"id": "t1"}, ()) is None
        mock_source.list_comments.assert_not_called()

    def test_fetch_failure_counts_as_no_comments(self, mock_source: MagicMock) -> None:
        mock_source.list_comments.side_effect = SourceUnavailable("timeout")

        assert CommentActivity(mock_source).last_activity({"id": "t1"}, ("Jane Doe",)) is None


@pytest.mark.unit
class TestStatusFieldActivity:
    """Tests for the status-update custom field signal."""

    def test_uses_field_update_time(self, now: datetime) -> None:
        payload = {
            "custom_fields": [
                {"name": "Status Update", "value": "Halfway", "date_updated": _millis(now)}
            ]
        }

        assert StatusFieldActivity().last_activity(payload, ()) == now

    def test_falls_back_to_task_update_time(self, now: datetime) -> None:
        payload = {
            "date_updated": _millis(now),
            "custom_fields": [{"name": "status update", "value": "Done soon"}],
        }

        assert StatusFieldActivity().last_activity(payload, ("Jane",)) == now

    def test_empty_field_is_absent(self, now: datetime) -> None:
        payload = {
            "date_updated": _millis(now),
            "custom_fields": [{"name": "status update", "value": ""}],
        }

        assert StatusFieldActivity().last_activity(payload, ("Jane",)) is None


@pytest.mark.unit
def test_build_activity_signal(mock_source: MagicMock) -> None:
    assert isinstance(build_activity_signal("comments", mock_source), CommentActivity)
    assert isinstance(build_activity_signal("status_field", mock_source), StatusFieldActivity)
    with pytest.raises(ConfigError):
        build_activity_signal("telepathy", mock_source)
