"""Unit tests for NotificationRouter."""

from unittest.mock import MagicMock

import pytest

from timekeeper.compliance import ComplianceIssue, IssueKind
from timekeeper.enrichment import StatusKind
from timekeeper.identity import IdentityMap
from timekeeper.notifications import UNASSIGNED, DeliveryFailed, NotificationRouter

BOTH = (IssueKind.TIME_NOT_TRACKED, IssueKind.STALE_UPDATE)


@pytest.fixture
def identities() -> IdentityMap:
    return IdentityMap(
        {"Jane Doe": "U_JANE", "John Roe": "U_JOHN", "Boss Person": "U_BOSS"},
        {"Alpha": ["Boss Person"]},
    )


@pytest.fixture
def mock_notifier() -> MagicMock:
    return MagicMock()


@pytest.fixture
def router(mock_notifier: MagicMock, identities: IdentityMap) -> NotificationRouter:
    return NotificationRouter(mock_notifier, identities)


@pytest.mark.unit
class TestGroupByIdentity:
    """Tests for per-person grouping."""

    def test_groups_by_identity_then_space(self, router, make_task) -> None:
        a = ComplianceIssue(make_task(id="a", space_name="Alpha"), BOTH)
        b = ComplianceIssue(make_task(id="b", space_name="Beta"), BOTH)
        c = ComplianceIssue(make_task(id="c", space_name="Alpha"), BOTH)

        grouped = router.group_by_identity([a, b, c])

        assert grouped == {"U_JANE": {"Alpha": [a, c], "Beta": [b]}}
        assert list(grouped["U_JANE"]) == ["Alpha", "Beta"]

    def test_fans_out_to_every_responsible_person(self, router, make_task) -> None:
        issue = ComplianceIssue(make_task(responsible_identities=("Jane Doe", "john roe")), BOTH)

        grouped = router.group_by_identity([issue])

        assert set(grouped) == {"U_JANE", "U_JOHN"}

    def test_unresolvable_task_excluded(self, router, make_task) -> None:
        issue = ComplianceIssue(make_task(responsible_identities=("Stranger",)), BOTH)

        assert router.group_by_identity([issue]) == {}


@pytest.mark.unit
class TestGroupForManagers:
    """Tests for manager summaries."""

    def test_groups_managed_space_by_primary_person(self, router, make_task) -> None:
        a = ComplianceIssue(
            make_task(id="a", responsible_identities=("John Roe", "Jane Doe")), BOTH
        )
        b = ComplianceIssue(make_task(id="b", responsible_identities=("Jane Doe",)), BOTH)
        beta = ComplianceIssue(make_task(id="x", space_name="Beta"), BOTH)

        grouped = router.group_for_managers([a, b, beta])

        assert grouped == {"Alpha": {"John Roe": [a], "Jane Doe": [b]}}

    def test_task_without_responsible_is_unassigned(self, router, make_task) -> None:
        issue = ComplianceIssue(
            make_task(
                status="ready to prod",
                status_kind=StatusKind.DEPLOY,
                responsible_identities=(),
            ),
            BOTH,
        )

        assert router.group_for_managers([issue]) == {"Alpha": {UNASSIGNED: [issue]}}


@pytest.mark.unit
class TestSendDigests:
    """Tests for send_digests."""

    def test_sends_personal_and_manager_digests(
        self, router, mock_notifier: MagicMock, make_task
    ) -> None:
        issue = ComplianceIssue(make_task(name="Build login"), BOTH)

        report = router.send_digests([issue])

        assert report.sent == ["U_JANE", "U_BOSS"]
        recipients = [c.args[0] for c in mock_notifier.send.call_args_list]
        assert recipients == ["U_JANE", "U_BOSS"]
        personal_text = mock_notifier.send.call_args_list[0].args[1]
        manager_text = mock_notifier.send.call_args_list[1].args[1]
        assert "*Alpha*" in personal_text
        assert "Build login" in personal_text
        assert "*Jane Doe*" in manager_text

    def test_failure_does_not_block_other_recipients(
        self, router, mock_notifier: MagicMock, make_task
    ) -> None:
        def send(identity: str, text: str) -> None:
            if identity == "U_JANE":
                raise DeliveryFailed(identity, "channel_not_found")

        mock_notifier.send.side_effect = send
        issue = ComplianceIssue(make_task(responsible_identities=("Jane Doe", "John Roe")), BOTH)

        report = router.send_digests([issue])

        assert report.failed == [("U_JANE", "channel_not_found")]
        assert report.sent == ["U_JOHN", "U_BOSS"]
        assert report.attempted == 3


@pytest.mark.unit
class TestReviewerAlerts:
    """Tests for send_reviewer_alerts."""

    def test_alerts_each_native_assignee(
        self, router, mock_notifier: MagicMock, make_task
    ) -> None:
        task = make_task(
            name="Review me",
            status="code review",
            status_kind=StatusKind.REVIEW,
            responsible_identities=(),
            assignees=("Jane Doe", "John Roe", "Stranger"),
            needs_reviewer_assignment=True,
        )

        report = router.send_reviewer_alerts([task])

        assert report.sent == ["U_JANE", "U_JOHN"]
        text = mock_notifier.send.call_args_list[0].args[1]
        assert "Review me" in text
        assert "code review" in text
        assert "Alpha" in text
        assert task.url in text

    def test_failed_alert_does_not_block_other_assignees(
        self, router, mock_notifier: MagicMock, make_task
    ) -> None:
        def send(identity: str, text: str) -> None:
            if identity == "U_JANE":
                raise DeliveryFailed(identity, "channel_not_found")

        mock_notifier.send.side_effect = send
        task = make_task(
            status="code review",
            status_kind=StatusKind.REVIEW,
            responsible_identities=(),
            assignees=("Jane Doe", "John Roe"),
            needs_reviewer_assignment=True,
        )

        report = router.send_reviewer_alerts([task])

        assert report.failed == [("U_JANE", "channel_not_found")]
        assert report.sent == ["U_JOHN"]
        assert mock_notifier.send.call_count == 2
