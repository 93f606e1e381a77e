"""CompliancePipeline - One full walk, enrich, classify and notify run."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from timekeeper.clickup import ClickUpClient, ClickUpError
from timekeeper.compliance import ComplianceFilter
from timekeeper.enrichment import TaskEnricher, build_activity_signal, build_status_rules
from timekeeper.hierarchy import HierarchyWalker
from timekeeper.identity import IdentityMap
from timekeeper.notifications import LogNotifier, NotificationRouter, SlackNotifier
from timekeeper.pipeline.exceptions import PipelineError
from timekeeper.pipeline.models import RunResult

if TYPE_CHECKING:
    from timekeeper.config import TimekeeperConfig
    from timekeeper.hierarchy import TaskSource
    from timekeeper.notifications import Notifier

logger = logging.getLogger(__name__)


class CompliancePipeline:
    """Runs the walker, enricher, filter and router in sequence.

    Every run re-reads the whole hierarchy. Nothing is carried from one run
    to the next, so two runs against an unchanged workspace classify the
    same tasks the same way.
    """

    def __init__(
        self,
        config: TimekeeperConfig,
        source: TaskSource,
        notifier: Notifier,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Run configuration.
            source: ClickUp hierarchy source.
            notifier: Sink for reminders and digests.
        """
        self.config = config
        self.source = source
        self.notifier = notifier
        self.identities = IdentityMap(config.identities, config.managers)

    def run(self, now: datetime | None = None) -> RunResult:
        """Run one compliance check.

        Args:
            now: Reference time for due dates and "today". Defaults to now.

        Returns:
            Counts, classification and delivery outcome.

        Raises:
            SourceUnavailable: If the workspace's spaces cannot be listed.
        """
        now = now or datetime.now()
        config = self.config
        logger.info("Starting compliance run for team %s", config.team_id)

        walker = HierarchyWalker(self.source, config.tracked_spaces, config.max_concurrency)
        raw_tasks = walker.collect_active_tasks(config.team_id, now=now)

        enricher = TaskEnricher(
            activity=build_activity_signal(config.activity_source, self.source),
            rules=build_status_rules(config.review_statuses),
            max_concurrency=config.max_concurrency,
        )
        tasks = enricher.enrich_all(raw_tasks)

        report = ComplianceFilter(config.relevant_statuses, today=now.date()).classify_all(tasks)
        result = RunResult(collected=len(raw_tasks), enriched=len(tasks), report=report)

        router = NotificationRouter(self.notifier, self.identities)
        if report.reviewer_assignments:
            result.reviewer_alerts = router.send_reviewer_alerts(report.reviewer_assignments)

        if report.issues:
            result.digests = router.send_digests(report.issues)
        else:
            logger.info("No missing")

        deliveries = result.deliveries
        logger.info(
            "Run complete: %d issues, %d reviewer alerts, %d messages sent, %d failed",
            len(report.issues),
            len(report.reviewer_assignments),
            len(deliveries.sent),
            len(deliveries.failed),
        )
        return result


def run_check(config: TimekeeperConfig, dry_run: bool = False) -> RunResult:
    """Run one check with fresh ClickUp and Slack clients.

    Clients are created per run and closed afterwards, so no connection
    outlives the run.

    Args:
        config: Run configuration; tokens must be set.
        dry_run: Log messages instead of sending them to Slack.

    Raises:
        PipelineError: If the workspace could not be read.
    """
    notifier: SlackNotifier | LogNotifier
    if dry_run:
        notifier = LogNotifier()
    else:
        notifier = SlackNotifier(config.slack_token)

    source = ClickUpClient(
        config.clickup_token,
        max_concurrency=config.max_concurrency,
        request_delay=config.request_delay,
    )
    try:
        return CompliancePipeline(config, source, notifier).run()
    except ClickUpError as e:
        raise PipelineError(f"Check failed: {e}") from e
    finally:
        source.close()
        notifier.close()
