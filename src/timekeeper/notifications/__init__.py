"""Notifications - Routes reminders and digests to Slack."""

from timekeeper.notifications.exceptions import DeliveryFailed, NotificationError
from timekeeper.notifications.models import DispatchReport
from timekeeper.notifications.router import UNASSIGNED, NotificationRouter
from timekeeper.notifications.slack import LogNotifier, Notifier, SlackNotifier

__all__ = [
    "UNASSIGNED",
    "DeliveryFailed",
    "DispatchReport",
    "LogNotifier",
    "NotificationError",
    "NotificationRouter",
    "Notifier",
    "SlackNotifier",
]
