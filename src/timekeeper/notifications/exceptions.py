"""Custom exceptions for notification delivery."""


class NotificationError(Exception):
    """Base exception for notification errors."""


class DeliveryFailed(NotificationError):
    """The notification sink rejected or could not deliver a message."""

    def __init__(self, identity: str, detail: str) -> None:
        super().__init__(f"Delivery to {identity} failed: {detail}")
        self.identity = identity
        self.detail = detail
