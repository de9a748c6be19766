"""Custom exceptions for the deployment editor."""
from __future__ import annotations


class DeploymentError(RuntimeError):
    """Base exception for deployment editor operations."""


class SessionClosedError(DeploymentError):
    """Raised when a finalized or discarded editing session is used again."""

    def __init__(self, state: str) -> None:
        super().__init__(f"Editing session is closed ({state})")
        self.state = state


class EventNotFound(DeploymentError):
    """Raised when a record id is not present on the board."""

    def __init__(self, event_id: str) -> None:
        super().__init__(f"Deployment record {event_id} not found")
        self.event_id = event_id


__all__ = [
    "DeploymentError",
    "SessionClosedError",
    "EventNotFound",
]
