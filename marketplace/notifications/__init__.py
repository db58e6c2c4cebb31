"""Notifications — исходящие доменные события движка."""

from .outbox import EventHandler, EventOutbox

__all__ = [
    "EventHandler",
    "EventOutbox",
]
