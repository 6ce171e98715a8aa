"""Operation event dispatcher."""

from motorent.application.events.dispatcher import EventDispatcher, EventHandler, Subscription

__all__ = ["EventDispatcher", "EventHandler", "Subscription"]
