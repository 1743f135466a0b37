"""In-process realtime transport."""

from .hub import InProcessRealtimeHub, RealtimeEvent, Subscription

__all__ = ["InProcessRealtimeHub", "RealtimeEvent", "Subscription"]
