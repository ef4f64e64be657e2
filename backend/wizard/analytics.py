"""
Analytics tracking for a wizard session.

Events are appended to an in-memory data layer (same shape the tag manager consumes:
{"event": name, **params, "timestamp": iso}) and logged. One-time markers such as
scroll-depth thresholds are held per tracker, so two sessions never share them.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Set

logger = logging.getLogger(__name__)

SCROLL_DEPTH_THRESHOLDS = (25, 50, 75, 90)


class AnalyticsTracker:
    def __init__(self, sink: Optional[Callable[[Dict[str, Any]], None]] = None):
        """
        Args:
            sink: Optional callable receiving each event dict (e.g. a tag-manager push).
        """
        self.data_layer: List[Dict[str, Any]] = []
        self._sink = sink
        self._scroll_marks: Set[int] = set()

    def track(self, event_name: str, **parameters: Any) -> Dict[str, Any]:
        event = {
            "event": event_name,
            **parameters,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self.data_layer.append(event)
        if self._sink is not None:
            self._sink(event)
        logger.info("Analytics Event: %s %s", event_name, parameters)
        return event

    def track_scroll_depth(self, percent: float) -> List[Dict[str, Any]]:
        """Fire scroll_depth once per threshold reached; returns the events fired by this call."""
        fired = []
        for threshold in SCROLL_DEPTH_THRESHOLDS:
            if percent >= threshold and threshold not in self._scroll_marks:
                self._scroll_marks.add(threshold)
                fired.append(self.track("scroll_depth", percent_scrolled=threshold))
        return fired

    def events_named(self, event_name: str) -> List[Dict[str, Any]]:
        return [e for e in self.data_layer if e["event"] == event_name]
