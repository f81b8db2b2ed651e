"""Match bookkeeping with tracing, metrics and logging hooks."""

from __future__ import annotations

import time
from dataclasses import dataclass

from warships.engine.board import Point
from warships.engine.match import Match, ShotResult
from warships.telemetry import get_logger, get_tracer, record_match_metric


@dataclass
class InstrumentedMatch(Match):
    """Wraps Match with a match-long span, match metrics and invalid-shot accounting."""

    def __post_init__(self) -> None:
        self._logger = get_logger("warships.engine")
        self._tracer = get_tracer("warships.engine")
        self._match_span_cm = None
        self._match_span = None
        self._started_at: float | None = None

    def start(self) -> None:
        """Open the span that covers the whole match."""
        self._close_match_span()
        self._started_at = time.perf_counter()
        self._match_span_cm = self._tracer.start_as_current_span("warships.engine.match")
        self._match_span = self._match_span_cm.__enter__()
        record_match_metric("warships_match_started_total", 1)
        self._logger.info("Match started")

    def record_shot(self, point: Point, result: ShotResult) -> frozenset[Point] | None:
        # Per-shot spans and counters are emitted by Match.record_shot.
        try:
            ship = super().record_shot(point, result)
        except ValueError as exc:
            record_match_metric("warships_invalid_shots_total", 1, {"reason": type(exc).__name__})
            if self._match_span is not None:
                self._match_span.record_exception(exc)
            self._logger.error("Invalid shot at (%d,%d): %s", point.row, point.col, exc)
            raise

        if self.finished():
            self._finish_match()
        return ship

    def _finish_match(self) -> None:
        duration = (time.perf_counter() - self._started_at) if self._started_at else 0.0
        record_match_metric("warships_match_completed_total", 1)
        record_match_metric("warships_match_duration_seconds", duration)

        with self._tracer.start_as_current_span("warships.engine.match_complete") as span:
            span.set_attribute("shots", self.shots)
            span.set_attribute("hits", self.hits)
            span.set_attribute("duration_ms", duration * 1000)

        if self._match_span is not None:
            self._match_span.set_attribute("shots", self.shots)
            self._match_span.set_attribute("accuracy", self.accuracy())

        self._logger.info(
            "Match finished. shots=%d accuracy=%.2f duration_s=%.3f",
            self.shots,
            self.accuracy(),
            duration,
        )
        self._close_match_span()

    def _close_match_span(self) -> None:
        if self._match_span_cm is not None:
            self._match_span_cm.__exit__(None, None, None)
            self._match_span_cm = None
            self._match_span = None
