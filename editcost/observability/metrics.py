"""Simple per-call timing of distance evaluations."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
import time

from editcost.calculator import StringDistanceCalculator
from editcost.constants import DEFAULT_METHOD


@dataclass
class DistanceMeasurement:
    method: str
    source: str
    target: str
    distance: float
    elapsed_seconds: float
    timestamp: str

    def to_dict(self) -> dict:
        return asdict(self)


def measure(
    calculator: StringDistanceCalculator,
    source: str,
    target: str,
    method: str = DEFAULT_METHOD,
) -> DistanceMeasurement:
    """Evaluate one distance and record how long it took."""
    timestamp = datetime.now(timezone.utc).isoformat()
    started = time.perf_counter()
    distance = calculator.distance(source, target, method)
    elapsed = time.perf_counter() - started
    return DistanceMeasurement(
        method=method,
        source=source,
        target=target,
        distance=distance,
        elapsed_seconds=elapsed,
        timestamp=timestamp,
    )
