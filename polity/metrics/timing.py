"""Performance timing instrumentation for group detection."""

from dataclasses import dataclass


@dataclass
class DetectionTiming:
    """Timing breakdown for a single detect() call."""

    epoch: int = 0
    graph_ms: float = 0.0
    clique_ms: float = 0.0
    metrics_ms: float = 0.0
    matching_ms: float = 0.0
    rivalry_ms: float = 0.0
    total_ms: float = 0.0
    vertices: int = 0  # after core pruning
    cliques: int = 0
    skipped: bool = False


class DetectionMonitor:
    """Keeps per-epoch detection timings and summarizes them."""

    def __init__(self, max_history: int = 1000):
        self.max_history = max_history
        self._timings: list[DetectionTiming] = []
        self._skipped_epochs: list[int] = []

    def record(self, timing: DetectionTiming) -> None:
        self._timings.append(timing)
        if len(self._timings) > self.max_history:
            self._timings = self._timings[-self.max_history :]
        if timing.skipped:
            self._skipped_epochs.append(timing.epoch)
            if len(self._skipped_epochs) > self.max_history:
                self._skipped_epochs = self._skipped_epochs[-self.max_history :]

    @property
    def last(self) -> DetectionTiming | None:
        return self._timings[-1] if self._timings else None

    @property
    def skipped_epochs(self) -> list[int]:
        return list(self._skipped_epochs)

    @property
    def summary(self) -> dict:
        if not self._timings:
            return {}
        n = len(self._timings)
        return {
            "total_epochs": n,
            "avg_total_ms": sum(t.total_ms for t in self._timings) / n,
            "avg_clique_ms": sum(t.clique_ms for t in self._timings) / n,
            "slowest_epoch_ms": max(t.total_ms for t in self._timings),
            "max_vertices": max(t.vertices for t in self._timings),
            "skipped_epochs": len(self._skipped_epochs),
        }
