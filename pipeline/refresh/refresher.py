"""
Dashboard refresher.

Re-fetches the reading set on a fixed interval and keeps the latest
computed DashboardSnapshot (normalized cities, stats, critical areas).
The job lives on an APScheduler BackgroundScheduler owned by this object:
start() on application startup, stop() on teardown.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

from apscheduler.schedulers.background import BackgroundScheduler

from pipeline.aggregation.stats import Stats, aggregate, critical_areas
from pipeline.classification.normalizer import NormalizedReading, normalize

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 60 * 60
JOB_ID = "readings_refresh"


@dataclass
class DashboardSnapshot:
    """Result of one refresh cycle."""
    cities: List[NormalizedReading] = field(default_factory=list)
    stats: Stats = field(default_factory=lambda: aggregate([]))
    critical: List[NormalizedReading] = field(default_factory=list)
    error: Optional[str] = None
    refreshed_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "cities": [c.to_dict() for c in self.cities],
            "stats": {
                "mean_aqi": self.stats.mean_aqi,
                "count": self.stats.count,
                "worst": self.stats.worst.name if self.stats.worst else None,
                "best": self.stats.best.name if self.stats.best else None,
            },
            "critical": [c.to_dict() for c in self.critical],
            "error": self.error,
            "refreshed_at": self.refreshed_at.isoformat() if self.refreshed_at else None,
        }


class ReadingsRefresher:
    """
    Periodically pulls readings through `fetch` and rebuilds the snapshot.

    Args:
        fetch: Zero-argument callable returning the current stored readings.
        interval_seconds: Period of the refresh job.
    """

    def __init__(
        self,
        fetch: Callable[[], Sequence],
        interval_seconds: int = DEFAULT_INTERVAL_SECONDS,
    ):
        self._fetch = fetch
        self.interval_seconds = interval_seconds
        self._lock = threading.Lock()
        self._snapshot = DashboardSnapshot()
        self._scheduler: Optional[BackgroundScheduler] = None

    @property
    def snapshot(self) -> DashboardSnapshot:
        with self._lock:
            return self._snapshot

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def refresh_now(self) -> DashboardSnapshot:
        """Run one refresh cycle synchronously and publish its snapshot."""
        now = datetime.now(timezone.utc)
        try:
            cities = [normalize(r) for r in self._fetch()]
        except Exception as e:
            # A failed cycle publishes the error with an empty list
            logger.error("Readings refresh failed: %s", e)
            snapshot = DashboardSnapshot(error=str(e) or "Unknown error", refreshed_at=now)
        else:
            snapshot = DashboardSnapshot(
                cities=cities,
                stats=aggregate(cities),
                critical=critical_areas(cities),
                refreshed_at=now,
            )
            logger.info(
                "Readings refreshed: %d cities, mean AQI %d",
                snapshot.stats.count, snapshot.stats.mean_aqi,
            )

        with self._lock:
            self._snapshot = snapshot
        return snapshot

    def start(self) -> None:
        """Schedule the refresh job; the first run happens immediately."""
        if self.running:
            return
        scheduler = BackgroundScheduler()
        scheduler.add_job(
            func=self.refresh_now,
            trigger="interval",
            seconds=self.interval_seconds,
            next_run_time=datetime.now(timezone.utc),
            id=JOB_ID,
            name="Readings refresh",
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.info("Readings refresher started — every %ds", self.interval_seconds)

    def stop(self) -> None:
        """Cancel the refresh job. Safe to call when not started."""
        if self._scheduler is None:
            return
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Readings refresher stopped")
