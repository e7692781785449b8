"""
Tests for Module 06 — Dashboard Refresher.
"""
from unittest.mock import MagicMock, patch

from pipeline.refresh.refresher import JOB_ID, DashboardSnapshot, ReadingsRefresher


READINGS = [
    {"id": 1, "city_name": "Delhi", "aqi": 142, "status": "Poor"},
    {"id": 2, "city_name": "Mumbai", "aqi": 58, "status": "Moderate"},
    {"id": 3, "city_name": "Bangalore", "aqi": 42, "status": "Satisfactory"},
    {"id": 4, "city_name": "Ahmedabad", "aqi": 128, "status": "Very Poor"},
]


class TestRefreshNow:
    def test_builds_snapshot(self):
        refresher = ReadingsRefresher(lambda: READINGS)
        snap = refresher.refresh_now()
        assert snap.error is None
        assert [c.name for c in snap.cities] == ["Delhi", "Mumbai", "Bangalore", "Ahmedabad"]
        assert snap.stats.mean_aqi == 93
        assert snap.stats.worst.name == "Delhi"
        assert snap.stats.best.name == "Bangalore"
        assert [c.name for c in snap.critical] == ["Delhi", "Ahmedabad"]
        assert snap.refreshed_at is not None
        assert refresher.snapshot is snap

    def test_failure_publishes_error_and_empty_list(self):
        def broken():
            raise RuntimeError("database unreachable")

        refresher = ReadingsRefresher(lambda: READINGS)
        refresher.refresh_now()
        refresher._fetch = broken
        snap = refresher.refresh_now()
        assert snap.error == "database unreachable"
        assert snap.cities == []
        assert snap.stats.is_empty

    def test_initial_snapshot_is_empty(self):
        snap = ReadingsRefresher(lambda: READINGS).snapshot
        assert snap.cities == []
        assert snap.refreshed_at is None

    def test_to_dict(self):
        refresher = ReadingsRefresher(lambda: READINGS)
        data = refresher.refresh_now().to_dict()
        assert data["stats"] == {"mean_aqi": 93, "count": 4, "worst": "Delhi", "best": "Bangalore"}
        assert data["cities"][0]["tier"] == "poor"
        assert data["error"] is None

    def test_empty_snapshot_to_dict(self):
        data = DashboardSnapshot().to_dict()
        assert data["stats"]["worst"] is None
        assert data["refreshed_at"] is None


class TestLifecycle:
    def test_start_schedules_interval_job(self):
        with patch("pipeline.refresh.refresher.BackgroundScheduler") as scheduler_cls:
            scheduler = scheduler_cls.return_value
            refresher = ReadingsRefresher(lambda: READINGS, interval_seconds=120)
            refresher.start()

            scheduler.add_job.assert_called_once()
            kwargs = scheduler.add_job.call_args.kwargs
            assert kwargs["trigger"] == "interval"
            assert kwargs["seconds"] == 120
            assert kwargs["id"] == JOB_ID
            assert kwargs["max_instances"] == 1
            scheduler.start.assert_called_once()

            refresher.stop()
            scheduler.shutdown.assert_called_once_with(wait=False)

    def test_stop_without_start_is_noop(self):
        ReadingsRefresher(lambda: READINGS).stop()

    def test_real_scheduler_start_stop(self):
        fetch = MagicMock(return_value=READINGS)
        refresher = ReadingsRefresher(fetch, interval_seconds=3600)
        refresher.start()
        try:
            assert refresher.running
        finally:
            refresher.stop()
        assert not refresher.running
