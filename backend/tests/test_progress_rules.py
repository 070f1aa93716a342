"""Tests for the progress status/percentage rules."""

from tracker.services.progress_service import apply_progress_patch, default_progress

EARLIER = "2025-01-01T00:00:00.000Z"
NOW = "2025-02-01T12:00:00.000Z"


def _entry(**fields):
    return {**default_progress(EARLIER), **fields}


class TestStatusChanges:
    def test_completed_forces_full_progress(self):
        result = apply_progress_patch(_entry(progress=30), status="completed", now=NOW)

        assert result["status"] == "completed"
        assert result["progress"] == 100
        assert result["completedDate"] == NOW

    def test_not_started_clears_dates(self):
        current = _entry(
            status="completed", progress=100, startDate=EARLIER, completedDate=EARLIER
        )

        result = apply_progress_patch(current, status="not-started", now=NOW)

        assert result["status"] == "not-started"
        assert result["progress"] == 0
        assert result["startDate"] is None
        assert result["completedDate"] is None

    def test_in_progress_stamps_start_once(self):
        first = apply_progress_patch(_entry(), status="in-progress", now=EARLIER)
        second = apply_progress_patch(first, status="in-progress", now=NOW)

        assert first["startDate"] == EARLIER
        assert second["startDate"] == EARLIER

    def test_recompleting_keeps_completed_date(self):
        current = _entry(status="completed", progress=100, completedDate=EARLIER)

        result = apply_progress_patch(current, status="completed", now=NOW)

        assert result["completedDate"] == EARLIER

    def test_last_updated_always_bumped(self):
        result = apply_progress_patch(_entry(), status="not-started", now=NOW)
        assert result["lastUpdated"] == NOW


class TestProgressChanges:
    def test_full_progress_promotes_to_completed(self):
        result = apply_progress_patch(_entry(status="in-progress"), progress=100, now=NOW)

        assert result["status"] == "completed"
        assert result["completedDate"] == NOW

    def test_full_progress_from_not_started(self):
        result = apply_progress_patch(_entry(), progress=100, now=NOW)

        assert result["status"] == "completed"
        assert result["completedDate"] == NOW

    def test_full_progress_when_already_completed(self):
        current = _entry(status="completed", progress=100, completedDate=EARLIER)

        result = apply_progress_patch(current, progress=100, now=NOW)

        assert result["completedDate"] == EARLIER

    def test_full_progress_fills_missing_completed_date(self):
        current = _entry(status="completed", progress=80, completedDate=None)

        result = apply_progress_patch(current, progress=100, now=NOW)

        assert result["completedDate"] == NOW

    def test_partial_progress_starts_section(self):
        result = apply_progress_patch(_entry(), progress=40, now=NOW)

        assert result["status"] == "in-progress"
        assert result["progress"] == 40
        assert result["startDate"] == NOW

    def test_partial_progress_keeps_existing_start(self):
        current = _entry(status="in-progress", progress=10, startDate=EARLIER)

        result = apply_progress_patch(current, progress=60, now=NOW)

        assert result["startDate"] == EARLIER
        assert result["status"] == "in-progress"

    def test_zero_progress_does_not_promote(self):
        result = apply_progress_patch(_entry(), progress=0, now=NOW)

        assert result["status"] == "not-started"
        assert result["startDate"] is None

    def test_clamps_above_range(self):
        result = apply_progress_patch(_entry(), progress=150, now=NOW)

        assert result["progress"] == 100
        assert result["status"] == "completed"

    def test_clamps_below_range(self):
        result = apply_progress_patch(_entry(status="in-progress", progress=20), progress=-10, now=NOW)

        assert result["progress"] == 0
        assert result["status"] == "in-progress"


class TestCombined:
    def test_status_applied_before_progress(self):
        current = _entry(status="completed", progress=100, completedDate=EARLIER)

        result = apply_progress_patch(current, status="not-started", progress=40, now=NOW)

        assert result["status"] == "in-progress"
        assert result["progress"] == 40
        assert result["completedDate"] is None
        assert result["startDate"] == NOW

    def test_input_not_modified(self):
        current = _entry()
        apply_progress_patch(current, status="completed", now=NOW)
        assert current == _entry()
