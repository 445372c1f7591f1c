"""Tests for the pipeline status state machine."""

import pytest
from datetime import datetime, timedelta, timezone

from pipeline_status.state.machine import change_state
from pipeline_status.state.models import BuildFailure, PipelineState, PipelineStatus


@pytest.fixture
def later():
    return datetime(2017, 3, 15, 8, 0, 0, tzinfo=timezone(timedelta(hours=-7)))


class TestTransitionToRunning:
    """Test transitions into RUNNING."""

    def test_from_ready_increments_build(self, ready_status, later):
        """Test starting from READY increments the build and stamps the time."""
        new_status = change_state(ready_status, PipelineState.RUNNING, now=later)

        assert new_status.state == PipelineState.RUNNING
        assert new_status.build_number == "124"
        assert new_status.last_modified == "2017-03-15T08:00:00-0700"
        assert new_status.pipeline == ready_status.pipeline
        assert new_status.team == ready_status.team

    def test_from_unset_status(self, later):
        """Test the first start moves an unset status to build 1."""
        status = PipelineStatus(pipeline="p", team="t", build_number="0")

        new_status = change_state(status, PipelineState.RUNNING, now=later)

        assert new_status.state == PipelineState.RUNNING
        assert new_status.build_number == "1"

    def test_clears_failure(self, ready_status, later):
        """Test a new run clears the previous failure."""
        failed = ready_status.with_changes(
            failure=BuildFailure(job_name="j", build_name="3", details_url="http://x")
        )

        new_status = change_state(failed, PipelineState.RUNNING, now=later)

        assert new_status.failure is None

    @pytest.mark.parametrize("build_number", ["", "abc", "1.5", " 7", "1_000"])
    def test_malformed_build_number_degrades_to_zero(self, build_number, later):
        """Test unparsable build numbers restart counting from zero."""
        status = PipelineStatus(build_number=build_number, state=PipelineState.READY)

        new_status = change_state(status, PipelineState.RUNNING, now=later)

        assert new_status.build_number == "1"

    def test_already_running_is_noop(self, running_status, later):
        """Test starting a running pipeline changes nothing."""
        new_status = change_state(running_status, PipelineState.RUNNING, now=later)

        assert new_status == running_status
        assert new_status.last_modified == running_status.last_modified


class TestTransitionToReady:
    """Test transitions into READY."""

    def test_from_running_keeps_build(self, running_status, later):
        """Test finishing keeps the build number and stamps the time."""
        new_status = change_state(running_status, PipelineState.READY, now=later)

        assert new_status.state == PipelineState.READY
        assert new_status.build_number == "10"
        assert new_status.failure is None
        assert new_status.last_modified == "2017-03-15T08:00:00-0700"

    def test_attaches_failure(self, running_status, later):
        """Test a failure record is attached when provided."""
        failure = BuildFailure(job_name="test-job", build_name="10", details_url="http://x")

        new_status = change_state(running_status, PipelineState.READY, failure, now=later)

        assert new_status.failure == failure

    def test_already_ready_is_noop(self, ready_status, later):
        """Test finishing a ready pipeline changes nothing, failure included."""
        failure = BuildFailure(job_name="test-job", build_name="10", details_url="http://x")

        new_status = change_state(ready_status, PipelineState.READY, failure, now=later)

        assert new_status == ready_status
        assert new_status.failure is None


class TestPurity:
    """Test the state machine never mutates its input."""

    def test_input_unchanged(self, ready_status, later):
        """Test the current status is left untouched."""
        snapshot = ready_status.with_changes()

        change_state(ready_status, PipelineState.RUNNING, now=later)

        assert ready_status == snapshot

    def test_uses_wall_clock_by_default(self, ready_status):
        """Test the last-modified stamp carries a numeric zone offset."""
        new_status = change_state(ready_status, PipelineState.RUNNING)

        parsed = datetime.strptime(new_status.last_modified, "%Y-%m-%dT%H:%M:%S%z")
        assert parsed.tzinfo is not None

    def test_monotonic_build_numbers(self, ready_status, later):
        """Test N start/finish cycles advance the build by exactly N."""
        status = ready_status
        for _ in range(5):
            status = change_state(status, PipelineState.RUNNING, now=later)
            finished = change_state(status, PipelineState.READY, now=later)
            assert finished.build_number == status.build_number
            status = finished

        assert status.build_number == "128"
