"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import pytest

from pipeline_status.driver.status_driver import StatusDriver
from pipeline_status.persistence.codec import decode_status, encode_status
from pipeline_status.persistence.store import Store, WriteOptions
from pipeline_status.state.models import BuildIdentity, PipelineState, PipelineStatus


class InMemoryStore(Store):
    """Store keeping objects in a dict and recording every write."""

    def __init__(self, objects: Optional[Dict[str, bytes]] = None):
        self.objects: Dict[str, bytes] = dict(objects or {})
        self.writes: list = []

    def fetch(self, key: str) -> Optional[bytes]:
        return self.objects.get(key)

    def write(self, key: str, body: bytes, options: Optional[WriteOptions] = None) -> None:
        self.objects[key] = body
        self.writes.append((key, body, options))

    def put_status(self, key: str, status: PipelineStatus) -> None:
        self.objects[key] = encode_status(status)

    def get_status(self, key: str) -> PipelineStatus:
        return decode_status(self.objects[key])


STATUS_KEY = "pipelines/test-pipeline/status.yml"


@pytest.fixture
def status_key() -> str:
    return STATUS_KEY


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def identity() -> BuildIdentity:
    """Identity of the invoking build."""
    return BuildIdentity(
        pipeline="test-pipeline",
        team="test-team",
        job="test-job",
        build="10",
        external_url="https://concourse.example.com",
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2017, 3, 14, 23, 33, 45, tzinfo=timezone(timedelta(hours=-7)))


@pytest.fixture
def make_driver(store, status_key, identity):
    """Factory building a driver over the in-memory store."""
    def _make(initial_version: str = "", server_side_encryption: Optional[str] = None,
              build_identity: Optional[BuildIdentity] = None) -> StatusDriver:
        return StatusDriver(
            store=store,
            key=status_key,
            identity=build_identity or identity,
            initial_version=initial_version,
            server_side_encryption=server_side_encryption,
        )
    return _make


@pytest.fixture
def ready_status() -> PipelineStatus:
    """READY status for build 123 of the test pipeline."""
    return PipelineStatus(
        pipeline="test-pipeline",
        team="test-team",
        build_number="123",
        last_modified="2017-03-14T23:33:45-0700",
        state=PipelineState.READY,
    )


@pytest.fixture
def running_status() -> PipelineStatus:
    """RUNNING status for build 10 of the test pipeline."""
    return PipelineStatus(
        pipeline="test-pipeline",
        team="test-team",
        build_number="10",
        last_modified="2017-03-14T23:33:45-0700",
        state=PipelineState.RUNNING,
    )
