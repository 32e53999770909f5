"""Pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest

from mtd085zb.core.retry import AttemptResult

REPO_ROOT = Path(__file__).resolve().parents[1]


class MockIASZoneCluster:
    """Mock IAS Zone cluster for testing without a Zigbee stack."""

    def __init__(self, zone_status: Any = 0, fail_times: int = 0) -> None:
        self.zone_status = zone_status
        self.fail_times = fail_times
        self.calls: list[tuple[str, Any]] = []
        self._failures = 0

    def _maybe_fail(self, step: str) -> None:
        if self._failures < self.fail_times:
            self._failures += 1
            raise TimeoutError(f"{step} timed out (failure {self._failures})")

    async def write_attributes(self, attributes: Mapping[str, Any]) -> None:
        self._maybe_fail("write_attributes")
        self.calls.append(("write_attributes", dict(attributes)))

    async def zone_enroll_response(self, enroll_response_code: int, zone_id: int) -> None:
        self.calls.append(("zone_enroll_response", (enroll_response_code, zone_id)))

    async def configure_reporting(self, reporting: Mapping[str, Mapping[str, int]]) -> None:
        self.calls.append(("configure_reporting", dict(reporting)))

    async def read_attributes(self, names: list[str]) -> dict[str, Any]:
        self.calls.append(("read_attributes", list(names)))
        return {"zoneStatus": self.zone_status}

    @property
    def step_names(self) -> list[str]:
        return [name for name, _ in self.calls]


def make_fail_then_succeed(
    fail_count: int, value: Any = "configured"
) -> Callable[[int], AttemptResult[Any]]:
    """Synchronous operation failing its first fail_count calls."""
    calls = 0

    def operation(attempt: int) -> AttemptResult[Any]:
        nonlocal calls
        calls += 1
        if calls <= fail_count:
            return AttemptResult.failed(RuntimeError(f"Attempt {calls} failed"))
        return AttemptResult.ok(value)

    return operation


@pytest.fixture
def mock_cluster() -> MockIASZoneCluster:
    """Provide a healthy mock IAS Zone cluster."""
    return MockIASZoneCluster()


@pytest.fixture
def flaky_cluster() -> MockIASZoneCluster:
    """Cluster whose first two CIE writes time out."""
    return MockIASZoneCluster(fail_times=2)


@pytest.fixture
def cluster_factory() -> type[MockIASZoneCluster]:
    """Provide the mock cluster class for custom setups."""
    return MockIASZoneCluster


@pytest.fixture
def fail_then_succeed() -> Callable[..., Callable[[int], AttemptResult[Any]]]:
    """Provide the fail-then-succeed operation factory."""
    return make_fail_then_succeed


@pytest.fixture
def repo_root() -> Path:
    """Repository root holding app.json and locales/."""
    return REPO_ROOT


@pytest.fixture
def sample_identity() -> dict[str, str]:
    """Wire identity record of the MTD085-ZB."""
    return {"modelId": "TS0225", "manufacturerName": "_TZ321C_fkzihax8"}


@pytest.fixture
def valid_manifest() -> dict[str, Any]:
    """Minimal valid app descriptor."""
    return {
        "id": "com.test.app",
        "version": "1.0.0",
        "compatibility": ">=5.0.0",
        "sdk": 3,
        "name": {"en": "Test App"},
        "description": {"en": "Test Description"},
        "category": ["security"],
        "drivers": [],
    }


@pytest.fixture
def valid_localization() -> dict[str, Any]:
    """Minimal valid English locale."""
    return {
        "app": {"name": "Test App", "description": "Test Description"},
        "device": {"name": "Test Device"},
        "flow": {
            "triggers": {
                "motion_detected": {"title": "Motion Detected"},
                "motion_cleared": {"title": "Motion Cleared"},
            },
            "conditions": {"is_motion_detected": {"title": "Is Motion Detected"}},
        },
    }
