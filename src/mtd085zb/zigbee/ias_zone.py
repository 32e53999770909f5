"""IAS Zone cluster configuration for the MTD085-ZB.

Works against any object implementing IASZoneCluster, so the host can pass
its own Zigbee stack binding. The enrollment handshake the sensor needs is
not settled across firmware versions, so the steps run are chosen by
EnrollmentMode.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Protocol

from mtd085zb.core.config import (
    CIE_ADDRESS_ATTRIBUTE,
    ENROLL_RESPONSE_SUCCESS,
    STORE_CIE_ADDRESS_CONFIGURED,
    STORE_IAS_ZONE_ENROLLED,
    ZONE_STATUS_ATTRIBUTE,
    EnrollmentMode,
    SensorConfig,
)
from mtd085zb.core.exceptions import ClusterUnavailableError, ConfigurationError
from mtd085zb.core.retry import RetryCallback, RetryOutcome, run_with_retry_async
from mtd085zb.zigbee.models import ParsedZoneStatus
from mtd085zb.zigbee.zone_status import decode

logger = logging.getLogger(__name__)


class IASZoneCluster(Protocol):
    """Subset of the IAS Zone cluster used by the configuration steps."""

    async def write_attributes(self, attributes: Mapping[str, Any]) -> Any: ...

    async def zone_enroll_response(self, enroll_response_code: int, zone_id: int) -> Any: ...

    async def configure_reporting(self, reporting: Mapping[str, Mapping[str, int]]) -> Any: ...

    async def read_attributes(self, names: list[str]) -> Mapping[str, Any]: ...


def _require_cluster(cluster: IASZoneCluster | None, config: SensorConfig) -> IASZoneCluster:
    if cluster is None:
        raise ClusterUnavailableError(config.endpoint_id)
    return cluster


async def configure_ias_zone(
    cluster: IASZoneCluster | None,
    cie_address: str | None,
    config: SensorConfig | None = None,
) -> dict[str, bool]:
    """Run one IAS Zone configuration pass.

    Steps by mode:
        CIE_WRITE_AND_ENROLL: write CIE address, send enroll response,
            configure zone status reporting.
        CIE_WRITE_ONLY: write CIE address, configure reporting.
        POLL_ONLY: no cluster writes; the host polls with read_presence.

    Args:
        cluster: IAS Zone cluster on the sensor endpoint.
        cie_address: Hub IEEE address written as the CIE address.
        config: Sensor configuration. Defaults to SensorConfig().

    Returns:
        Host store flags to persist (iasZoneEnrolled, cieAddressConfigured).

    Raises:
        ClusterUnavailableError: If cluster is None.
        ConfigurationError: If a CIE address is needed but not given.
        Exception: Whatever the cluster raises for a failed step.
    """
    config = config or SensorConfig()
    mode = config.enrollment_mode

    if mode is EnrollmentMode.POLL_ONLY:
        logger.info("Enrollment skipped, zone status will be polled")
        return {STORE_IAS_ZONE_ENROLLED: False, STORE_CIE_ADDRESS_CONFIGURED: False}

    cluster = _require_cluster(cluster, config)
    if not cie_address:
        raise ConfigurationError("CIE address required", f"enrollment mode {mode.value}")

    logger.info("Writing CIE address...")
    await cluster.write_attributes({CIE_ADDRESS_ATTRIBUTE: cie_address})

    enrolled = False
    if mode is EnrollmentMode.CIE_WRITE_AND_ENROLL:
        logger.info("Sending zone enroll response...")
        await cluster.zone_enroll_response(
            enroll_response_code=ENROLL_RESPONSE_SUCCESS,
            zone_id=config.zone_id,
        )
        enrolled = True

    logger.info("Configuring zone status reporting...")
    await cluster.configure_reporting(
        {
            ZONE_STATUS_ATTRIBUTE: {
                "minInterval": config.report_min_interval_s,
                "maxInterval": config.report_max_interval_s,
                "minChange": config.report_min_change,
            }
        }
    )

    return {STORE_IAS_ZONE_ENROLLED: enrolled, STORE_CIE_ADDRESS_CONFIGURED: True}


async def configure_ias_zone_with_retry(
    cluster: IASZoneCluster | None,
    cie_address: str | None,
    config: SensorConfig | None = None,
    on_retry: RetryCallback | None = None,
    cancel_event: asyncio.Event | None = None,
) -> RetryOutcome[dict[str, bool]]:
    """Configure the IAS Zone cluster, retrying transient failures.

    The outcome is returned rather than raised; call
    ``outcome.raise_for_failure("IAS Zone configuration")`` to treat
    exhaustion as fatal.

    Args:
        cluster: IAS Zone cluster on the sensor endpoint.
        cie_address: Hub IEEE address.
        config: Sensor configuration. Defaults to SensorConfig().
        on_retry: Extra observer for failed non-final attempts.
        cancel_event: Optional event that stops further attempts.

    Returns:
        RetryOutcome whose value holds the host store flags.
    """
    config = config or SensorConfig()

    def _log_retry(attempt: int, error: BaseException) -> None:
        logger.error("Configuration attempt %d failed: %s", attempt, error)
        logger.info("Retrying in %dms...", config.retry_delay_ms)
        if on_retry is not None:
            on_retry(attempt, error)

    outcome = await run_with_retry_async(
        lambda: configure_ias_zone(cluster, cie_address, config),
        max_attempts=config.max_retries,
        delay_seconds=config.retry_delay_seconds,
        on_retry=_log_retry,
        cancel_event=cancel_event,
    )

    if outcome.succeeded:
        logger.info("IAS Zone configuration completed (attempts: %d)", outcome.attempts)
    else:
        logger.error(
            "IAS Zone configuration failed after %d attempts: %s",
            outcome.attempts,
            outcome.last_error,
        )
    return outcome


async def read_zone_status(
    cluster: IASZoneCluster | None,
    config: SensorConfig | None = None,
) -> ParsedZoneStatus:
    """Read and decode the current zone status attribute.

    Raises:
        ClusterUnavailableError: If cluster is None.
    """
    config = config or SensorConfig()
    cluster = _require_cluster(cluster, config)

    logger.debug("Reading current zone status...")
    attributes = await cluster.read_attributes([ZONE_STATUS_ATTRIBUTE])
    return decode(attributes.get(ZONE_STATUS_ATTRIBUTE))


async def read_presence(
    cluster: IASZoneCluster | None,
    config: SensorConfig | None = None,
) -> bool:
    """Read the zone status and report whether presence is detected."""
    status = await read_zone_status(cluster, config)
    return status.alarm1
