"""Disk usage sampling."""

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from rdb_autoresize.provider import MetricSeries
from .errors import MalformedMetricError
from .gateway import ProviderGateway

logger = logging.getLogger(__name__)


def extract_single_value(series: List[MetricSeries]) -> float:
    """Return the only data point of a metrics response.

    Raises:
        MalformedMetricError: Unless there is exactly one series holding
            exactly one finite numeric point.
    """
    if len(series) != 1:
        raise MalformedMetricError(f"expected 1 time series, got {len(series)}")
    points = series[0].points
    if len(points) != 1:
        raise MalformedMetricError(
            f"expected 1 data point in {series[0].name!r}, got {len(points)}"
        )

    value = points[0].value
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise MalformedMetricError(f"non-numeric metric value: {value!r}") from e
    if not math.isfinite(value):
        raise MalformedMetricError(f"non-finite metric value: {value!r}")
    return value


class UsageSampler:
    """Obtains one disk usage percentage per cycle."""

    def __init__(
        self,
        gateway: ProviderGateway,
        metric_name: str,
        window: float,
        clock: Optional[Callable[[], datetime]] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.gateway = gateway
        self.metric_name = metric_name
        self.window = timedelta(seconds=window)
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.logger = log or logger

    async def sample(self) -> float:
        """Query the usage metric over the trailing window.

        Raises:
            ProviderQueryError: If the query fails or times out.
            MalformedMetricError: If the response has an unexpected shape.
        """
        end = self.clock()
        start = end - self.window
        series = await self.gateway.get_instance_metrics(self.metric_name, start, end)
        value = extract_single_value(series)
        self.logger.debug(f"Sampled {self.metric_name}={value}")
        return value
