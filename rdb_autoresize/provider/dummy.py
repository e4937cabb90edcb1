from datetime import datetime
from typing import List, Union
import logging

from rdb_autoresize.shared.units import format_size, parse_size
from .base import DatabaseProvider
from .models import (
    InstanceDescriptor,
    InstanceStatus,
    MetricPoint,
    MetricSeries,
    Volume,
    VolumeType,
)

logger = logging.getLogger(__name__)


class SimulatedProvider(DatabaseProvider):
    """In-memory provider for dry runs.

    Disk usage grows by ``growth_per_query`` every time the usage metric is
    queried, so a loop pointed at this provider will eventually trigger a
    resize and later run into the size limit.
    """

    def __init__(
        self,
        instance_id: str = "00000000-0000-0000-0000-000000000000",
        name: str = "simulated",
        region: str = "local",
        status: str = "ready",
        volume_type: str = "bssd",
        volume_size: Union[str, int] = "50GB",
        used: Union[str, int] = "40GB",
        growth_per_query: Union[str, int] = "1GB",
    ):
        self.instance_id = instance_id
        self.name = name
        self.region = region
        self.status = InstanceStatus.from_value(status)
        self.volume_type = VolumeType.from_value(volume_type)
        self.volume_size = parse_size(volume_size)
        if self.volume_size <= 0:
            raise ValueError(f"volume_size must be positive, got {volume_size!r}")
        self.used = min(parse_size(used), self.volume_size)
        self.growth_per_query = parse_size(growth_per_query)
        self.upgrades: List[int] = []
        logger.info(
            f"Initialized SimulatedProvider ({self.volume_type.value}, "
            f"{format_size(self.used)}/{format_size(self.volume_size)} used)"
        )

    def _descriptor(self) -> InstanceDescriptor:
        return InstanceDescriptor(
            id=self.instance_id,
            name=self.name,
            region=self.region,
            status=self.status,
            volume=Volume(type=self.volume_type, size_bytes=self.volume_size),
        )

    async def get_instance(self) -> InstanceDescriptor:
        return self._descriptor()

    async def get_instance_metrics(
        self, metric_name: str, start: datetime, end: datetime
    ) -> List[MetricSeries]:
        self.used = min(self.used + self.growth_per_query, self.volume_size)
        if self.used >= self.volume_size and self.status == InstanceStatus.READY:
            self.status = InstanceStatus.DISK_FULL

        percent = round(self.used / self.volume_size * 100, 2)
        return [MetricSeries(name=metric_name, points=[MetricPoint(timestamp=end, value=percent)])]

    async def upgrade_volume(self, new_size_bytes: int) -> InstanceDescriptor:
        if self.status not in (InstanceStatus.READY, InstanceStatus.DISK_FULL):
            raise RuntimeError(f"instance is not in a ready state: {self.status.value}")
        if self.volume_type != VolumeType.BSSD:
            raise RuntimeError(f"volume type {self.volume_type.value} cannot be resized")
        if new_size_bytes <= self.volume_size:
            raise ValueError(
                f"new size {format_size(new_size_bytes)} must be larger than "
                f"current size {format_size(self.volume_size)}"
            )

        self.volume_size = new_size_bytes
        self.status = InstanceStatus.READY
        self.upgrades.append(new_size_bytes)
        return self._descriptor()
