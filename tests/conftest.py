import asyncio
from datetime import datetime
from typing import List, Optional

import pytest

from rdb_autoresize.autoresizer.config import AutoResizeConfig
from rdb_autoresize.provider import (
    DatabaseProvider,
    InstanceDescriptor,
    InstanceStatus,
    MetricPoint,
    MetricSeries,
    Volume,
    VolumeType,
)

GB = 10**9


def make_instance(
    size: int = 80 * GB,
    status: InstanceStatus = InstanceStatus.READY,
    volume_type: VolumeType = VolumeType.BSSD,
) -> InstanceDescriptor:
    return InstanceDescriptor(
        id="11111111-2222-3333-4444-555555555555",
        name="main-db",
        region="fr-par",
        status=status,
        volume=Volume(type=volume_type, size_bytes=size),
    )


def single_point(value: float, name: str = "disk_usage_percent") -> List[MetricSeries]:
    return [MetricSeries(name=name, points=[MetricPoint(timestamp=datetime(2024, 1, 1), value=value)])]


class FakeProvider(DatabaseProvider):
    """Scriptable provider recording every call."""

    def __init__(self, instance: Optional[InstanceDescriptor] = None, usage: float = 50.0):
        self.instance = instance or make_instance()
        self.metrics: Optional[List[MetricSeries]] = None
        self.usage = usage
        self.delay = 0.0
        self.upgrade_delay = 0.0
        self.instance_error: Optional[Exception] = None
        self.metrics_error: Optional[Exception] = None
        self.upgrade_error: Optional[Exception] = None
        self.instance_calls = 0
        self.metric_calls: List[tuple] = []
        self.upgrades: List[int] = []
        self.closed = False

    async def _maybe_delay(self):
        if self.delay:
            await asyncio.sleep(self.delay)

    async def get_instance(self) -> InstanceDescriptor:
        self.instance_calls += 1
        await self._maybe_delay()
        if self.instance_error:
            raise self.instance_error
        return self.instance

    async def get_instance_metrics(self, metric_name, start, end) -> List[MetricSeries]:
        self.metric_calls.append((metric_name, start, end))
        await self._maybe_delay()
        if self.metrics_error:
            raise self.metrics_error
        if self.metrics is not None:
            return self.metrics
        return single_point(self.usage, metric_name)

    async def upgrade_volume(self, new_size_bytes: int) -> InstanceDescriptor:
        self.upgrades.append(new_size_bytes)
        await self._maybe_delay()
        if self.upgrade_delay:
            await asyncio.sleep(self.upgrade_delay)
        if self.upgrade_error:
            raise self.upgrade_error
        self.instance = InstanceDescriptor(
            id=self.instance.id,
            name=self.instance.name,
            region=self.instance.region,
            status=InstanceStatus.READY,
            volume=Volume(type=self.instance.volume.type, size_bytes=new_size_bytes),
        )
        return self.instance

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def config() -> AutoResizeConfig:
    return AutoResizeConfig(
        trigger_percent=90.0,
        size_limit_bytes=100 * GB,
        increment_bytes=5 * GB,
        poll_interval=0.01,
        query_timeout=0.2,
    )


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()
