"""Base class for managed database providers."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from .models import InstanceDescriptor, MetricSeries


class DatabaseProvider(ABC):
    """Capabilities the autoresizer needs from a managed database provider.

    Each provider instance manages exactly one database instance; the
    instance identity is supplied through the constructor.
    """

    @abstractmethod
    async def get_instance(self) -> InstanceDescriptor:
        """Fetch the current instance descriptor."""
        pass

    @abstractmethod
    async def get_instance_metrics(
        self, metric_name: str, start: datetime, end: datetime
    ) -> List[MetricSeries]:
        """Fetch the named metric between start and end."""
        pass

    @abstractmethod
    async def upgrade_volume(self, new_size_bytes: int) -> InstanceDescriptor:
        """Request the instance volume to be grown to new_size_bytes."""
        pass

    async def close(self) -> None:
        """Release any resources held by the provider."""
        return None
