"""Timeout-bounded access to the database provider."""

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, List, Optional, TypeVar

from rdb_autoresize.provider import DatabaseProvider, InstanceDescriptor, MetricSeries
from .errors import ProviderQueryError, ResizeRequestError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProviderGateway:
    """Wraps a provider so every call is bounded by the query timeout.

    Transport failures and timeouts surface as cycle errors, so a slow or
    hung provider can never block the control loop.
    """

    def __init__(
        self,
        provider: DatabaseProvider,
        timeout: float,
        log: Optional[logging.Logger] = None,
    ):
        self.provider = provider
        self.timeout = timeout
        self.logger = log or logger

    async def _call(self, operation: str, awaitable: Awaitable[T]) -> T:
        self.logger.debug(f"Calling provider: {operation}")
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise ProviderQueryError(
                operation, TimeoutError(f"timed out after {self.timeout:g}s")
            ) from e

    async def get_instance(self) -> InstanceDescriptor:
        try:
            return await self._call("get instance", self.provider.get_instance())
        except ProviderQueryError:
            raise
        except Exception as e:
            raise ProviderQueryError("get instance", e) from e

    async def get_instance_metrics(
        self, metric_name: str, start: datetime, end: datetime
    ) -> List[MetricSeries]:
        operation = f"get metric {metric_name}"
        try:
            return await self._call(
                operation, self.provider.get_instance_metrics(metric_name, start, end)
            )
        except ProviderQueryError:
            raise
        except Exception as e:
            raise ProviderQueryError(operation, e) from e

    async def upgrade_volume(self, new_size_bytes: int) -> InstanceDescriptor:
        try:
            return await self._call("upgrade volume", self.provider.upgrade_volume(new_size_bytes))
        except ProviderQueryError as e:
            raise ResizeRequestError(new_size_bytes, e.cause) from e
        except Exception as e:
            raise ResizeRequestError(new_size_bytes, e) from e
