"""Autoresize service - keeps a database volume from filling up."""

import asyncio
import logging
import signal
from typing import Optional

from rdb_autoresize.provider import DatabaseProvider, InstanceDescriptor
from rdb_autoresize.shared.logging import log_event
from rdb_autoresize.shared.units import format_size
from .config import AutoResizeConfig
from .decision import Action, CycleReport, CycleState, ResizeDecisionEngine
from .errors import CycleError, PreconditionError, PreflightError, ProviderQueryError
from .gateway import ProviderGateway
from .sampler import UsageSampler
from .scheduler import Scheduler
from .validator import PreconditionValidator, check_volume_type

logger = logging.getLogger(__name__)


class AutoResizeService:
    """Service that samples disk usage and grows the volume when needed."""

    def __init__(
        self,
        config: AutoResizeConfig,
        provider: DatabaseProvider,
        log: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.provider = provider
        self.logger = log or logger

        self.gateway = ProviderGateway(provider, config.query_timeout, log=self.logger)
        self.sampler = UsageSampler(
            self.gateway, config.metric_name, config.metric_window, log=self.logger
        )
        self.engine = ResizeDecisionEngine(
            config, self.gateway, PreconditionValidator(log=self.logger), log=self.logger
        )
        self.scheduler: Optional[Scheduler] = None

    async def preflight(self) -> InstanceDescriptor:
        """Check the instance exists, is resizable and below the limit.

        Raises:
            PreflightError: If no resize could ever succeed.
        """
        try:
            instance = await self.gateway.get_instance()
        except ProviderQueryError as e:
            raise PreflightError(f"unable to fetch instance: {e}") from e

        log_event(
            self.logger,
            logging.INFO,
            "rdb instance found",
            instance_id=instance.id,
            instance_name=instance.name,
            region=instance.region,
            status=instance.status.value,
            volume_type=instance.volume.type.value,
            volume_size=format_size(instance.volume.size_bytes),
        )

        try:
            check_volume_type(instance)
        except PreconditionError as e:
            raise PreflightError(f"unsupported volume type: {e.value}") from e

        if instance.volume.size_bytes >= self.config.size_limit_bytes:
            raise PreflightError(
                f"current volume size {format_size(instance.volume.size_bytes)} is not "
                f"below the limit {format_size(self.config.size_limit_bytes)}"
            )
        return instance

    async def run_cycle(self) -> CycleReport:
        """Run one sample -> decide -> act cycle and log its report.

        Cycle errors are recorded in the report and logged. Fatal rejections
        are logged and then re-raised.
        """
        report = CycleReport()
        level = logging.INFO
        try:
            report.enter(CycleState.SAMPLING, self.logger)
            percent_used = await self.sampler.sample()
            await self.engine.evaluate(percent_used, report)
        except CycleError as e:
            if report.action == Action.NONE:
                report.action = Action.FAILED
            report.error = str(e)
            level = logging.ERROR
        except Exception as e:
            report.error = str(e)
            level = logging.ERROR
            raise
        finally:
            if report.state != CycleState.IDLE:
                report.enter(CycleState.IDLE, self.logger)
            log_event(self.logger, level, "cycle complete", **report.to_fields())
        return report

    def _setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown."""
        loop = asyncio.get_running_loop()

        def signal_handler(signame: str):
            self.logger.info(f"Received {signame}, shutting down...")
            if self.scheduler:
                self.scheduler.stop()

        for signum in (signal.SIGTERM, signal.SIGINT):
            try:
                loop.add_signal_handler(signum, signal_handler, signal.Signals(signum).name)
            except (NotImplementedError, RuntimeError):
                # Not supported on this platform or outside the main thread
                self.logger.debug(f"Cannot install handler for {signal.Signals(signum).name}")

    async def run(self, stop_event: Optional[asyncio.Event] = None) -> None:
        """Run preflight checks, then the control loop until stopped.

        Raises:
            PreflightError: If the startup checks fail.
            FatalRejectionError: If a rejection occurs under policy ``exit``.
        """
        self.scheduler = Scheduler(self.config.poll_interval, stop_event, log=self.logger)
        try:
            await self.preflight()
            self._setup_signal_handlers()
            await self.scheduler.run(self.run_cycle)
        finally:
            await self.provider.close()
