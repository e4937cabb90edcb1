"""Resize decisions: threshold test, target size and limit enforcement."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from rdb_autoresize.provider import InstanceDescriptor
from rdb_autoresize.shared.logging import log_event
from rdb_autoresize.shared.units import format_size
from .config import AutoResizeConfig
from .errors import FatalRejectionError, LimitExceededError, RejectionError
from .gateway import ProviderGateway
from .validator import PreconditionValidator

logger = logging.getLogger(__name__)


class CycleState(Enum):
    """States one evaluation cycle moves through."""
    IDLE = "idle"
    SAMPLING = "sampling"
    VALIDATING = "validating"
    RESIZING = "resizing"
    REJECTED = "rejected"


class Action(Enum):
    """Outcome of a cycle as recorded in the cycle log."""
    NONE = "none"
    RESIZED = "resized"
    REJECTED = "rejected"
    FAILED = "failed"


@dataclass
class CycleReport:
    """What happened during one cycle. Logged once, then discarded."""
    percent_used: Optional[float] = None
    action: Action = Action.NONE
    current_size: Optional[int] = None
    target_size: Optional[int] = None
    new_size: Optional[int] = None
    error: Optional[str] = None
    states: List[CycleState] = field(default_factory=lambda: [CycleState.IDLE])

    @property
    def state(self) -> CycleState:
        return self.states[-1]

    def enter(self, state: CycleState, log: Optional[logging.Logger] = None) -> None:
        (log or logger).debug(f"Cycle state: {self.state.value} -> {state.value}")
        self.states.append(state)

    def to_fields(self) -> Dict[str, Any]:
        """Convert to structured log fields."""
        data: Dict[str, Any] = {"percent_used": self.percent_used, "action": self.action.value}
        if self.current_size is not None:
            data["current_size"] = format_size(self.current_size)
        if self.target_size is not None:
            data["target_size"] = format_size(self.target_size)
        if self.new_size is not None:
            data["new_size"] = format_size(self.new_size)
        if self.error:
            data["error"] = self.error
        return data


def exceeds_trigger(percent_used: float, trigger_percent: float) -> bool:
    """Usage exactly at the trigger does not fire."""
    return percent_used > trigger_percent


def compute_target_size(current_size: int, increment: int) -> int:
    """One fixed increment per resize, whatever the overage."""
    return current_size + increment


def check_limit(target_size: int, limit: int) -> None:
    """Raise LimitExceededError if target_size is above the ceiling."""
    if target_size > limit:
        raise LimitExceededError(target_size, limit)


class ResizeDecisionEngine:
    """Decides whether a usage sample warrants a resize and performs it.

    A triggered decision always works from a freshly fetched instance
    descriptor, runs the precondition checks, and only then issues a single
    resize request for ``current size + increment``.
    """

    def __init__(
        self,
        config: AutoResizeConfig,
        gateway: ProviderGateway,
        validator: Optional[PreconditionValidator] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.gateway = gateway
        self.logger = log or logger
        self.validator = validator or PreconditionValidator(log=self.logger)

    def plan(self, instance: InstanceDescriptor) -> int:
        """Validate the instance and return the target size.

        Raises:
            PreconditionError: If the instance is not eligible.
            LimitExceededError: If the target would exceed the limit.
        """
        self.validator.validate(instance)
        target_size = compute_target_size(instance.volume.size_bytes, self.config.increment_bytes)
        check_limit(target_size, self.config.size_limit_bytes)
        return target_size

    async def evaluate(self, percent_used: float, report: Optional[CycleReport] = None) -> CycleReport:
        """Run the decision for one usage sample.

        Args:
            percent_used: Sampled disk usage percentage.
            report: Report to fill in; a new one is created if omitted.

        Returns:
            The filled-in report.

        Raises:
            ProviderQueryError: If the instance could not be fetched.
            RejectionError: If the resize is not allowed (policy ``skip``).
            FatalRejectionError: If the resize is not allowed (policy ``exit``).
            ResizeRequestError: If the resize request failed.
        """
        if report is None:
            report = CycleReport()
        report.percent_used = percent_used

        if not exceeds_trigger(percent_used, self.config.trigger_percent):
            return report

        log_event(
            self.logger,
            logging.WARNING,
            "disk space is over max usage target",
            percent_target=self.config.trigger_percent,
            percent_used=percent_used,
        )
        report.enter(CycleState.VALIDATING, self.logger)

        # The descriptor from the previous cycle or preflight is stale
        instance = await self.gateway.get_instance()
        report.current_size = instance.volume.size_bytes
        self.logger.debug(f"Current volume size: {format_size(instance.volume.size_bytes)}")

        try:
            target_size = self.plan(instance)
        except RejectionError as e:
            if isinstance(e, LimitExceededError):
                report.target_size = e.target_bytes
            report.enter(CycleState.REJECTED, self.logger)
            report.action = Action.REJECTED
            if self.config.fatal_rejections:
                raise FatalRejectionError(e) from e
            raise

        report.target_size = target_size
        report.enter(CycleState.RESIZING, self.logger)
        log_event(
            self.logger,
            logging.WARNING,
            "triggering resize",
            current_size=format_size(instance.volume.size_bytes),
            target_size=format_size(target_size),
        )

        report.action = Action.FAILED
        updated = await self.gateway.upgrade_volume(target_size)
        report.action = Action.RESIZED
        report.new_size = updated.volume.size_bytes
        log_event(
            self.logger,
            logging.INFO,
            "resize requested",
            status=updated.status.value,
            volume_size=format_size(updated.volume.size_bytes),
        )
        return report
