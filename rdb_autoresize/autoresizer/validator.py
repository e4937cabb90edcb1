"""Eligibility checks run before every resize attempt."""

import logging
from typing import Optional

from rdb_autoresize.provider import ELIGIBLE_STATUSES, InstanceDescriptor
from .errors import PreconditionError

logger = logging.getLogger(__name__)


def check_volume_type(instance: InstanceDescriptor) -> None:
    """Raise PreconditionError unless the volume supports online resize."""
    if not instance.volume.resizable:
        raise PreconditionError("volume.type", instance.volume.type.value)


def check_status(instance: InstanceDescriptor) -> None:
    """Raise PreconditionError unless the instance status allows a resize."""
    if instance.status not in ELIGIBLE_STATUSES:
        raise PreconditionError("status", instance.status.value)


class PreconditionValidator:
    """Gates every resize on the instance state.

    The check must run against a freshly fetched descriptor each time,
    because backups, restores and manual operations change the state
    between cycles.
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        self.logger = log or logger

    def validate(self, instance: InstanceDescriptor) -> None:
        """Raise PreconditionError naming the first failing field."""
        check_status(instance)
        check_volume_type(instance)
        self.logger.debug(
            f"Instance {instance.id} eligible for resize "
            f"(status={instance.status.value}, volume={instance.volume.type.value})"
        )
