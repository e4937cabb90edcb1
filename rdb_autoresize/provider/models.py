"""Data models for managed database instances and their metrics."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List


class InstanceStatus(Enum):
    """Lifecycle states reported by the provider for an instance."""
    UNKNOWN = "unknown"
    READY = "ready"
    PROVISIONING = "provisioning"
    CONFIGURING = "configuring"
    DELETING = "deleting"
    ERROR = "error"
    AUTOHEALING = "autohealing"
    LOCKED = "locked"
    INITIALIZING = "initializing"
    DISK_FULL = "disk_full"
    BACKUPING = "backuping"
    SNAPSHOTTING = "snapshotting"
    RESTARTING = "restarting"

    @classmethod
    def from_value(cls, value: str) -> "InstanceStatus":
        """Map a provider string to a status, falling back to UNKNOWN."""
        try:
            return cls(value.lower().replace("-", "_"))
        except ValueError:
            return cls.UNKNOWN


class VolumeType(Enum):
    """Storage classes an instance volume can be provisioned on."""
    UNKNOWN = "unknown"
    LSSD = "lssd"
    BSSD = "bssd"
    SBS_5K = "sbs_5k"
    SBS_15K = "sbs_15k"

    @classmethod
    def from_value(cls, value: str) -> "VolumeType":
        """Map a provider string to a volume type, falling back to UNKNOWN."""
        try:
            return cls(value.lower().replace("-", "_"))
        except ValueError:
            return cls.UNKNOWN


ELIGIBLE_STATUSES = frozenset({InstanceStatus.READY, InstanceStatus.DISK_FULL})

# Only block SSD volumes can be grown online.
RESIZABLE_VOLUME_TYPES = frozenset({VolumeType.BSSD})


@dataclass(frozen=True)
class Volume:
    """Instance storage volume."""
    type: VolumeType
    size_bytes: int

    @property
    def resizable(self) -> bool:
        return self.type in RESIZABLE_VOLUME_TYPES


@dataclass(frozen=True)
class InstanceDescriptor:
    """Snapshot of a database instance as returned by the provider.

    Descriptors are never cached: fetch a fresh one whenever a decision
    depends on the instance state.
    """
    id: str
    name: str
    region: str
    status: InstanceStatus
    volume: Volume

    @property
    def eligible_status(self) -> bool:
        return self.status in ELIGIBLE_STATUSES


@dataclass(frozen=True)
class MetricPoint:
    """Single metric data point."""
    timestamp: datetime
    value: float


@dataclass(frozen=True)
class MetricSeries:
    """A named time series returned by a metrics query."""
    name: str
    points: List[MetricPoint] = field(default_factory=list)
