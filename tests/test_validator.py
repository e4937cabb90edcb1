import pytest

from conftest import make_instance
from rdb_autoresize.autoresizer.errors import PreconditionError
from rdb_autoresize.autoresizer.validator import PreconditionValidator, check_volume_type
from rdb_autoresize.provider import InstanceStatus, VolumeType


@pytest.mark.parametrize("status", [InstanceStatus.READY, InstanceStatus.DISK_FULL])
def test_eligible_statuses(status):
    PreconditionValidator().validate(make_instance(status=status))


@pytest.mark.parametrize(
    "status",
    [s for s in InstanceStatus if s not in (InstanceStatus.READY, InstanceStatus.DISK_FULL)],
)
def test_ineligible_statuses(status):
    with pytest.raises(PreconditionError) as exc_info:
        PreconditionValidator().validate(make_instance(status=status))
    assert exc_info.value.field == "status"
    assert exc_info.value.value == status.value


@pytest.mark.parametrize("volume_type", [VolumeType.LSSD, VolumeType.SBS_5K, VolumeType.UNKNOWN])
def test_non_resizable_volume(volume_type):
    with pytest.raises(PreconditionError) as exc_info:
        PreconditionValidator().validate(make_instance(volume_type=volume_type))
    assert exc_info.value.field == "volume.type"
    assert exc_info.value.value == volume_type.value


def test_check_volume_type_ignores_status():
    check_volume_type(make_instance(status=InstanceStatus.BACKUPING))
    with pytest.raises(PreconditionError):
        check_volume_type(make_instance(volume_type=VolumeType.LSSD))


def test_status_from_provider_strings():
    assert InstanceStatus.from_value("disk_full") is InstanceStatus.DISK_FULL
    assert InstanceStatus.from_value("READY") is InstanceStatus.READY
    assert InstanceStatus.from_value("backing-up") is InstanceStatus.UNKNOWN
    assert VolumeType.from_value("bssd") is VolumeType.BSSD
    assert VolumeType.from_value("nvme") is VolumeType.UNKNOWN
