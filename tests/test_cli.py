import pytest

from rdb_autoresize.autoresizer import cli


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in (
        "RDB_AUTORESIZE_CONFIG",
        "RDB_VOLUME_SIZE_LIMIT",
        "RDB_TRIGGER_PERCENTAGE",
        "RDB_PROVIDER",
        "SCW_RDB_VOLUME_SIZE_LIMIT",
        "SCW_RDB_TRIGGER_PERCENTAGE",
    ):
        monkeypatch.delenv(var, raising=False)


def test_missing_limit_exits_non_zero():
    assert cli.main([]) == 1


def test_invalid_trigger_exits_non_zero():
    assert cli.main(["--volume-size-limit", "100GB", "--trigger-percentage", "50"]) == 1


def test_unknown_provider_exits_non_zero():
    assert cli.main(["--volume-size-limit", "100GB", "--provider", "nowhere"]) == 1


def test_preflight_failure_exits_non_zero(tmp_path):
    path = tmp_path / "autoresize.yaml"
    path.write_text(
        "volume_size_limit: 100GB\n"
        "provider: dummy\n"
        "provider_options:\n"
        "  volume_size: 100GB\n"
    )
    assert cli.main(["--config", str(path)]) == 1


def test_fatal_rejection_exits_non_zero(tmp_path):
    path = tmp_path / "autoresize.yaml"
    path.write_text(
        "volume_size_limit: 52GB\n"
        "poll_interval: 10ms\n"
        "rejection_policy: exit\n"
        "provider_options:\n"
        "  volume_size: 50GB\n"
        "  used: 49GB\n"
    )
    assert cli.main(["--config", str(path), "--log-json"]) == 1


@pytest.mark.parametrize(
    "content",
    [
        "volume_size_limit: [100GB]\n",
        "volume_size_limit: {a: 1}\n",
        "volume_size_limit: 100GB\npoll_interval: [5m]\n",
    ],
)
def test_wrong_value_type_exits_non_zero(tmp_path, capsys, content):
    path = tmp_path / "autoresize.yaml"
    path.write_text(content)
    assert cli.main(["--config", str(path)]) == 1
    assert "error parsing options" in capsys.readouterr().err


def test_empty_simulated_volume_exits_non_zero(tmp_path, capsys):
    path = tmp_path / "autoresize.yaml"
    path.write_text(
        "volume_size_limit: 100GB\n"
        "provider_options:\n"
        "  volume_size: 0\n"
    )
    assert cli.main(["--config", str(path)]) == 1
    assert "volume_size must be positive" in capsys.readouterr().err


def test_legacy_env_limit_is_accepted(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("SCW_RDB_VOLUME_SIZE_LIMIT", "100GB")
    path = tmp_path / "autoresize.yaml"
    path.write_text("provider_options:\n  volume_size: 100GB\n")
    # The limit parses, so startup gets as far as preflight
    assert cli.main(["--config", str(path)]) == 1
    assert "below the limit 100GB" in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--version"])
    assert exc_info.value.code == 0
    assert "rdb-autoresize" in capsys.readouterr().out
