import csv
import io
import logging

import pytest

from pymotionprofile.__main__ import main, sample_times


PROFILE_TOML = """
[constraints]
max_velocity = 1.0
max_acceleration = 1.0

[target]
position = 4.0

[sampling]
period = 0.5
"""


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger("pymotionprofile")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config_file(tmp_path):
    file_path = tmp_path / "profile.toml"
    file_path.write_text(PROFILE_TOML, encoding="utf-8")
    return file_path


def test_sample_times_include_the_end():
    assert sample_times(5.0, 0.5) == [0.5 * i for i in range(11)]
    times = sample_times(1.7320508075688772, 0.5)
    assert times[:4] == [0.0, 0.5, 1.0, 1.5]
    assert times[-1] == 1.7320508075688772


def test_writes_setpoints_to_csv_file(config_file, tmp_path):
    out = tmp_path / "setpoints.csv"
    assert main([str(config_file), "--csv", str(out)]) == 0

    with out.open(newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["time", "position", "velocity"]
    assert len(rows) == 12
    assert rows[1] == ["0.000000", "0.000000", "0.000000"]
    assert rows[-1] == ["5.000000", "4.000000", "0.000000"]


def test_period_option_overrides_config(config_file, capsys):
    assert main([str(config_file), "--period", "1.0"]) == 0
    rows = list(csv.reader(io.StringIO(capsys.readouterr().out)))
    assert len(rows) == 7
    assert rows[3] == ["2.000000", "1.500000", "1.000000"]


def test_log_file(config_file, tmp_path, capsys):
    log_file = tmp_path / "logs" / "profile.log"
    assert main([str(config_file), "--log-file", str(log_file), "--log-level", "DEBUG"]) == 0
    for handler in logging.getLogger("pymotionprofile").handlers:
        handler.flush()
    assert "total time 5.000000 s" in log_file.read_text(encoding="utf-8")


def test_invalid_config_exits_with_error(tmp_path, capsys):
    file_path = tmp_path / "bad.toml"
    file_path.write_text("[constraints]\nmax_velocity = 0.0\nmax_acceleration = 1.0\n"
                         "[target]\nposition = 1.0\n", encoding="utf-8")
    assert main([str(file_path)]) == 2
    assert main([str(tmp_path / "missing.toml")]) == 2
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("period", ["nan", "inf"])
def test_non_finite_period_option_exits_with_error(config_file, capsys, period):
    assert main([str(config_file), "--period", period]) == 2
    assert capsys.readouterr().out == ""


def test_non_finite_period_in_config_exits_with_error(tmp_path, capsys):
    file_path = tmp_path / "profile.toml"
    file_path.write_text(PROFILE_TOML.replace("period = 0.5", "period = nan"), encoding="utf-8")
    assert main([str(file_path)]) == 2
    assert capsys.readouterr().out == ""


def test_config_that_is_not_utf8_exits_with_error(tmp_path):
    file_path = tmp_path / "profile.toml"
    file_path.write_bytes(PROFILE_TOML.encode("utf-8") + b"# \xff\xfe\n")
    assert main([str(file_path)]) == 2


def test_unwritable_csv_path_exits_with_error(config_file, tmp_path):
    out = tmp_path / "missing_dir" / "setpoints.csv"
    assert main([str(config_file), "--csv", str(out)]) == 2
    assert not out.exists()


def test_log_level_name_and_stderr_console(config_file, capsys):
    assert main([str(config_file), "--log-level", "DEBUG"]) == 0
    assert logging.getLogger("pymotionprofile").level == logging.DEBUG
    captured = capsys.readouterr()
    assert "[DEBUG]" in captured.err
    assert "[DEBUG]" not in captured.out
