import yaml

from tests.conftest import FnCLIRunner

runner = FnCLIRunner()


def _habit_file(tmp_path, frequency, completions, name="read"):
    path = tmp_path / f"{name}.yaml"
    path.write_text(
        yaml.safe_dump({"name": name, "frequency": frequency, "completions": completions}),
        encoding="utf-8",
    )
    return str(path)


def test_streak_reports_active_run(tmp_cadence_dir, tmp_path):
    path = _habit_file(
        tmp_path,
        {"kind": "daily", "value": 1, "days": []},
        ["2024-01-05T08:00:00+00:00", "2024-01-04T08:00:00+00:00", "2024-01-03T08:00:00+00:00"],
    )
    result = runner.invoke(["streak", path, "--now", "2024-01-05T20:00:00+00:00"])

    assert result.exit_code == 0
    assert "3 (active)" in result.stdout
    assert "longest  3" in result.stdout
    assert "next     2024-01-06" in result.stdout


def test_streak_reports_lapse(tmp_cadence_dir, tmp_path):
    path = _habit_file(
        tmp_path,
        {"kind": "daily"},
        ["2023-12-20T08:00:00+00:00", "2023-12-19T08:00:00+00:00"],
    )
    result = runner.invoke(["streak", path, "--now", "2024-01-05T20:00:00+00:00"])

    assert result.exit_code == 0
    assert "lapsed after 2" in result.stdout
    assert "active   no" in result.stdout


def test_next_wraps_week(tmp_cadence_dir, tmp_path):
    path = _habit_file(tmp_path, {"kind": "weekly", "days": [1]}, [])
    result = runner.invoke(["next", path, "--after", "2024-01-09"])

    assert result.exit_code == 0
    assert "2024-01-15" in result.stdout


def test_check_weekly_day(tmp_cadence_dir, tmp_path):
    path = _habit_file(tmp_path, {"kind": "weekly", "days": [1, 3, 5]}, [])
    result = runner.invoke(["check", path, "2024-01-09", "--now", "2024-01-10T12:00:00+00:00"])

    assert result.exit_code == 0
    assert "does not qualify" in result.stdout


def test_describe_custom(tmp_cadence_dir, tmp_path):
    path = _habit_file(
        tmp_path,
        {
            "kind": "custom",
            "customSchedule": {"time": "07:30", "days": [1, 5]},
            "timezone": "Europe/Berlin",
        },
        [],
    )
    result = runner.invoke(["describe", path])

    assert result.exit_code == 0
    assert "Custom: Monday, Friday at 07:30 (Europe/Berlin)" in result.stdout


def test_range_with_explicit_zone(tmp_cadence_dir):
    result = runner.invoke(["range", "weekly", "--tz", "UTC", "--now", "2024-03-15T13:45:00+00:00"])

    assert result.exit_code == 0
    assert "2024-03-08 00:00:00 → 2024-03-15 23:59:59" in result.stdout


def test_range_uses_configured_zone(tmp_cadence_dir):
    runner.invoke(["tz", "--set", "Pacific/Auckland"])
    result = runner.invoke(["range", "daily", "--now", "2024-03-15T13:45:00+00:00"])

    assert result.exit_code == 0
    assert "2024-03-15 00:00:00 → 2024-03-16 23:59:59" in result.stdout


def test_range_without_zone_fails(tmp_cadence_dir):
    result = runner.invoke(["range", "daily"])

    assert result.exit_code == 1
    assert "no timezone" in result.stderr


def test_range_unknown_timeframe_fails(tmp_cadence_dir):
    result = runner.invoke(["range", "yearly", "--tz", "UTC"])

    assert result.exit_code == 1
    assert "yearly" in result.stderr


def test_custom_without_schedule_fails(tmp_cadence_dir, tmp_path):
    path = _habit_file(tmp_path, {"kind": "custom", "days": [1]}, [])
    result = runner.invoke(["streak", path])

    assert result.exit_code == 1
    assert "customSchedule" in result.stderr


def test_missing_file_fails(tmp_cadence_dir, tmp_path):
    result = runner.invoke(["streak", str(tmp_path / "nope.yaml")])

    assert result.exit_code == 1
    assert "no habit file" in result.stderr
