import contextlib
import dataclasses
import io
from datetime import datetime

import pytest
from dateutil import tz

from cadence import config
from cadence.cli import run


def at(text: str, zone: str = "UTC") -> datetime:
    """Aware datetime from 'YYYY-MM-DD' or 'YYYY-MM-DDTHH:MM'."""
    parsed = datetime.fromisoformat(text)
    return parsed.replace(tzinfo=tz.gettz(zone))


@dataclasses.dataclass
class Result:
    exit_code: int
    stdout: str
    stderr: str


class FnCLIRunner:
    def invoke(self, args: list[str]) -> Result:
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            try:
                code = run(args)
            except SystemExit as e:
                code = e.code if isinstance(e.code, int) else 1
        return Result(exit_code=code or 0, stdout=out.getvalue(), stderr=err.getvalue())


@pytest.fixture
def tmp_cadence_dir(tmp_path, monkeypatch):
    home = tmp_path / ".cadence"
    monkeypatch.setattr(config, "CONFIG_PATH", home / "config.yaml")
    monkeypatch.setattr(config.Config, "_instance", None)
    return home
