"""Tests for the command-line entry point and JSON encoding."""
import enum
import json
from dataclasses import dataclass
from datetime import date, datetime

import pytest

import mal_wrapped.__main__ as main_module
from mal_wrapped.models.report import WrappedReport
from mal_wrapped.utils.json_encoder import json_dumps, to_jsonable


@pytest.fixture
def output_dir(mocker, tmp_path):
    mocker.patch.object(main_module.settings, "OUTPUT_DIR", str(tmp_path))
    return tmp_path


def test_run_writes_results(mocker, output_dir):
    wrapped_cls = mocker.patch("mal_wrapped.__main__.Wrapped")
    wrapped_cls.return_value.generate.return_value = WrappedReport(valid=True, username="yuki", target_year=2025)

    main_module.run()

    results = json.loads((output_dir / "results.json").read_text(encoding="utf-8"))
    assert results["valid"] is True
    assert results["username"] == "yuki"


def test_run_exits_on_failed_report(mocker, output_dir):
    wrapped_cls = mocker.patch("mal_wrapped.__main__.Wrapped")
    wrapped_cls.return_value.generate.return_value = WrappedReport(valid=False, attributes={"error": "401"})

    with pytest.raises(SystemExit) as exc_info:
        main_module.run()

    assert exc_info.value.code == 1
    assert json.loads((output_dir / "results.json").read_text(encoding="utf-8"))["valid"] is False


class Color(enum.Enum):
    RED = "red"


@dataclass(frozen=True)
class Point:
    when: date
    color: Color


def test_encoder_handles_dates_enums_and_dataclasses():
    payload = {"at": datetime(2025, 1, 2, 3, 4, 5), "point": Point(date(2025, 4, 1), Color.RED)}

    assert to_jsonable(payload) == {
        "at": "2025-01-02T03:04:05",
        "point": {"when": "2025-04-01", "color": "red"},
    }


def test_encoder_rejects_unknown_types():
    with pytest.raises(TypeError):
        json_dumps({"value": object()})
