import logging

import pytest

from insider_qa.run_logger import RunLogger, format_elapsed, log_keyword
import insider_qa.run_logger as run_logger_module


@pytest.mark.parametrize("seconds,expected", [
    (0, "00:00:00.000"),
    (2.5, "00:00:02.500"),
    (3723.25, "01:02:03.250"),
])
def test_format_elapsed(seconds, expected):
    assert format_elapsed(seconds) == expected


def test_test_results_are_counted():
    run = RunLogger("insider_qa.run.test")
    run.suite_start("Insider")
    run.test_start("test_a")
    run.test_end("test_a", "pass")
    run.test_start("test_b")
    run.test_end("test_b", "FAIL", "boom")

    stats = run.get_statistics()
    assert (stats["total"], stats["passed"], stats["failed"]) == (2, 1, 1)
    assert stats["tests"][1]["error"] == "boom"


def test_keyword_records_status(monkeypatch, caplog):
    run = RunLogger("insider_qa.run.kw")
    monkeypatch.setattr(run_logger_module, "_run_logger", run)

    @log_keyword("Select Location")
    def select_location(driver, text):
        return text

    @log_keyword()
    def broken(driver):
        raise ValueError("nope")

    run.test_start("test_kw")
    with caplog.at_level(logging.INFO, logger="insider_qa.run.kw"):
        assert select_location(object(), "Istanbul, Turkiye") == "Istanbul, Turkiye"
        with pytest.raises(ValueError):
            broken(object())

    assert "KEYWORD Select Location Istanbul, Turkiye [PASS]" in caplog.text
    assert "KEYWORD broken [FAIL]" in caplog.text
    assert [k["status"] for k in run.current_test["keywords"]] == ["PASS", "FAIL"]
