"""Tests for the command line entry point."""

from unittest.mock import patch

import pytest

from basebot import app


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("basebot.app.configure_logger"):
        yield


def test_main_runs_shop_with_resolved_settings(tmp_path):
    config = tmp_path / "config.ini"
    config.write_text("[BASEBOT]\npoll_interval = 0.5\ntime_scale = 2\n")

    with patch("basebot.app.barista.run") as run:
        rc = app.main(["--config-file", str(config), "--time-scale", "0.01", "-b", "ann"])

    assert rc == 0
    run.assert_called_once_with(
        baristas=["ann"],
        poll_interval=0.5,
        time_scale=0.01,
        options={"handler_timeout": 0},
    )


def test_main_runs_simple_example(tmp_path):
    with patch("basebot.app.simple.run") as run:
        rc = app.main(
            ["--example", "simple", "--handler-timeout", "3", "-c", str(tmp_path / "c.ini")]
        )

    assert rc == 0
    run.assert_called_once_with({"handler_timeout": 3.0})


def test_main_reports_failure(tmp_path):
    with patch("basebot.app.barista.run", side_effect=ValueError("no milk")):
        rc = app.main(["-c", str(tmp_path / "c.ini")])

    assert rc == 1
