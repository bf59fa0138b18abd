"""Tests for CLI argument parsing."""

import logging

import pytest

from basebot.lib.args import parse_basebot_args


def test_defaults():
    args = parse_basebot_args([])

    assert args.example == "shop"
    assert args.baristas == ["joe", "bob"]
    assert args.poll_interval is None
    assert args.handler_timeout is None
    assert args.time_scale is None
    assert args.config_file == "config.ini"
    assert args.log_level == logging.INFO
    assert args.log_dir is None


def test_all_options():
    args = parse_basebot_args(
        [
            "--example",
            "simple",
            "--baristas",
            "ann",
            "lee",
            "sam",
            "--poll-interval",
            "0.5",
            "--handler-timeout",
            "3",
            "--time-scale",
            "0.1",
            "--config-file",
            "/tmp/basebot.ini",
            "--log-dir",
            "/tmp/logs",
        ]
    )

    assert args.example == "simple"
    assert args.baristas == ["ann", "lee", "sam"]
    assert args.poll_interval == 0.5
    assert args.handler_timeout == 3.0
    assert args.time_scale == 0.1
    assert args.config_file == "/tmp/basebot.ini"
    assert args.log_dir == "/tmp/logs"


@pytest.mark.parametrize("value, expected", [("debug", 10), ("WARNING", 30), ("40", 40)])
def test_log_level(value, expected):
    assert parse_basebot_args(["-l", value]).log_level == expected


def test_rejects_unknown_log_level():
    with pytest.raises(SystemExit):
        parse_basebot_args(["--log-level", "chatty"])


def test_rejects_negative_interval():
    with pytest.raises(SystemExit):
        parse_basebot_args(["--poll-interval", "-1"])


def test_rejects_unknown_example():
    with pytest.raises(SystemExit):
        parse_basebot_args(["--example", "bakery"])
