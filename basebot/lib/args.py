import argparse
import logging

# Default values for CLI args
default_example = "shop"
default_baristas = ["joe", "bob"]
default_log_level = logging.INFO
default_config_file_path = "config.ini"


def parse_log_level(level: str) -> int:
    """Accept a level name (`debug`) or its int value (`10`)."""
    if level.isdigit():
        return int(level)
    parsed = logging.getLevelName(level.upper())
    if not isinstance(parsed, int):
        raise argparse.ArgumentTypeError(f"Unknown log level: {level}")
    return parsed


def non_negative_float(value: str) -> float:
    parsed = float(value)
    if parsed < 0:
        raise argparse.ArgumentTypeError(f"{value} must not be negative")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="basebot", description="Run the basebot coffee shop demos."
    )

    parser.add_argument(
        "-e",
        "--example",
        help="Demo to run: 'simple' (one barista, two orders) or 'shop' (several baristas). (default: %s)"
        % default_example,
        choices=["simple", "shop"],
        default=default_example,
        required=False,
    )
    parser.add_argument(
        "-b",
        "--baristas",
        nargs="+",
        help="Names of the baristas working in the shop. (default: %s)"
        % " ".join(default_baristas),
        default=default_baristas,
        required=False,
    )
    parser.add_argument(
        "--poll-interval",
        help="Seconds to wait before looking for a free barista again. Overrides the config file.",
        type=non_negative_float,
        default=None,
        required=False,
    )
    parser.add_argument(
        "--handler-timeout",
        help="Fail an order when a handler takes longer than this many seconds. 0 disables. Overrides the config file.",
        type=non_negative_float,
        default=None,
        required=False,
    )
    parser.add_argument(
        "--time-scale",
        help="Multiplier applied to every brew time. Overrides the config file.",
        type=non_negative_float,
        default=None,
        required=False,
    )
    parser.add_argument(
        "-c",
        "--config-file",
        help=f"Path to a config file to load settings from. Relative to the data directory unless absolute. (default: {default_config_file_path})",
        default=default_config_file_path,
        required=False,
    )
    parser.add_argument(
        "-l",
        "--log-level",
        help=f"Logging level name or int value (DEBUG: 10, INFO: 20, WARNING: 30, ERROR: 40, CRITICAL: 50). (default: {default_log_level} )",
        type=parse_log_level,
        default=default_log_level,
        required=False,
    )
    parser.add_argument(
        "--log-dir",
        help="Directory to write log files to. (default: platform log directory)",
        default=None,
        required=False,
    )
    return parser


def parse_basebot_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
