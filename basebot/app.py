import logging
import sys
from pathlib import Path

from basebot.examples import barista, simple
from basebot.lib.args import parse_basebot_args
from basebot.lib.logger import configure_logger
from basebot.lib.preference_manager import PreferenceManager
from basebot.version import __version__


class Settings:
    """Resolved demo settings, hydrated by PreferenceManager."""

    handler_timeout: float = 0
    poll_interval: float = 0.1
    time_scale: float = 1.0


def main(argv: list[str] | None = None) -> int:
    args = parse_basebot_args(argv)
    configure_logger(args.log_level, Path(args.log_dir) if args.log_dir else None)
    logging.info(f"basebot {__version__}")

    settings = Settings()
    preferences = PreferenceManager(args.config_file, target=settings)
    preferences.apply_all(
        handler_timeout=args.handler_timeout,
        poll_interval=args.poll_interval,
        time_scale=args.time_scale,
    )
    options = {"handler_timeout": settings.handler_timeout}

    try:
        if args.example == "simple":
            simple.run(options)
        else:
            barista.run(
                baristas=args.baristas,
                poll_interval=settings.poll_interval,
                time_scale=settings.time_scale,
                options=options,
            )
    except Exception as e:
        logging.error(f"Demo failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
