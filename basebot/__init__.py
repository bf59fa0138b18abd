from basebot.bot import Bot
from basebot.version import __version__

PACKAGE = __package__
VERSION = __version__

__all__ = [
    "VERSION",
    "PACKAGE",
    Bot.__name__,
]
