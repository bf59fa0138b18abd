import re
from typing import Any

_EDGE_SEPARATORS = re.compile(r"^[\W_]+|[\W_]+$", re.ASCII)
_INNER_SEPARATORS = re.compile(r"[\W_]+(\w|$)", re.ASCII)
_UPPER = re.compile(r"([A-Z])")


def camelcase(name: str) -> str:
    """Camelcase a string containing `_`, `.`, `-` or whitespace

    Leading and trailing separators are stripped and the rest is lowercased before
    each separator run is dropped and the character after it uppercased.
    Example: `'pull-request' -> 'pullRequest'`

    Args:
        name (str): The string to camelcase.

    Returns:
        str: The camelcased string.
    """
    if len(name) == 1:
        return name.lower()
    name = _EDGE_SEPARATORS.sub("", name).lower()
    return _INNER_SEPARATORS.sub(lambda match: match.group(1).upper(), name)


def namify(name: str) -> str:
    """Turn an event name into the suffix of its generated methods

    Example: `'pull_request' -> 'PullRequest'`, `'a' -> 'A'`

    Args:
        name (str): The event name.

    Returns:
        str: The camelcased name with its first character uppercased.
    """
    name = camelcase(name)
    return name[:1].upper() + name[1:]


def snakecase(name: str) -> str:
    """Snake case an event name for pythonic method names. Example: `'pull-request' -> 'pull_request'`"""
    return _UPPER.sub(r"_\1", camelcase(name)).lower()


def arrayify(value: Any) -> list:
    """Wrap a value in a list. Falsy values give an empty list, lists and tuples are copied."""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]
