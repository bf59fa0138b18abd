"""Single barista demo: one bot, two orders handled one after the other."""

from __future__ import annotations

import logging
from typing import Any, Callable

from rich.console import Console

from basebot.bot import Bot

console = Console()


def teach_coffee(bot: Bot) -> None:
    def make_coffee(self: Bot, order: dict[str, Any], cb: Callable[..., None]) -> None:
        cb(None, dict(order))

    bot.define("make_coffee", make_coffee)


def create_barista(options: dict | None = None) -> Bot:
    joe = Bot(options)
    joe.use(teach_coffee)

    def on_order(order: dict[str, Any], cb: Callable[..., None]) -> None:
        console.print(f"starting coffee for {order['name']}")

        def on_coffee(err: Any = None, coffee: Any = None) -> None:
            if err is not None:
                cb(err)
                return
            console.print(f"{coffee['size']} {coffee['type']} for {order['name']} ready.")
            cb(None, coffee)

        joe.make_coffee(order, on_coffee)

    joe.on("coffee-order", on_order)
    return joe


def run(options: dict | None = None) -> list[Any]:
    """Handle two orders in sequence and return the coffees made."""
    joe = create_barista(options)
    coffees = [
        joe.dispatch("coffee-order", {"size": "venti", "type": "mocha", "name": "brian"}),
        joe.dispatch("coffee-order", {"size": "grande", "type": "mocha", "name": "jon"}),
    ]
    logging.info("finished")
    return coffees
