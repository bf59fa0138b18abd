"""Coffee shop demo: barista bots taking orders from a shop.

Each employee is a :class:`~basebot.bot.Bot` taught by the :func:`barista`
plugin how to make coffee. The :class:`Shop` hands every order to the first
employee who is not busy and polls again after a short delay when everyone is.
"""

from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Callable

from rich.console import Console

from basebot.bot import Bot
from basebot.lib.errors import BotError
from basebot.lib.flow import parallel

console = Console()

DEFAULT_RECIPES: dict[str, dict[str, Any]] = {
    "latte": {"ingredients": ["coffee", "milk"], "time": 0.5},
    "mocha": {"ingredients": ["chocolate", "coffee", "milk"], "time": 1.0},
}

SIZE_MULTIPLIERS = {"grande": 1.5, "venti": 2}

DEFAULT_ORDERS = [
    {"size": "venti", "type": "mocha", "name": "brian"},
    {"size": "grande", "type": "mocha", "name": "jon"},
    {"size": "tall", "type": "mocha", "name": "emily"},
    {"size": "venti", "type": "latte", "name": "mark"},
    {"size": "grande", "type": "latte", "name": "rob"},
    {"size": "tall", "type": "latte", "name": "chris"},
]


class UnknownRecipeError(BotError):
    """The barista does not know how to make the ordered drink."""

    def __init__(self, drink: str) -> None:
        super().__init__(f"Unknown recipe: {drink}")
        self.drink = drink


def brew_time(recipe: dict[str, Any], size: str | None, time_scale: float = 1.0) -> float:
    """Seconds needed to make a drink of the given size."""
    return recipe["time"] * SIZE_MULTIPLIERS.get(size, 1) * time_scale


def barista(recipes: dict[str, dict[str, Any]] | None = None, time_scale: float = 1.0):
    """Plugin teaching a bot to handle ``coffee-order`` events and make coffee."""

    def plugin(bot: Bot) -> None:
        bot.handler("coffee-order")
        bot.recipes = copy.deepcopy(recipes or DEFAULT_RECIPES)

        def make_coffee(self: Bot, order: dict[str, Any], cb: Callable[..., None]) -> None:
            recipe = self.recipes.get(order.get("type"))
            if recipe is None:
                cb(UnknownRecipeError(order.get("type")))
                return

            coffee = {
                "ingredients": list(recipe["ingredients"]),
                "type": order["type"],
                "size": order.get("size"),
            }
            timer = threading.Timer(
                brew_time(recipe, coffee["size"], time_scale), cb, args=(None, coffee)
            )
            timer.daemon = True
            timer.start()

        bot.define("make_coffee", make_coffee)

    return plugin


def create_employee(name: str, time_scale: float = 1.0, options: dict | None = None) -> Bot:
    """Hire a bot and train it as a barista."""
    employee = Bot(options)
    employee.name = name
    employee.working = False
    employee.use(barista(time_scale=time_scale))
    return employee


class Shop:
    """Routes coffee orders to employees that are clocked in and free."""

    def __init__(self, poll_interval: float = 0.1) -> None:
        self.poll_interval = poll_interval
        self.employees: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def clock_in(self, employee: Bot) -> None:
        """Start sending ``coffee-order`` events to an employee."""
        if employee.name in self.employees:
            return

        name = employee.name

        def handle_coffee_order(order: dict[str, Any], cb: Callable[..., None]) -> None:
            console.print(f"[cyan]\\[{name}][/cyan] starting coffee for {order['name']}")

            def on_coffee(err: Any = None, coffee: Any = None) -> None:
                if err is not None:
                    cb(err)
                    return
                console.print(
                    f"[cyan]\\[{name}][/cyan] {coffee['size']} {coffee['type']} "
                    f"for {order['name']} ready."
                )
                cb(None, coffee)

            employee.make_coffee(order, on_coffee)

        with self._lock:
            self.employees[name] = {"employee": employee, "handler": handle_coffee_order}
        employee.on_coffee_order(handle_coffee_order)
        logging.info(f"{name} clocked in")

    def clock_out(self, employee: Bot) -> None:
        """Stop sending orders to an employee."""
        with self._lock:
            entry = self.employees.pop(employee.name, None)
        if entry is None:
            return
        employee.off("coffee-order", entry["handler"])
        logging.info(f"{employee.name} clocked out")

    def _claim_free_employee(self) -> Bot | None:
        with self._lock:
            for entry in self.employees.values():
                employee = entry["employee"]
                if not employee.working:
                    employee.working = True
                    return employee
        return None

    def order(self, request: dict[str, Any], cb: Callable[..., None]) -> None:
        """Have the first free employee make an order.

        When every employee is busy the order is retried after
        ``poll_interval`` seconds, without limit.
        """
        employee = self._claim_free_employee()
        if employee is None:
            logging.debug(f"No free employee for {request.get('name')}, retrying")
            timer = threading.Timer(self.poll_interval, self.order, args=(request, cb))
            timer.daemon = True
            timer.start()
            return

        def done(err: Any, coffee: Any) -> None:
            employee.working = False
            if err is not None:
                cb(err)
                return
            cb(None, coffee)

        employee.handle_coffee_order(request, done)


def run(
    baristas: list[str] | None = None,
    orders: list[dict[str, Any]] | None = None,
    poll_interval: float = 0.1,
    time_scale: float = 1.0,
    options: dict | None = None,
    timeout: float | None = None,
) -> list[Any]:
    """Clock in the baristas, place every order at once and wait for the coffees.

    Raises:
        Exception: The first order error.
        TimeoutError: If the orders are not ready within ``timeout`` seconds.
    """
    shop = Shop(poll_interval=poll_interval)
    employees = [
        create_employee(name, time_scale=time_scale, options=options)
        for name in (baristas or ["joe", "bob"])
    ]
    for employee in employees:
        shop.clock_in(employee)

    finished = threading.Event()
    outcome: dict[str, Any] = {}

    def on_finished(err: Any, coffees: Any) -> None:
        outcome["err"] = err
        outcome["coffees"] = coffees
        finished.set()

    parallel(
        [
            (lambda done, request=request: shop.order(request, done))
            for request in (orders or DEFAULT_ORDERS)
        ],
        on_finished,
    )
    try:
        if not finished.wait(timeout):
            raise TimeoutError(f"Orders were not ready within {timeout}s")
        if outcome["err"] is not None:
            raise outcome["err"]
        console.print("finished")
        return outcome["coffees"]
    finally:
        for employee in employees:
            shop.clock_out(employee)
