#!/usr/bin/env python3
"""
Interactive console for tracking cars and fuel purchases.

Reads one command per line from stdin (or a script file). All data lives in
memory for the length of the session.

Commands:
  car       - Add, list, show, edit or remove tracked cars
  fuel      - Add, list, edit or remove fuel entries
  expenses  - Show fuel spend for a month
  unit      - Show or change the economy unit
  help      - Show command help
  quit      - End the session
"""

import argparse
import logging
import math
import shlex
import sys
from dataclasses import replace
from contextlib import redirect_stdout
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional, TextIO

from tabulate import tabulate

from carledger import (
    FuelEntry,
    FuelLedger,
    StoreEvent,
    UnitMode,
    Vehicle,
    VehicleStore,
    economy,
    entries_in_month,
    expense_mileage,
    load_settings,
    monthly_total,
)
from carledger.parsing import (
    parse_date,
    parse_datetime,
    parse_float,
    parse_int,
    parse_month,
)

_logger = logging.getLogger("ledger")

PROMPT = "ledger> "

# =============================================================================
# Formatting helpers
# =============================================================================


def format_mileage(mileage: Optional[int]) -> str:
    """Format odometer mileage for display."""
    return f"{mileage:,}" if mileage is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_quantity(quantity: Optional[float]) -> str:
    """Format fuel quantity for display."""
    return f"{quantity:,.2f}" if quantity is not None else "-"


def format_economy(value: float) -> str:
    """Format an economy figure; undefined ratios show as a dash."""
    if not math.isfinite(value):
        return "-"
    return f"{value:,.3f}"


def format_date(value) -> str:
    """Format a date medium-style (e.g. 'Mar 5, 2024')."""
    if value is None:
        return "-"
    return f"{value:%b} {value.day}, {value.year}"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if not text:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def make_vehicle_table(vehicles: List[Vehicle]) -> List[List[str]]:
    """Convert vehicles to table rows."""
    rows = []
    for index, vehicle in enumerate(vehicles):
        rows.append(
            [
                str(index),
                vehicle.model,
                format_mileage(vehicle.mileage),
                format_date(vehicle.oil_change_date),
                truncate(vehicle.tire_condition),
            ]
        )
    return rows


def make_fuel_table(entries: List[FuelEntry], unit: UnitMode) -> List[List[str]]:
    """Convert fuel entries to table rows with the economy column."""
    rows = []
    for index, entry in enumerate(entries):
        rows.append(
            [
                str(index),
                entry.car_model,
                format_date(entry.date),
                format_quantity(entry.fuel_quantity),
                format_cost(entry.cost),
                format_economy(economy(entry, unit)),
            ]
        )
    return rows


def make_expense_table(
    entries: List[FuelEntry], vehicles: List[Vehicle]
) -> List[List[str]]:
    """Convert fuel entries to expense rows (mileage only for tracked models)."""
    rows = []
    for index, entry in enumerate(entries):
        rows.append(
            [
                str(index),
                entry.car_model,
                expense_mileage(entry, vehicles),
                format_date(entry.date),
                format_quantity(entry.fuel_quantity),
                format_cost(entry.cost),
            ]
        )
    return rows


def describe(item) -> str:
    """Short label for a vehicle or fuel entry in log messages."""
    if isinstance(item, Vehicle):
        return f"car '{item.model}'"
    return f"fuel entry for '{item.car_model}' ({format_cost(item.cost)})"


# =============================================================================
# Command parsing
# =============================================================================


class CommandError(Exception):
    """A console line that could not be parsed or carried out."""


class HelpShown(Exception):
    """A command asked for its help text (-h); not a failure."""


class CommandParser(argparse.ArgumentParser):
    """ArgumentParser that reports problems instead of exiting the process."""

    def error(self, message):
        raise CommandError(message)

    def exit(self, status=0, message=None):
        if status == 0:
            raise HelpShown()
        raise CommandError(message.strip() if message else "")


def build_parser() -> CommandParser:
    parser = CommandParser(prog="", add_help=False, description="Fuel ledger commands")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Car commands
    car_parser = subparsers.add_parser("car", help="Manage tracked cars")
    car_sub = car_parser.add_subparsers(dest="action", required=True)

    car_add = car_sub.add_parser("add", help="Add a car")
    car_add.add_argument("model", help="Car model (e.g., 'Civic')")
    car_add.add_argument("mileage", help="Current odometer mileage (whole number)")
    car_add.add_argument(
        "--oil-change", help="Date of last oil change (default: today)"
    )
    car_add.add_argument("--tires", default="", help="Tire condition")

    car_sub.add_parser("list", help="List cars")

    car_show = car_sub.add_parser("show", help="Show car details")
    car_show.add_argument("index", type=int, help="Car number from 'car list'")

    car_edit = car_sub.add_parser("edit", help="Edit a car")
    car_edit.add_argument("index", type=int, help="Car number from 'car list'")
    car_edit.add_argument("--model", help="New model name")
    car_edit.add_argument("--mileage", help="New odometer mileage")
    car_edit.add_argument("--oil-change", help="New last oil change date")
    car_edit.add_argument("--tires", help="New tire condition")

    car_rm = car_sub.add_parser("rm", help="Remove cars")
    car_rm.add_argument("indices", type=int, nargs="+", help="Car numbers")

    # Fuel commands
    fuel_parser = subparsers.add_parser("fuel", help="Manage fuel entries")
    fuel_sub = fuel_parser.add_subparsers(dest="action", required=True)

    fuel_add = fuel_sub.add_parser("add", help="Add a fuel entry")
    fuel_add.add_argument("car_model", help="Car model the fuel was bought for")
    fuel_add.add_argument("--odometer", required=True, help="Odometer reading")
    fuel_add.add_argument("--quantity", required=True, help="Fuel quantity")
    fuel_add.add_argument("--price", required=True, help="Fuel price per unit")
    fuel_add.add_argument("--cost", required=True, help="Total cost")
    fuel_add.add_argument("--date", help="Purchase date (default: now)")

    fuel_sub.add_parser("list", help="List fuel entries with economy")

    fuel_edit = fuel_sub.add_parser("edit", help="Edit a fuel entry")
    fuel_edit.add_argument("index", type=int, help="Entry number from 'fuel list'")
    fuel_edit.add_argument("--date", help="New purchase date")
    fuel_edit.add_argument("--quantity", help="New fuel quantity")
    fuel_edit.add_argument("--cost", help="New total cost")

    fuel_rm = fuel_sub.add_parser("rm", help="Remove fuel entries")
    fuel_rm.add_argument("indices", type=int, nargs="+", help="Entry numbers")

    # Expenses
    expenses_parser = subparsers.add_parser("expenses", help="Monthly fuel spend")
    expenses_parser.add_argument(
        "--month", help="Month in YYYY-MM format (default: current month)"
    )

    # Unit
    unit_parser = subparsers.add_parser("unit", help="Show or change economy unit")
    unit_parser.add_argument("name", nargs="?", help="'mpg' or 'kpl'")

    subparsers.add_parser("help", help="Show this help")
    subparsers.add_parser("quit", help="End the session")
    subparsers.add_parser("exit", help="End the session")

    return parser


# =============================================================================
# Session
# =============================================================================


class Session:
    """One console run: the stores, the selected unit and the command handlers."""

    def __init__(
        self,
        unit: UnitMode = UnitMode.DISTANCE_PER_VOLUME,
        out: Optional[TextIO] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.vehicles = VehicleStore()
        self.fuel = FuelLedger()
        self.unit = unit
        self.out = out
        self.clock = clock
        self.finished = False
        self.parser = build_parser()
        self.vehicles.subscribe(self._log_change)
        self.fuel.subscribe(self._log_change)

    def print(self, *args) -> None:
        print(*args, file=self.out or sys.stdout)

    @staticmethod
    def _log_change(event: StoreEvent) -> None:
        _logger.info("%s %s at %d", describe(event.item), event.kind.value, event.index)

    def execute(self, line: str) -> int:
        """Run one command line. Returns 0 on success, 1 on error."""
        try:
            argv = shlex.split(line, comments=True)
        except ValueError as e:
            self.print(f"Error: {e}")
            return 1
        if not argv:
            return 0
        try:
            # argparse prints -h output to stdout; keep it on the session stream
            with redirect_stdout(self.out or sys.stdout):
                args = self.parser.parse_args(argv)
            return self.dispatch(args)
        except HelpShown:
            return 0
        except CommandError as e:
            if str(e):
                self.print(f"Error: {e}")
            return 1

    def dispatch(self, args) -> int:
        if args.command == "car":
            return getattr(self, f"cmd_car_{args.action}")(args)
        elif args.command == "fuel":
            return getattr(self, f"cmd_fuel_{args.action}")(args)
        elif args.command == "expenses":
            return self.cmd_expenses(args)
        elif args.command == "unit":
            return self.cmd_unit(args)
        elif args.command == "help":
            self.print(self.parser.format_help())
            return 0
        elif args.command in ("quit", "exit"):
            self.finished = True
            return 0
        raise CommandError(f"unknown command '{args.command}'")

    # -------------------------------------------------------------------------
    # Car commands
    # -------------------------------------------------------------------------

    def _vehicle_at(self, index: int) -> Vehicle:
        vehicles = self.vehicles.list()
        if index < 0 or index >= len(vehicles):
            raise CommandError(f"no car at index {index}")
        return vehicles[index]

    def cmd_car_add(self, args) -> int:
        """Add a car."""
        mileage = parse_int(args.mileage)
        if mileage is None or mileage < 0:
            raise CommandError(f"mileage must be a whole number, got '{args.mileage}'")
        if args.oil_change is None:
            oil_change = self.clock().date()
        else:
            oil_change = parse_date(args.oil_change)
        if oil_change is None:
            raise CommandError(f"invalid oil change date '{args.oil_change}'")

        vehicle = Vehicle(
            model=args.model,
            mileage=mileage,
            oil_change_date=oil_change,
            tire_condition=args.tires,
        )
        self.vehicles.add(vehicle)
        self.print(f"Added car: {vehicle.model}")
        return 0

    def cmd_car_list(self, args) -> int:
        """List tracked cars."""
        vehicles = self.vehicles.list()
        if not vehicles:
            self.print("No cars added yet.")
            return 0
        headers = ["#", "Model", "Mileage", "Oil Change", "Tire Condition"]
        self.print(
            tabulate(
                make_vehicle_table(vehicles),
                headers=headers,
                tablefmt="simple",
                disable_numparse=True,
            )
        )
        return 0

    def cmd_car_show(self, args) -> int:
        """Show one car's details."""
        vehicle = self._vehicle_at(args.index)
        self.print(f"Car Model: {vehicle.model}")
        self.print(f"Mileage: {format_mileage(vehicle.mileage)}")
        self.print(f"Last Oil Change Date: {format_date(vehicle.oil_change_date)}")
        self.print(f"Tire Condition: {vehicle.tire_condition or '-'}")
        return 0

    def cmd_car_edit(self, args) -> int:
        """Replace fields of a car; unspecified fields keep their value."""
        vehicle = self._vehicle_at(args.index)
        changes = {}
        if args.model is not None:
            changes["model"] = args.model
        if args.mileage is not None:
            mileage = parse_int(args.mileage)
            if mileage is None or mileage < 0:
                raise CommandError(
                    f"mileage must be a whole number, got '{args.mileage}'"
                )
            changes["mileage"] = mileage
        if args.oil_change is not None:
            oil_change = parse_date(args.oil_change)
            if oil_change is None:
                raise CommandError(f"invalid oil change date '{args.oil_change}'")
            changes["oil_change_date"] = oil_change
        if args.tires is not None:
            changes["tire_condition"] = args.tires

        if not self.vehicles.update(replace(vehicle, **changes)):
            raise CommandError(f"no car at index {args.index}")
        self.print(f"Updated car: {changes.get('model', vehicle.model)}")
        return 0

    def cmd_car_rm(self, args) -> int:
        """Remove cars by position."""
        removed = self.vehicles.remove_offsets(args.indices)
        self.print(f"Removed {removed} car(s).")
        return 0 if removed else 1

    # -------------------------------------------------------------------------
    # Fuel commands
    # -------------------------------------------------------------------------

    def _entry_at(self, index: int) -> FuelEntry:
        entries = self.fuel.list()
        if index < 0 or index >= len(entries):
            raise CommandError(f"no fuel entry at index {index}")
        return entries[index]

    def cmd_fuel_add(self, args) -> int:
        """Add a fuel entry. Odometer and price must be numbers but are not stored."""
        numbers = {}
        for name in ("odometer", "quantity", "price", "cost"):
            value = parse_float(getattr(args, name))
            if value is None:
                raise CommandError(
                    f"{name} must be a number, got '{getattr(args, name)}'"
                )
            numbers[name] = value

        if not args.car_model.strip():
            raise CommandError("car model is required")

        purchased = self.clock() if args.date is None else parse_datetime(args.date)
        if purchased is None:
            raise CommandError(f"invalid date '{args.date}'")

        entry = FuelEntry(
            fuel_quantity=numbers["quantity"], cost=numbers["cost"], date=purchased
        )
        self.fuel.add(entry, args.car_model)
        self.print(
            f"Added fuel entry: {args.car_model}, "
            f"{format_quantity(entry.fuel_quantity)} for {format_cost(entry.cost)}"
        )
        return 0

    def cmd_fuel_list(self, args) -> int:
        """List fuel entries with the economy for the current unit."""
        entries = self.fuel.list()
        if not entries:
            self.print("No fuel entries added yet.")
            return 0
        headers = ["#", "Car Model", "Date", "Quantity", "Cost", self.unit.value]
        self.print(
            tabulate(
                make_fuel_table(entries, self.unit),
                headers=headers,
                tablefmt="simple",
                disable_numparse=True,
            )
        )
        return 0

    def cmd_fuel_edit(self, args) -> int:
        """Edit date, quantity or cost of a fuel entry."""
        entry = self._entry_at(args.index)
        purchased = quantity = cost = None
        if args.date is not None:
            purchased = parse_datetime(args.date)
            if purchased is None:
                raise CommandError(f"invalid date '{args.date}'")
        if args.quantity is not None:
            quantity = parse_float(args.quantity)
            if quantity is None:
                raise CommandError(f"quantity must be a number, got '{args.quantity}'")
        if args.cost is not None:
            cost = parse_float(args.cost)
            if cost is None:
                raise CommandError(f"cost must be a number, got '{args.cost}'")

        if not self.fuel.update(entry.id, date=purchased, fuel_quantity=quantity, cost=cost):
            raise CommandError(f"no fuel entry at index {args.index}")
        self.print(f"Updated fuel entry {args.index}.")
        return 0

    def cmd_fuel_rm(self, args) -> int:
        """Remove fuel entries by position."""
        removed = self.fuel.remove_offsets(args.indices)
        self.print(f"Removed {removed} fuel entry(s).")
        return 0 if removed else 1

    # -------------------------------------------------------------------------
    # Expenses and unit
    # -------------------------------------------------------------------------

    def cmd_expenses(self, args) -> int:
        """Show fuel entries and the spend for one calendar month."""
        if args.month is None:
            reference = self.clock()
        else:
            reference = parse_month(args.month)
            if reference is None:
                raise CommandError(f"month must be YYYY-MM, got '{args.month}'")

        entries = self.fuel.list()
        vehicles = self.vehicles.list()
        month_entries = entries_in_month(entries, reference)

        self.print(f"Month: {reference:%B %Y}")
        self.print(f"Entries this month: {len(month_entries)} of {len(entries)}")
        self.print()
        if entries:
            headers = ["#", "Car Model", "Mileage", "Date", "Quantity", "Cost"]
            self.print(
                tabulate(
                    make_expense_table(entries, vehicles),
                    headers=headers,
                    tablefmt="simple",
                    disable_numparse=True,
                )
            )
            self.print()
        self.print(f"Monthly Expenses: {format_cost(monthly_total(entries, reference))}")
        return 0

    def cmd_unit(self, args) -> int:
        """Show or change the economy unit."""
        if args.name is not None:
            try:
                self.unit = UnitMode.from_name(args.name)
            except ValueError as e:
                raise CommandError(str(e)) from e
        self.print(f"Unit: {self.unit.value}")
        return 0


def run(session: Session, lines: Iterable[str]) -> int:
    """Feed lines to a session until input ends or it is told to quit."""
    failures = 0
    for line in lines:
        if session.execute(line) != 0:
            failures += 1
        if session.finished:
            break
    return 1 if failures else 0


# =============================================================================
# Main
# =============================================================================


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="In-memory car and fuel ledger",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s --unit kpl
  %(prog)s --script session.txt

Session commands:
  car add Civic 42000 --oil-change 2024-02-01 --tires good
  fuel add Civic --odometer 42310 --quantity 10 --price 3.50 --cost 35
  fuel list
  expenses --month 2024-03
""",
    )
    parser.add_argument(
        "--unit",
        choices=["mpg", "kpl"],
        help="Economy unit (default: $CARLEDGER_UNIT or mpg)",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: $CARLEDGER_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--script",
        type=Path,
        help="Read commands from a file instead of stdin",
    )
    args = parser.parse_args(argv)

    try:
        settings = load_settings(unit=args.unit, log_level=args.log_level)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    session = Session(unit=settings.unit)

    if args.script is not None:
        if not args.script.exists():
            print(f"Error: File not found: {args.script}")
            return 1
        with open(args.script) as fp:
            return run(session, fp)

    if sys.stdin.isatty():
        return run(session, _prompt_lines())
    return run(session, sys.stdin)


def _prompt_lines():
    """Yield lines typed at the prompt until end of input."""
    while True:
        try:
            yield input(PROMPT)
        except EOFError:
            print()
            return


if __name__ == "__main__":
    sys.exit(main() or 0)
