"""Interactive menu for managing flight departures and their passengers."""

from __future__ import annotations

import argparse
import re
import sys
from collections.abc import Callable
from typing import TextIO

from .flights import Flight, FlightRegistry

TEXT_SIZE = 124
_ID_SIZE = 6
_NUMBER_SIZE = 4
_TIME_SIZE = 5

MENU = (
    "\n1 - Add a flight to the list\n"
    "2 - Add a passenger to a flight-departure\n"
    "3 - Retrieve information about a flight-departure\n"
    "4 - Find flights that matches departure destination\n"
    "5 - Delete a flight (with all its passengers)\n"
    "6 - Change the seat of a passenger\n"
    "7 - Search for a passengers name in all flights\n"
    "8 - Search through list for any passengers in all flights that are booked "
    "on more than 1 flight\n"
    "9 - Quit\n"
    "Enter your choice: \n\n"
)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class _InputClosed(Exception):
    """Raised when input ends while a menu action still needs a value."""


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class _Menu:
    def __init__(
        self, registry: FlightRegistry, stdin: TextIO, stdout: TextIO
    ) -> None:
        self.registry = registry
        self.stdin = stdin
        self.stdout = stdout
        self.actions: dict[str, Callable[[], None]] = {
            "1": self._add_flight,
            "2": self._add_passenger,
            "3": self._show_by_index,
            "4": self._show_by_destination,
            "5": self._delete_flight,
            "6": self._change_seat,
            "7": self._search_name,
            "8": self._multiple_bookings,
        }

    def _say(self, text: str = "", end: str = "\n") -> None:
        print(text, end=end, file=self.stdout)

    def _read(self, size: int) -> str:
        """Read one line, keeping at most ``size - 1`` characters of it."""
        line = self.stdin.readline()
        if not line:
            self._say("Could not read input")
            raise _InputClosed
        return line.split("\n", 1)[0][: size - 1]

    def _print_list(self) -> None:
        self._say("------LIST OF FLIGHTS------")
        for index, flight in enumerate(self.registry):
            self._say(f"{index} - {flight.flight_id}")

    def _print_passengers(self, flight: Flight) -> None:
        self._say(f"------PASSENGERS ON FLIGHT {flight.flight_id}------")
        for index, passenger in enumerate(flight.passengers):
            self._say(
                f"{index} - {passenger.name}, age {passenger.age}, "
                f"seat {passenger.seat}"
            )

    def _show_flight_at(self, index: int) -> None:
        flight = self.registry.flight_at(index)
        if flight is not None:
            self._say(flight.describe(), end="")

    def _add_flight(self) -> None:
        self._say("Enter flight id [format: XX-XX]:")
        flight_id = self._read(_ID_SIZE)
        self._say(f"Enter a destination flight {flight_id}:")
        destination = self._read(TEXT_SIZE)
        self._say("How many seats are available for this flight?")
        seats = _atoi(self._read(_NUMBER_SIZE))
        if seats == 0:
            self._say("Invalid seat input, must be a number")
            return
        self._say("What is the time for the departure? [format: HHMM]")
        time = _atoi(self._read(_TIME_SIZE))
        if time == 0:
            self._say("Invalid time input, must be a number (ex 1430)")
            return
        self.registry.add_flight(flight_id, destination, seats, time)
        self._print_list()

    def _add_passenger(self) -> None:
        self._print_list()
        self._say("Enter the FLIGHT ID of the flight you want to add this passenger on:")
        flight = self.registry.get(self._read(_ID_SIZE))
        if flight is None:
            self._say("You need to enter a valid flight id")
            return
        self._say("What is the name of your passenger?")
        name = self._read(TEXT_SIZE - 1)
        self._say("What is the age of your passenger?")
        age = _atoi(self._read(_NUMBER_SIZE))
        if age == 0:
            self._say("Enter a valid age! only numbers")
            return
        self._say(f"Enter the seat you want, up to {flight.seats}:")
        seat = _atoi(self._read(_NUMBER_SIZE))
        flight.add_passenger(name, age, seat)
        self._print_passengers(flight)

    def _show_by_index(self) -> None:
        self._say("Enter the index of which flight you want to see (first is 0):")
        self._show_flight_at(_atoi(self._read(_NUMBER_SIZE)))

    def _show_by_destination(self) -> None:
        self._say("Enter the destination you want to see flights for: ")
        index = self.registry.index_of_destination(self._read(TEXT_SIZE))
        if index is None:
            self._say("Could not find a flight to your destination")
        else:
            self._show_flight_at(index)

    def _delete_flight(self) -> None:
        self._say("Enter the flight ID to the flight you want to delete:")
        flight_id = self._read(_ID_SIZE)
        flight = self.registry.get(flight_id)
        if flight is None:
            self._say("No such Flight Id in the list")
            return
        try:
            self.registry.delete(flight)
        except ValueError:
            self._say("Coudlnt delete your flight...")
            return
        self._say(f"Deleted flight {flight_id}, the list is now: ")
        self._print_list()

    def _change_seat(self) -> None:
        self._say("Which passenger do you want to change the seat for? Enter name: ")
        name = self._read(TEXT_SIZE)
        self._say("Which flight associated with this passenger? Enter id:")
        flight_id = self._read(_ID_SIZE)
        self._say("Which seat do you want to switch to?")
        seat = _atoi(self._read(_NUMBER_SIZE))
        flight = self.registry.get(flight_id)
        if flight is None:
            self._say("No flight associated with the ID you entered")
            return
        try:
            flight.change_seat(name, seat)
        except KeyError:
            self._say("Could not change passenger seat, is the passenger name valid?")
            return
        self._say("Changed passenger seat:")
        self._print_passengers(flight)

    def _search_name(self) -> None:
        self._say("Enter the name you want to search for: ")
        matches = self.registry.find_passenger(self._read(TEXT_SIZE))
        if not matches:
            self._say("No such passengers in the list")
            return
        for index, flight in matches:
            self._say("-PASSENGER MATCH FOUND-")
            self._say(f"Flight {index} - {flight.flight_id}")
            self._say(f"Destination: {flight.destination}")
            self._say(f"Time: {flight.time}")
            self._say(f"Seats: {flight.seats}")
            self._say("-----------------------")

    def _multiple_bookings(self) -> None:
        self._say("List of all passengers that are booked on more than one flight: ")
        for name in self.registry.passengers_on_multiple_flights():
            self._say(name)

    def run(self) -> None:
        while True:
            self._say(MENU, end="")
            line = self.stdin.readline()
            if not line:
                return
            choice = line[0]
            if choice == "9":
                return
            action = self.actions.get(choice)
            if action is None:
                self._say("You must type in a valid number...")
                continue
            try:
                action()
            except _InputClosed:
                pass


def run_menu(registry: FlightRegistry, stdin: TextIO, stdout: TextIO) -> None:
    """Show the menu and handle choices until the user quits or input ends."""
    _Menu(registry, stdin, stdout).run()


def main(argv: list[str] | None = None) -> int:
    """Run the interactive flight menu on standard input and output."""
    argparse.ArgumentParser(description="Manage flight departures.").parse_args(argv)
    print("\nWelcome to the menu:) ")
    run_menu(FlightRegistry(), sys.stdin, sys.stdout)
    return 0