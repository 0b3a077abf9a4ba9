"""Flight departures with passenger lists kept in seat order."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass
class Passenger:
    """A passenger booked on a flight."""

    name: str
    age: int
    seat: int


@dataclass(eq=False)
class Flight:
    """A flight departure; its passengers are kept ordered by seat."""

    flight_id: str
    destination: str
    seats: int
    time: int
    passengers: list[Passenger] = field(default_factory=list)

    def _insert(self, passenger: Passenger) -> None:
        seat = passenger.seat
        if not self.passengers or self.passengers[0].seat > seat:
            self.passengers.insert(0, passenger)
            return
        position = next(
            (
                index
                for index, other in enumerate(self.passengers[1:], start=1)
                if other.seat >= seat
            ),
            len(self.passengers),
        )
        self.passengers.insert(position, passenger)

    def add_passenger(self, name: str, age: int, seat: int) -> Passenger:
        """Book a passenger, placing them by seat number."""
        passenger = Passenger(name, age, seat)
        self._insert(passenger)
        return passenger

    def change_seat(self, name: str, seat: int) -> None:
        """Move every passenger called ``name`` to ``seat``.

        Raises KeyError if no passenger has that name.
        """
        matches = [p for p in self.passengers if p.name == name]
        if not matches:
            raise KeyError(name)
        for passenger in matches:
            self.passengers = [p for p in self.passengers if p is not passenger]
            passenger.seat = seat
            self._insert(passenger)

    def describe(self) -> str:
        """Return the flight's information block, as printed when it is looked up."""
        lines = [
            "",
            "Flight found:",
            f"ID:         \t{self.flight_id}",
            f"Destination:\t{self.destination}",
            f"Seats:      \t{self.seats}",
            f"Time:       \t{self.time}",
        ]
        text = "\n".join(lines) + "\nPassengers: \t"
        if not self.passengers:
            return text + "[No passengers]\n"
        text += "".join(
            f"\n - {p.name}, {p.age}years, seat: {p.seat}" for p in self.passengers
        )
        return text + "\n"


class FlightRegistry:
    """An ordered collection of flight departures."""

    def __init__(self) -> None:
        self._flights: list[Flight] = []

    def add_flight(
        self, flight_id: str, destination: str, seats: int, time: int
    ) -> Flight:
        """Append a new flight to the end of the registry and return it."""
        flight = Flight(flight_id, destination, seats, time)
        self._flights.append(flight)
        return flight

    def get(self, flight_id: str) -> Flight | None:
        """Return the first flight with ``flight_id``, or None."""
        return next((f for f in self._flights if f.flight_id == flight_id), None)

    def flight_at(self, index: int) -> Flight | None:
        """Return the flight at ``index`` (first is 0), or None if there is none."""
        if 0 <= index < len(self._flights):
            return self._flights[index]
        return None

    def index_of_destination(self, destination: str) -> int | None:
        """Return the position of the first flight to ``destination``, or None."""
        return next(
            (i for i, f in enumerate(self._flights) if f.destination == destination),
            None,
        )

    def delete(self, flight: Flight) -> None:
        """Remove ``flight`` and its passengers; ValueError if it is not listed."""
        for index, candidate in enumerate(self._flights):
            if candidate is flight:
                del self._flights[index]
                return
        raise ValueError(f"flight {flight.flight_id} is not in the registry")

    def find_passenger(self, name: str) -> list[tuple[int, Flight]]:
        """Return (position, flight) for every flight with a passenger called ``name``."""
        return [
            (index, flight)
            for index, flight in enumerate(self._flights)
            if any(p.name == name for p in flight.passengers)
        ]

    def passengers_on_multiple_flights(self) -> list[str]:
        """Return each booking of a name already seen earlier, in list order."""
        seen: set[str] = set()
        repeats: list[str] = []
        for flight in self._flights:
            for passenger in flight.passengers:
                if passenger.name in seen:
                    repeats.append(passenger.name)
                else:
                    seen.add(passenger.name)
        return repeats

    def __iter__(self) -> Iterator[Flight]:
        return iter(self._flights)

    def __len__(self) -> int:
        return len(self._flights)