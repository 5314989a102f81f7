"""Workout data structures for zwift_today."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Workout:
    """One scheduled event from the intervals.icu calendar."""
    id: int
    type: str  # activity category, e.g. 'Ride', 'VirtualRide', 'Run'
    name: str

    def is_ride(self, ride_types) -> bool:
        """True if this event's type exactly matches one of ride_types."""
        return self.type in ride_types


@dataclass(frozen=True)
class SelectedWorkout:
    """The workout chosen for download."""
    id: int
    name: str
