"""Parse intervals.icu event lists and pick today's ride."""

import json
import logging
from typing import Any, Iterable, List, Optional

from .config import RIDE_TYPES
from .exceptions import ParseError
from .workout import SelectedWorkout, Workout

logger = logging.getLogger(__name__)


def _field(item: dict, key: str, expected: type, index: int) -> Any:
    if key not in item:
        raise ParseError(f"Event {index} is missing '{key}'")
    value = item[key]
    # bool is an int subclass; an id of true/false is still a schema mismatch
    if not isinstance(value, expected) or isinstance(value, bool):
        raise ParseError(
            f"Event {index} has invalid '{key}': expected {expected.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


def parse_events(text: str) -> List[Workout]:
    """Parse the events endpoint body into Workout records.

    Args:
        text: Response body, a JSON array of event objects

    Returns:
        Workouts in the order the API returned them

    Raises:
        ParseError: If the body is not valid JSON or an event does not
            carry an integer 'id' and string 'type' and 'name'
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise ParseError(f"Could not parse workouts json: {e}") from e

    if not isinstance(data, list):
        raise ParseError(f"Expected a JSON array of events, got {type(data).__name__}")

    workouts = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ParseError(f"Event {index} is not an object")
        workouts.append(Workout(
            id=_field(item, 'id', int, index),
            type=_field(item, 'type', str, index),
            name=_field(item, 'name', str, index),
        ))

    logger.debug(f"Parsed {len(workouts)} events")
    return workouts


def select_workout(
    workouts: Iterable[Workout],
    ride_types: Iterable[str] = RIDE_TYPES
) -> Optional[SelectedWorkout]:
    """Return the first workout whose type is a cycling type.

    Args:
        workouts: Events in API order
        ride_types: Activity types counted as cycling

    Returns:
        The first match, or None when nothing is scheduled
    """
    ride_types = frozenset(ride_types)
    for workout in workouts:
        if workout.is_ride(ride_types):
            return SelectedWorkout(id=workout.id, name=workout.name)
        logger.debug(f"Skipping {workout.type} event {workout.id}: {workout.name}")
    return None
