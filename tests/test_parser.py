"""Tests for event parsing and workout selection."""

import json

import pytest

from zwift_today.exceptions import ParseError
from zwift_today.parser import parse_events, select_workout
from zwift_today.workout import SelectedWorkout, Workout


class TestParseEvents:
    """Tests for parse_events."""

    def test_parses_events_in_order(self):
        body = json.dumps([
            {"id": 1, "type": "Run", "name": "Easy jog"},
            {"id": 2, "type": "Ride", "name": "Hill repeats"},
        ])
        assert parse_events(body) == [
            Workout(id=1, type="Run", name="Easy jog"),
            Workout(id=2, type="Ride", name="Hill repeats"),
        ]

    def test_ignores_extra_fields(self):
        body = json.dumps([{
            "id": 7, "type": "VirtualRide", "name": "Sweet spot",
            "category": "WORKOUT", "start_date_local": "2024-05-01T00:00:00",
        }])
        assert parse_events(body) == [Workout(id=7, type="VirtualRide", name="Sweet spot")]

    def test_empty_list(self):
        assert parse_events("[]") == []

    def test_malformed_json(self):
        with pytest.raises(ParseError, match="Could not parse workouts json"):
            parse_events("[{not json")

    def test_not_an_array(self):
        with pytest.raises(ParseError, match="JSON array"):
            parse_events('{"id": 1}')

    def test_element_not_an_object(self):
        with pytest.raises(ParseError, match="Event 0 is not an object"):
            parse_events('[1, 2]')

    def test_missing_field(self):
        with pytest.raises(ParseError, match="missing 'name'"):
            parse_events('[{"id": 1, "type": "Ride"}]')

    @pytest.mark.parametrize("event", [
        {"id": "1", "type": "Ride", "name": "x"},
        {"id": True, "type": "Ride", "name": "x"},
        {"id": 1, "type": None, "name": "x"},
        {"id": 1, "type": "Ride", "name": 5},
    ])
    def test_wrong_field_type(self, event):
        with pytest.raises(ParseError, match="invalid"):
            parse_events(json.dumps([event]))


class TestSelectWorkout:
    """Tests for select_workout."""

    def test_first_ride_after_run(self):
        workouts = [
            Workout(id=1, type="Run", name="Easy jog"),
            Workout(id=2, type="Ride", name="Hill repeats"),
        ]
        assert select_workout(workouts) == SelectedWorkout(id=2, name="Hill repeats")

    def test_first_of_several_rides_wins(self):
        workouts = [
            Workout(id=1, type="Swim", name="Drills"),
            Workout(id=2, type="VirtualRide", name="Zwift race"),
            Workout(id=3, type="Ride", name="Endurance"),
            Workout(id=4, type="Run", name="Strides"),
        ]
        assert select_workout(workouts) == SelectedWorkout(id=2, name="Zwift race")

    def test_no_ride(self):
        assert select_workout([Workout(id=1, type="Run", name="Easy jog")]) is None

    def test_empty(self):
        assert select_workout([]) is None

    def test_match_is_case_sensitive(self):
        workouts = [
            Workout(id=1, type="ride", name="lower"),
            Workout(id=2, type="Virtual Ride", name="spaced"),
        ]
        assert select_workout(workouts) is None

    def test_custom_ride_types(self):
        workouts = [
            Workout(id=1, type="VirtualRide", name="Zwift"),
            Workout(id=2, type="Virtual Ride", name="Spaced"),
        ]
        assert select_workout(workouts, ride_types=["Virtual Ride"]) == SelectedWorkout(2, "Spaced")
