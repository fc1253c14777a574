"""Tests for the routine generator."""
import random

import pytest

from fitfinder.data_layer.exercise_db import ExerciseDB
from fitfinder.data_layer.serialization import routine_to_dict
from fitfinder.planning.routine_generator import (
    GOAL_PRESETS,
    RoutineGenerator,
    equipment_matches,
    exercise_count_for_day,
    find_exercises_for_targets,
    parse_equipment,
    preset_for_goal,
    split_for_days,
)
from fitfinder.storage.memory_store import InMemoryStore
from fitfinder.storage.repositories import RoutineRepository


@pytest.fixture
def catalog():
    return ExerciseDB("tests/fixtures/test_exercises.json").get_all_exercises()


@pytest.fixture
def generator(catalog):
    return RoutineGenerator(catalog)


class TestHelpers:
    """Tests for split, preset and equipment helpers."""

    def test_splits(self):
        assert split_for_days(3) == ["Full Body"] * 3
        assert split_for_days(4) == ["Upper", "Lower", "Upper", "Lower"]
        assert split_for_days(5) == ["Push", "Pull", "Legs", "Push", "Pull"]
        assert split_for_days(6) == ["Push", "Pull", "Legs", "Push", "Pull", "Legs"]

    def test_unsupported_day_count(self):
        assert split_for_days(2) == ["Day 1", "Day 2"]
        assert split_for_days(0) == []

    def test_unknown_goal_uses_default_preset(self):
        preset = preset_for_goal("yoga")
        assert preset.sets == (3,)
        assert preset.reps == "8-12"
        assert preset.rest_seconds == 60
        assert preset.exercises_per_day == 5

    def test_full_body_minimum(self):
        """Test strength (4 per day) is raised to 5 on full-body days."""
        assert exercise_count_for_day("Push", "strength") == 4
        assert exercise_count_for_day("Full Body", "strength") == 5
        assert exercise_count_for_day("Full Body", "fat-loss") == 6

    def test_parse_equipment(self):
        assert parse_equipment(" Dumbbells, Cable ,") == ["dumbbells", "cable"]
        assert parse_equipment("") == []
        assert parse_equipment(None) == []

    def test_equipment_matches_both_directions(self):
        assert equipment_matches(["dumbbells"], ["dumbbell"])
        assert equipment_matches(["cable"], ["cable machine"])
        assert not equipment_matches(["barbell"], ["kettlebell"])

    def test_empty_user_equipment_matches_anything(self):
        assert equipment_matches(["machine"], [])
        assert equipment_matches([], [])

    def test_find_exercises_prefers_equipment(self, catalog):
        pool = find_exercises_for_targets(catalog, ["back", "biceps"], ["dumbbell"])
        assert [ex.id for ex in pool] == ["ex3"]

    def test_find_exercises_falls_back_without_equipment_match(self, catalog):
        """Test body-part matches are kept when no equipment fits."""
        pool = find_exercises_for_targets(catalog, ["chest", "shoulders", "triceps"], ["kettlebell"])
        assert [ex.id for ex in pool] == ["ex1", "ex2", "ex8"]

    def test_find_exercises_unknown_target(self, catalog):
        assert find_exercises_for_targets(catalog, ["neck"]) == []


class TestRoutineGenerator:
    """Tests for RoutineGenerator.generate."""

    @pytest.mark.parametrize("days", [3, 4, 5, 6])
    @pytest.mark.parametrize("weeks", [4, 8, 12])
    def test_shape(self, generator, weeks, days):
        """Test the routine has the requested weeks and days."""
        routine = generator.generate("muscle-gain", weeks, days, seed=7)

        assert len(routine.weeks) == weeks
        assert all(len(week) == days for week in routine.weeks)
        assert routine.duration_weeks == weeks
        assert routine.days_per_week == days
        assert all(
            [day.name for day in week] == split_for_days(days) for week in routine.weeks
        )

    @pytest.mark.parametrize("goal", ["muscle-gain", "strength", "endurance", "fat-loss"])
    def test_days_have_unique_exercises_within_limits(self, generator, catalog, goal):
        routine = generator.generate(goal, 4, 5, seed=3)
        catalog_ids = {ex.id for ex in catalog}

        for week in routine.weeks:
            for day in week:
                ids = [ex.id for ex in day.exercises]
                assert len(ids) == len(set(ids))
                assert len(ids) <= exercise_count_for_day(day.name, goal)
                assert set(ids) <= catalog_ids

    def test_day_size_limited_by_pool(self, generator):
        """Test Push days (3 matching exercises) get all 3, no repeats."""
        routine = generator.generate("fat-loss", 4, 6, seed=11)
        for week in routine.weeks:
            push = week[0]
            assert push.name == "Push"
            assert sorted(ex.id for ex in push.exercises) == ["ex1", "ex2", "ex8"]

    def test_full_body_day_count(self, generator):
        """Test strength full-body days reach the five-exercise floor."""
        routine = generator.generate("strength", 4, 3, seed=5)
        for week in routine.weeks:
            for day in week:
                assert len(day.exercises) == 5

    def test_preset_applied(self, generator):
        routine = generator.generate("strength", 4, 4, seed=1)
        preset = GOAL_PRESETS["strength"]

        for week in routine.weeks:
            for day in week:
                for ex in day.exercises:
                    assert ex.sets in preset.sets
                    assert ex.reps == "3-6"
                    assert ex.rest_seconds == 150

    def test_sets_drawn_from_listed_values(self, generator):
        """Test strength sets are 3 or 5, never a value in between."""
        routine = generator.generate("strength", 12, 6, seed=1)
        sets = {ex.sets for week in routine.weeks for day in week for ex in day.exercises}
        assert sets == {3, 5}

    def test_fixed_sets_for_fat_loss(self, generator):
        routine = generator.generate("fat-loss", 4, 4, seed=2)
        sets = {ex.sets for week in routine.weeks for day in week for ex in day.exercises}
        assert sets == {3}

    def test_same_seed_same_routine(self, generator):
        """Test seeded generation is reproducible."""
        first = generator.generate("muscle-gain", 8, 4, seed=42)
        second = generator.generate("muscle-gain", 8, 4, seed=42)

        first_doc = routine_to_dict(first)
        second_doc = routine_to_dict(second)
        assert first_doc["weeks"] == second_doc["weeks"]

    def test_weeks_drawn_independently(self, catalog):
        """Test at least one week differs from week one across a long routine."""
        generator = RoutineGenerator(catalog)
        routine = generator.generate("muscle-gain", 12, 4, seed=9)
        first = [[ex.id for ex in day.exercises] for day in routine.weeks[0]]
        others = [[[ex.id for ex in day.exercises] for day in week] for week in routine.weeks[1:]]
        assert any(week != first for week in others)

    def test_equipment_filter(self, generator):
        routine = generator.generate("muscle-gain", 4, 5, equipment=["dumbbell"], seed=4)
        pull = routine.weeks[0][1]
        assert pull.name == "Pull"
        assert [ex.id for ex in pull.exercises] == ["ex3"]

    def test_unknown_day_targets_give_empty_days(self, generator):
        """Test unsupported day counts produce empty days instead of errors."""
        routine = generator.generate("muscle-gain", 4, 2, seed=1)

        assert len(routine.weeks) == 4
        assert all(day.exercises == [] for week in routine.weeks for day in week)

    def test_empty_catalog(self):
        routine = RoutineGenerator([]).generate("endurance", 4, 3, seed=1)
        assert all(day.exercises == [] for week in routine.weeks for day in week)

    def test_unknown_goal(self, generator):
        routine = generator.generate("yoga", 4, 3, seed=1)
        assert routine.goal == "yoga"
        for ex in routine.weeks[0][0].exercises:
            assert ex.sets == 3
            assert ex.reps == "8-12"

    def test_build_day_with_explicit_count(self, generator):
        day = generator.build_day("Legs", "muscle-gain", [], random.Random(0), count=2)
        assert len(day) == 2
        assert {ex.id for ex in day} <= {"ex5", "ex6", "ex7", "ex12"}

    def test_full_body_floor_applies_to_explicit_count(self, generator):
        """Test an explicit count below five is raised on full-body days."""
        day = generator.build_day("Full Body", "strength", [], random.Random(0), count=2)
        assert len(day) == 5

    def test_saves_last_routine(self, catalog):
        """Test the generated routine replaces the stored last routine."""
        repository = RoutineRepository(InMemoryStore())
        generator = RoutineGenerator(catalog, routine_repository=repository)

        generator.generate("endurance", 4, 3, seed=1)
        latest = generator.generate("strength", 8, 5, seed=2)
        stored = repository.load_last()

        assert stored is not None
        assert stored.goal == "strength"
        assert routine_to_dict(stored) == routine_to_dict(latest)
