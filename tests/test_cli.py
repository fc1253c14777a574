"""Tests for the command-line interface."""
import json

import pytest

from fitfinder.cli import build_parser, main


CATALOG = "tests/fixtures/test_exercises.json"
FOODS = "tests/fixtures/test_foods.json"


@pytest.fixture
def run(tmp_path):
    """Run the CLI against the fixtures with a throwaway store."""
    store = str(tmp_path / "store.json")

    def _run(*argv):
        return main(["--catalog", CATALOG, "--foods", FOODS, "--store", store, *argv])

    return _run


class TestParser:
    """Tests for argument parsing."""

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_routine_choices(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["routine", "--days", "7"])

    def test_defaults(self):
        args = build_parser().parse_args(["search"])
        assert args.catalog == "data/exercises"
        assert args.limit == 200
        assert args.output == "markdown"


class TestCatalogCommands:
    """Tests for search, suggest and favorite."""

    def test_search_json(self, run, capsys):
        assert run("search", "press", "--output", "json") == 0
        results = json.loads(capsys.readouterr().out)
        assert [ex["id"] for ex in results] == ["ex1", "ex8"]

    def test_search_filters(self, run, capsys):
        assert run("search", "--body-parts", "legs", "--equipment", "dumbbells", "--output", "json") == 0
        results = json.loads(capsys.readouterr().out)
        assert [ex["id"] for ex in results] == ["ex6"]

    def test_search_markdown(self, run, capsys):
        assert run("search", "plank") == 0
        captured = capsys.readouterr()
        assert "## Plank" in captured.out
        assert "Found 1 exercises" in captured.err

    def test_suggest(self, run, capsys):
        assert run("suggest", "ch") == 0
        assert capsys.readouterr().out.splitlines() == ["Bench Press", "chest", "bench"]

    def test_favorite_toggle(self, run, capsys):
        assert run("favorite", "ex3") == 0
        assert "added to favorites" in capsys.readouterr().err

        assert run("search", "--favorites", "--output", "json") == 0
        assert [ex["id"] for ex in json.loads(capsys.readouterr().out)] == ["ex3"]

        assert run("favorite", "ex3") == 0
        assert "removed from favorites" in capsys.readouterr().err

    def test_favorite_unknown(self, run, capsys):
        assert run("favorite", "nope") == 1
        assert "not found" in capsys.readouterr().err

    def test_missing_catalog(self, tmp_path, capsys):
        assert main(["--catalog", str(tmp_path / "missing"), "search"]) == 1
        assert "Exercise catalog not found" in capsys.readouterr().err


class TestRoutineCommands:
    """Tests for routine generation and export."""

    def test_routine_json_and_export(self, run, tmp_path, capsys):
        out_file = tmp_path / "routine.json"
        assert run("routine", "--goal", "strength", "--weeks", "4", "--days", "3",
                   "--seed", "1", "--output", "json", "--output-file", str(out_file)) == 0
        generated = json.loads(out_file.read_text())
        assert generated["goal"] == "strength"
        assert len(generated["weeks"]) == 4
        assert generated["daysPerWeek"] == 3

        export_file = tmp_path / "export.json"
        assert run("export", "routine", "--output-file", str(export_file)) == 0
        assert json.loads(export_file.read_text()) == generated

    def test_routine_markdown(self, run, capsys):
        assert run("routine", "--goal", "endurance", "--days", "5", "--seed", "2") == 0
        out = capsys.readouterr().out
        assert out.startswith("# Endurance Routine")
        assert "### Push" in out

    def test_routine_from_profile(self, run, capsys):
        assert run("routine", "--profile", "tests/fixtures/test_user_profile.yaml",
                   "--seed", "3", "--output", "json") == 0
        doc = json.loads(capsys.readouterr().out)
        assert doc["goal"] == "strength"
        assert doc["durationWeeks"] == 8
        assert doc["daysPerWeek"] == 5

    def test_export_routine_without_routine(self, run, capsys):
        assert run("export", "routine") == 1
        assert "No routine generated yet" in capsys.readouterr().err

    def test_export_routine_with_malformed_stored_routine(self, tmp_path, capsys):
        store_path = tmp_path / "store.json"
        stored = {"goal": "strength", "weeks": [["Push"]], "daysPerWeek": 1, "durationWeeks": 1}
        store_path.write_text(json.dumps({"fitfinder_last_routine": json.dumps(stored)}))

        assert main(["--store", str(store_path), "export", "routine"]) == 1
        assert "No routine generated yet" in capsys.readouterr().err


class TestMealCommands:
    """Tests for targets, meals and grocery."""

    def test_targets_from_flags(self, run, capsys):
        assert run("targets", "--age", "25", "--gender", "male", "--weight", "70",
                   "--height", "175", "--activity", "moderate", "--goal", "maintain") == 0
        out = capsys.readouterr().out
        assert "BMR: 1674 kcal" in out
        assert "TDEE: 2595 kcal" in out
        assert "Calorie target: 2595 kcal" in out

    def test_targets_from_profile(self, run, capsys):
        assert run("targets", "--profile", "tests/fixtures/test_user_profile.yaml") == 0
        out = capsys.readouterr().out
        assert "BMR: 1320 kcal" in out
        assert "TDEE: 1815 kcal" in out
        assert "Calorie target: 1488 kcal" in out

    def test_meals_json(self, run, capsys):
        assert run("meals", "--seed", "7", "--output", "json") == 0
        doc = json.loads(capsys.readouterr().out)
        assert doc["calorieTarget"] == 2595
        assert list(doc["weeklyPlan"].keys())[0] == "Monday"
        assert len(doc["weeklyPlan"]) == 7

    def test_meals_save_grocery_and_export(self, run, tmp_path, capsys):
        assert run("meals", "--seed", "7", "--save", "--name", "Cut Week", "--diet", "veg") == 0
        err = capsys.readouterr().err
        assert "Saved plan 'Cut Week'" in err
        plan_id = err.split("(")[-1].split(")")[0]

        assert run("grocery", plan_id, "--output", "json") == 0
        grocery = json.loads(capsys.readouterr().out)
        assert grocery
        assert all(item["qty"] >= 1 for item in grocery)

        export_file = tmp_path / "plan.json"
        assert run("export", "meal-plan", "--output-file", str(export_file)) == 0
        doc = json.loads(export_file.read_text())
        assert doc["name"] == "Cut Week"
        assert doc["inputs"]["diet"] == "veg"

    def test_grocery_unknown_plan(self, run, capsys):
        assert run("grocery", "123") == 1
        assert "No saved meal plan" in capsys.readouterr().err

    def test_missing_foods(self, tmp_path, capsys):
        assert main(["--foods", str(tmp_path / "none.json"), "meals"]) == 1
        assert "Foods file not found" in capsys.readouterr().err


class TestWorkoutCommands:
    """Tests for log, workouts and workout export."""

    def test_log_and_list(self, run, capsys):
        assert run("log", "Squat", "--set", "5x100", "--set", "5x", "--set", "x",
                   "--date", "2024-04-01", "--notes", "easy") == 0
        assert "Logged Squat (2 sets)" in capsys.readouterr().err

        assert run("workouts") == 0
        out = capsys.readouterr().out
        assert "## 2024-04-01: Squat" in out
        assert "1. 5 reps @ 100" in out
        assert "2. 5 reps @ 0" in out

    def test_log_blank_exercise(self, run, capsys):
        assert run("log", "  ") == 2
        assert "Please enter an exercise name." in capsys.readouterr().err

    def test_delete_workout(self, run, tmp_path, capsys):
        run("log", "Row", "--date", "2024-04-02")
        entry_id = capsys.readouterr().err.strip().split()[-1]

        assert run("workouts", "--delete", entry_id) == 0
        assert run("workouts", "--delete", entry_id) == 1

    def test_export_workouts(self, run, tmp_path):
        run("log", "Curl", "--set", "12x10")
        export_file = tmp_path / "workouts.json"
        assert run("export", "workouts", "--output-file", str(export_file)) == 0

        doc = json.loads(export_file.read_text())
        assert doc["workouts"][0]["exercise"] == "Curl"
        assert doc["workouts"][0]["sets"][0]["reps"] == 12
