import json

from typer.testing import CliRunner

from timelogger.cli import app
from timelogger.store import load_store


def test_full_session(invoke, store_path):
    result = invoke("new", "acme")
    assert result.exit_code == 0, result.output
    assert "Added project acme" in result.output

    store = load_store(store_path)
    assert list(store.projects) == ["acme"]
    assert store.active_project == "acme"

    result = invoke("on")
    assert result.exit_code == 0, result.output
    assert "Now tracking time for project acme." in result.output

    result = invoke("off", "wrote", "design", "doc")
    assert result.exit_code == 0, result.output
    assert "for project acme." in result.output

    result = invoke("time")
    assert result.exit_code == 0, result.output
    assert "Logged times for acme, totaling" in result.output
    assert "- wrote design doc" in result.output

    entries = load_store(store_path).projects["acme"].entries
    assert [e.description for e in entries] == ["wrote design doc"]


def test_no_arguments_shows_the_log(invoke):
    invoke("new", "acme")

    result = invoke()

    assert result.exit_code == 0, result.output
    assert "No logged times for project acme." in result.output


def test_errors_are_reported_and_the_store_is_still_saved(invoke, store_path):
    result = invoke()

    assert result.exit_code == 1
    assert "You do not currently have a project selected." in result.output
    assert json.loads(store_path.read_text()) == {"projects": {}, "active_project": None}


def test_second_on_reports_already_started(invoke, store_path):
    invoke("new", "acme")
    invoke("on")
    started = load_store(store_path).projects["acme"].running_since

    result = invoke("on")

    assert result.exit_code == 1
    assert "You are already tracking your time." in result.output
    assert load_store(store_path).projects["acme"].running_since == started


def test_off_without_description(invoke):
    invoke("new", "acme")
    invoke("on")

    result = invoke("off")

    assert result.exit_code == 1
    assert "Cannot log entry with no description." in result.output


def test_bare_name_selects_a_project(invoke, store_path):
    invoke("new", "acme")
    invoke("new", "side")

    result = invoke("acme")

    assert result.exit_code == 0, result.output
    assert "Selected project acme" in result.output
    assert load_store(store_path).active_project == "acme"


def test_bare_unknown_name_does_not_create_it(invoke, store_path):
    result = invoke("nope")

    assert result.exit_code == 1
    assert "There is no project named nope" in result.output
    assert load_store(store_path).projects == {}


def test_edit_and_undo(invoke, store_path):
    invoke("new", "acme")
    invoke("on")
    invoke("off", "first")

    result = invoke("edit", "1h", "30m")
    assert result.exit_code == 0, result.output
    assert "to 1h 30m" in result.output

    result = invoke("edit", "soon")
    assert result.exit_code == 1
    assert "Could not parse duration with invalid format." in result.output

    result = invoke("list")
    assert "acme - 1h 30m" in result.output

    result = invoke("undo")
    assert result.exit_code == 0, result.output
    assert "Removed the last entry with duration 1h 30m: first" in result.output

    result = invoke("undo")
    assert result.exit_code == 1
    assert "You have not logged any time for this project." in result.output


def test_undo_cancels_a_running_timer(invoke, store_path):
    invoke("new", "acme")
    invoke("on")

    result = invoke("undo")

    assert result.exit_code == 0, result.output
    assert "of unlogged time." in result.output
    project = load_store(store_path).projects["acme"]
    assert project.running_since is None
    assert project.entries == []


def test_list_and_delete(invoke, store_path):
    result = invoke("list")
    assert "No projects found." in result.output

    invoke("new", "acme")
    result = invoke("list")
    assert "Project list:" in result.output
    assert "acme - 0s" in result.output

    result = invoke("delete", "acme")
    assert result.exit_code == 0, result.output
    assert "Removed project acme" in result.output
    assert load_store(store_path).active_project is None

    result = invoke("delete", "acme")
    assert result.exit_code == 1
    assert "There is no project named acme" in result.output


def test_new_existing_project(invoke):
    invoke("new", "acme")

    result = invoke("new", "acme")

    assert result.exit_code == 1
    assert "project acme already exists" in result.output


def test_corrupt_store_is_left_alone(invoke, store_path):
    store_path.write_text("{broken")

    result = invoke("list")

    assert result.exit_code == 1
    assert "is not a valid time log file." in result.output
    assert store_path.read_text() == "{broken"


def test_store_location_from_environment(tmp_path):
    path = tmp_path / "elsewhere.json"
    runner = CliRunner()

    result = runner.invoke(app, ["new", "acme"], env={"TIMELOGGER_FILE": str(path)})

    assert result.exit_code == 0, result.output
    assert list(load_store(path).projects) == ["acme"]


def test_undecodable_store_is_reported(invoke, store_path):
    store_path.write_bytes(b"\xff\xfe{}")

    result = invoke("list")

    assert result.exit_code == 1
    assert "is not a valid time log file." in result.output
    assert store_path.read_bytes() == b"\xff\xfe{}"


def test_names_starting_with_a_dash(invoke, store_path):
    invoke("new", "--", "-x")
    invoke("new", "other")

    result = invoke("--", "-x")

    assert result.exit_code == 0, result.output
    assert "Selected project -x" in result.output
    assert load_store(store_path).active_project == "-x"

    invoke("other")
    result = invoke("select", "--", "-x")
    assert result.exit_code == 0, result.output
    assert load_store(store_path).active_project == "-x"
