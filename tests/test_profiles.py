"""Tests for profiles and storage."""
import json
from datetime import date, time
from pathlib import Path

import pytest

from exams import new_exam
from learning_style import score_assessment
from models import Preferences, ProfileState, Weekday
from profiles import create_profile, delete_profile, list_profiles, load_profile, save_profile
from storage import get_data_dir, load_json, save_json


@pytest.fixture(autouse=True)
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("STUDY_CALENDAR_DATA_DIR", str(tmp_path))
    return tmp_path


def test_load_json_missing_returns_default(data_dir: Path) -> None:
    assert load_json(data_dir / "nope.json", {"x": 1}) == {"x": 1}
    assert load_json(data_dir / "nope.json") == {}


def test_load_json_resets_invalid_file(data_dir: Path) -> None:
    path = data_dir / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_json(path, {"profiles": []}) == {"profiles": []}
    assert json.loads(path.read_text(encoding="utf-8")) == {"profiles": []}
    assert path.with_suffix(".json.bak").read_text(encoding="utf-8") == "{not json"


def test_save_json_leaves_no_temp_file(data_dir: Path) -> None:
    path = data_dir / "nested" / "out.json"
    save_json(path, {"a": [1, 2]})
    assert load_json(path) == {"a": [1, 2]}
    assert not path.with_suffix(".json.tmp").exists()


def test_data_dir_follows_environment(data_dir: Path) -> None:
    assert get_data_dir() == data_dir


def test_fresh_directory_has_default_profile() -> None:
    assert list_profiles() == ["default"]
    assert load_profile("default") == ProfileState()


def test_saved_profile_round_trip() -> None:
    prefs = Preferences(subjects=["Chemistry"])
    prefs.add_unavailable_date(date(2024, 4, 2))
    prefs.toggle_weekday_availability(Weekday.FRIDAY, False)
    prefs.toggle_weekday_availability(Weekday.SUNDAY, True)
    prefs.set_availability(Weekday.SUNDAY, time(13), time(15))
    state = ProfileState(
        preferences=prefs,
        exams=[new_exam("Chemistry", date(2024, 6, 3), "Paper 2", "high")],
        learning_style=score_assessment(["visual"] * 5, date(2024, 1, 1)),
    )
    save_profile("default", state)
    assert load_profile("default") == state


def test_invalid_stored_profile_falls_back_to_defaults(data_dir: Path) -> None:
    (data_dir / "profile__default.json").write_text(
        json.dumps({"preferences": {"study_duration": "lots"}}), encoding="utf-8"
    )
    assert load_profile("default") == ProfileState()


def test_create_and_delete_profiles() -> None:
    assert create_profile("Semester A") == ProfileState()
    assert list_profiles() == ["default", "Semester A"]

    with pytest.raises(ValueError):
        create_profile("semester a")
    with pytest.raises(ValueError):
        create_profile("   ")

    delete_profile("Semester A")
    assert list_profiles() == ["default"]


def test_deleting_last_profile_recreates_default(data_dir: Path) -> None:
    save_profile("default", ProfileState(preferences=Preferences(subjects=["Art"])))
    delete_profile("default")
    assert list_profiles() == ["default"]
    assert load_profile("default") == ProfileState()
