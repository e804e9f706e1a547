from __future__ import annotations
import logging
import re
from pathlib import Path
from typing import List
from pydantic import ValidationError
from models import ProfileState
from storage import data_path, load_json, save_json

logger = logging.getLogger(__name__)

PROFILES_FILE = "profiles.json"
DEFAULT_PROFILE = "default"


def _sanitize_profile_name(name: str) -> str:
    safe = re.sub(r"[^A-Za-z0-9_-]+", "_", name.strip())
    safe = safe.strip("_") or DEFAULT_PROFILE
    return safe[:80]


def _profile_path(profile_name: str) -> Path:
    safe = _sanitize_profile_name(profile_name)
    return data_path(f"profile__{safe}.json")


def _save_profiles_list(profiles: List[str]) -> None:
    save_json(data_path(PROFILES_FILE), {"profiles": profiles})


def _stored_profiles() -> List[str]:
    data = load_json(data_path(PROFILES_FILE), {"profiles": []})
    return [p for p in data.get("profiles", []) if isinstance(p, str)]


def list_profiles() -> List[str]:
    profiles = _stored_profiles()

    # Pick up files on disk that are missing from the list
    discovered = []
    for path in sorted(data_path("").glob("profile__*.json")):
        if not any(_profile_path(p) == path for p in profiles):
            suffix = path.stem.replace("profile__", "", 1)
            discovered.append(suffix.replace("_", " ").strip() or DEFAULT_PROFILE)

    combined: List[str] = []
    for name in profiles + discovered:
        if name and name not in combined:
            combined.append(name)

    if not combined:
        combined = [DEFAULT_PROFILE]
        _save_profiles_list(combined)

    return combined


def save_profile(profile_name: str, state: ProfileState) -> None:
    save_json(_profile_path(profile_name), state.model_dump(mode="json"))
    profiles = _stored_profiles()
    if profile_name not in profiles:
        profiles.append(profile_name)
        _save_profiles_list(profiles)


def load_profile(profile_name: str) -> ProfileState:
    raw = load_json(_profile_path(profile_name), None)
    if not raw:
        state = ProfileState()
        save_profile(profile_name, state)
        return state

    try:
        state = ProfileState.model_validate(raw)
    except ValidationError as e:
        logger.warning("Stored profile %r is invalid, using defaults: %s", profile_name, e)
        state = ProfileState()
        save_profile(profile_name, state)
        return state

    profiles = _stored_profiles()
    if profile_name not in profiles:
        profiles.append(profile_name)
        _save_profiles_list(profiles)
    return state


def create_profile(profile_name: str) -> ProfileState:
    name = profile_name.strip()
    if not name:
        raise ValueError("Profile name cannot be empty.")

    profiles = list_profiles()
    if any(p.lower() == name.lower() for p in profiles):
        raise ValueError("Profile already exists.")

    if _profile_path(name).exists():
        raise ValueError("A profile with that name already exists on disk.")

    state = ProfileState()
    save_profile(name, state)
    logger.info("Created profile %r", name)
    return state


def delete_profile(profile_name: str) -> None:
    try:
        _profile_path(profile_name).unlink()
    except FileNotFoundError:
        pass

    profiles = [p for p in list_profiles() if p != profile_name]
    if not profiles:
        profiles = [DEFAULT_PROFILE]
        save_json(_profile_path(DEFAULT_PROFILE), ProfileState().model_dump(mode="json"))
    _save_profiles_list(profiles)
    logger.info("Deleted profile %r", profile_name)
