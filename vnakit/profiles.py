"""Named calibration and trace profiles grouped into projects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

__all__ = [
    "Profile",
    "ProfileNotFoundError",
    "select_first_in_project",
    "select_profile",
    "clone_profile",
]


class ProfileNotFoundError(LookupError):
    """Raised when no profile has the requested project and name."""


@dataclass
class Profile:
    """A stored profile identified by its project and name."""

    project: str
    name: str
    selected: bool = False
    date_time: Optional[str] = None
    note: Optional[str] = None
    title: Optional[str] = None
    payload: Any = None


def select_first_in_project(profiles: Iterable[Profile], project: str) -> Optional[Profile]:
    """Select the first profile of ``project`` and deselect its others.

    Returns the selected profile, or ``None`` if the project has none.
    """
    first: Optional[Profile] = None
    for profile in profiles:
        if profile.project != project:
            continue
        if first is None:
            first = profile
            profile.selected = True
        else:
            profile.selected = False
    return first


def select_profile(profiles: Iterable[Profile], project: str, name: str) -> Profile:
    """Make the named profile the only selected one of its project."""
    profiles = list(profiles)
    for profile in profiles:
        if profile.project == project:
            profile.selected = False
    for profile in profiles:
        if profile.project == project and profile.name == name:
            profile.selected = True
            return profile
    raise ProfileNotFoundError(f"no profile {name!r} in project {project!r}")


def clone_profile(profile: Profile, new_project: str) -> Profile:
    """Copy a profile's description into another project.

    The copy is not selected and carries no measured data.
    """
    return Profile(
        project=new_project,
        name=profile.name,
        date_time=profile.date_time,
        note=profile.note,
        title=profile.title,
    )