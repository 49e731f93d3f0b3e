"""Resolve which live activities and activities one invocation targets.

The resolver runs exactly once per invocation, after project discovery and
before any command is validated. Its result is a frozen ``Selection`` that
every command reads but never mutates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Mapping, Set, Tuple

from .entities import LiveActivity, ProjectFolder


@dataclass(frozen=True)
class SelectionRequest:
    """Selection flags exactly as the operator supplied them."""

    live_activities: Tuple[str, ...] = ()
    """References by id, UUID or name."""
    activities: Tuple[str, ...] = ()
    """Activity identifying names."""
    select_all: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "live_activities", _clean_refs(self.live_activities))
        object.__setattr__(self, "activities", _clean_refs(self.activities))

    @property
    def has_explicit_references(self) -> bool:
        return bool(self.live_activities or self.activities)


@dataclass(frozen=True)
class Selection:
    """Resolved working set for the current invocation."""

    live_activities: Tuple[LiveActivity, ...] = ()
    """Selected instances in snapshot order, without duplicates."""
    known_activities: Mapping[str, FrozenSet[str]] = field(default_factory=dict)
    """Activity name -> ids of every live activity implementing it in the fleet."""
    unmatched: Tuple[str, ...] = ()
    """Explicit references that matched nothing in the snapshot."""
    inferred: bool = False
    """True when the live activities came from discovered project folders."""

    @property
    def activities(self) -> Tuple[str, ...]:
        """Activity names implemented by the selected live activities."""
        seen: List[str] = []
        for live in self.live_activities:
            if live.activity not in seen:
                seen.append(live.activity)
        return tuple(seen)

    @property
    def live_activity_ids(self) -> Tuple[str, ...]:
        return tuple(live.id for live in self.live_activities)


def index_activities(snapshot: Iterable[LiveActivity]) -> Dict[str, FrozenSet[str]]:
    """Group live activity ids by the activity they implement."""
    index: Dict[str, Set[str]] = {}
    for live in snapshot:
        index.setdefault(live.activity, set()).add(live.id)
    return {name: frozenset(ids) for name, ids in index.items()}


def resolve_selection(
    snapshot: Iterable[LiveActivity],
    request: SelectionRequest,
    folders: Iterable[ProjectFolder] = (),
) -> Selection:
    """Compute the selection for ``request`` against a fleet ``snapshot``.

    ``--all`` selects the whole snapshot regardless of references. Otherwise
    the union of everything matching a live-activity or activity reference is
    taken. Only when no explicit reference was given at all are the activity
    names of discovered project folders used to infer targets.

    References matching nothing are dropped here and reported through
    ``Selection.unmatched``; validation decides whether that is fatal.
    """
    fleet = list(snapshot)
    known = index_activities(fleet)

    if request.select_all:
        return Selection(live_activities=tuple(fleet), known_activities=known)

    chosen: Dict[str, LiveActivity] = {}
    unmatched: List[str] = []

    for ref in request.live_activities:
        hits = [live for live in fleet if live.matches(ref)]
        if not hits:
            unmatched.append(ref)
        for live in hits:
            chosen.setdefault(live.id, live)

    for name in request.activities:
        hits = [live for live in fleet if live.activity == name]
        if not hits:
            unmatched.append(name)
        for live in hits:
            chosen.setdefault(live.id, live)

    inferred = False
    if not request.has_explicit_references:
        folder_activities = {folder.activity for folder in folders}
        for live in fleet:
            if live.activity in folder_activities:
                chosen.setdefault(live.id, live)
                inferred = True

    ordered = tuple(live for live in fleet if live.id in chosen)
    return Selection(
        live_activities=ordered,
        known_activities=known,
        unmatched=tuple(unmatched),
        inferred=inferred,
    )


def _clean_refs(values: Iterable[str]) -> Tuple[str, ...]:
    cleaned: List[str] = []
    for value in values or ():
        text = str(value or "").strip()
        if text and text not in cleaned:
            cleaned.append(text)
    return tuple(cleaned)


__all__ = ["Selection", "SelectionRequest", "index_activities", "resolve_selection"]
