from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from ..errors import MemberNotFoundError
from ..models.project import STORAGE_KEY, ProjectState
from ..models.results import ProjectEstimate
from .calculator import estimate_project


logger = logging.getLogger(__name__)


class ProjectStore:
    """Single owner of the editable project.

    Each mutation swaps in a new validated ``ProjectState``, recomputes the full
    estimate and persists, all under one lock. Readers only ever see a state and
    estimate produced by the same pass.
    """

    def __init__(self, path: Optional[Path] = None, storage_key: str = STORAGE_KEY) -> None:
        self.path = Path(path) if path is not None else None
        self.storage_key = storage_key
        self._lock = threading.Lock()
        self._state = self._load()
        self._estimate = estimate_project(self._state, self._state.members)

    @property
    def state(self) -> ProjectState:
        return self._state

    def snapshot(self) -> tuple[ProjectState, ProjectEstimate]:
        with self._lock:
            return self._state, self._estimate

    def estimate(self) -> ProjectEstimate:
        return self.snapshot()[1]

    def update_config(self, **changes: Any) -> ProjectEstimate:
        changes.pop("members", None)
        with self._lock:
            return self._commit(self._merge(self._state, changes))

    def add_member(self, **overrides: Any) -> ProjectEstimate:
        with self._lock:
            member = self._state.new_member(**overrides)
            members = list(self._state.members) + [member]
            logger.info("Adding member %r", member.name)
            return self._commit(self._state.model_copy(update={"members": members}))

    def update_member(self, index: int, **changes: Any) -> ProjectEstimate:
        with self._lock:
            members = list(self._state.members)
            self._check_index(index, len(members))
            members[index] = self._merge(members[index], changes)
            return self._commit(self._state.model_copy(update={"members": members}))

    def remove_member(self, index: int) -> ProjectEstimate:
        with self._lock:
            members = list(self._state.members)
            self._check_index(index, len(members))
            removed = members.pop(index)
            logger.info("Removing member %r", removed.name)
            return self._commit(self._state.model_copy(update={"members": members}))

    def replace(self, state: ProjectState) -> ProjectEstimate:
        with self._lock:
            return self._commit(state)

    def reset(self) -> ProjectEstimate:
        logger.info("Resetting project to defaults")
        return self.replace(ProjectState())

    def _merge(self, model: Any, changes: dict[str, Any]) -> Any:
        # Revalidate so edits go through the same coercion as loaded data.
        values = model.model_dump()
        values.update(changes)
        return type(model).model_validate(values)

    def _check_index(self, index: int, size: int) -> None:
        if not 0 <= index < size:
            raise MemberNotFoundError(index, size)

    def _commit(self, state: ProjectState) -> ProjectEstimate:
        estimate = estimate_project(state, state.members)
        # Persist before swapping so a failed save leaves the previous state in place.
        self._save(state)
        self._state = state
        self._estimate = estimate
        return estimate

    def _load(self) -> ProjectState:
        if self.path is None or not self.path.exists():
            return ProjectState()
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
            return ProjectState.model_validate(payload[self.storage_key])
        except (OSError, ValueError, KeyError, TypeError, ValidationError) as exc:
            logger.warning("Could not load saved project from %s (%s); starting from defaults", self.path, exc)
            return ProjectState()

    def _save(self, state: ProjectState) -> None:
        if self.path is None:
            return
        payload = {self.storage_key: state.model_dump(mode="json", by_alias=True)}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError:
            logger.exception("Could not save project to %s", self.path)
            raise
