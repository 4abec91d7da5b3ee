"""Navigation through the ordered steps of the installation workflow."""

from __future__ import annotations

from collections.abc import Iterable

from lichen.workflow.registry import StepRegistry, WorkflowStep, default_registry


class NavigationError(Exception):
    """Raised when the workflow cannot move to the requested step."""


class NoNextStepError(NavigationError):
    """Raised when there is no later available step."""

    def __init__(self) -> None:
        super().__init__("No next step available")


class NoPreviousStepError(NavigationError):
    """Raised when there is no earlier available step."""

    def __init__(self) -> None:
        super().__init__("No previous step available")


class StepNotFoundError(NavigationError):
    """Raised when a step ID is not part of the workflow."""

    def __init__(self, step_id: str) -> None:
        super().__init__(f"Step {step_id} not found")
        self.step_id = step_id


class StepUnavailableError(NavigationError):
    """Raised when a step exists but has not been made available."""

    def __init__(self, step_id: str) -> None:
        super().__init__(f"Step {step_id} not available")
        self.step_id = step_id


class StepLoadError(Exception):
    """Raised when a step cannot be created from the registry."""

    def __init__(self, step_id: str) -> None:
        super().__init__(f"Failed to load step plugin: {step_id}")
        self.step_id = step_id


class Workflow:
    """Holds the installation steps, which of them are available, and the active one.

    Steps are ordered by ID. Initially only the first step given is available.
    """

    def __init__(
        self,
        step_ids: Iterable[str] = (),
        active_step: str | None = None,
        registry: StepRegistry | None = None,
    ) -> None:
        registry = default_registry() if registry is None else registry
        ids = list(step_ids)
        loaded: dict[str, WorkflowStep] = {}
        for step_id in ids:
            step = registry.get(step_id)
            if step is None:
                raise StepLoadError(step_id)
            loaded[step_id] = step
        self._steps = {step_id: loaded[step_id] for step_id in sorted(loaded)}
        self._active = active_step
        self._available: set[str] = {ids[0]} if ids else set()

    def active_step_id(self) -> str | None:
        """Return the ID of the active step."""
        return self._active

    def active_step(self) -> WorkflowStep | None:
        """Return the active step, if it is part of the workflow."""
        if self._active is None:
            return None
        return self._steps.get(self._active)

    def set_active_step(self, step_id: str) -> None:
        """Make ``step_id`` active without any checks."""
        self._active = step_id

    def step_ids(self) -> list[str]:
        """Return all step IDs in order."""
        return list(self._steps)

    def step(self, step_id: str) -> WorkflowStep | None:
        """Return the step with the given ID, if any."""
        return self._steps.get(step_id)

    def make_step_available(self, step_id: str) -> None:
        """Allow navigation to ``step_id``."""
        if step_id not in self._steps:
            raise StepNotFoundError(step_id)
        self._available.add(step_id)

    def make_step_unavailable(self, step_id: str) -> None:
        """Disallow navigation to ``step_id``."""
        self._available.discard(step_id)

    def is_step_available(self, step_id: str) -> bool:
        """Whether navigation to ``step_id`` is allowed."""
        return step_id in self._available

    def available_steps(self) -> list[str]:
        """Return the IDs of all available steps, sorted."""
        return sorted(self._available)

    def goto_step(self, step_id: str) -> None:
        """Make ``step_id`` active if it exists and is available."""
        if step_id not in self._steps:
            raise StepNotFoundError(step_id)
        if not self.is_step_available(step_id):
            raise StepUnavailableError(step_id)
        self.set_active_step(step_id)

    def next_step(self) -> None:
        """Move to the next available step."""
        target = self._next_available_step_id()
        if target is None:
            raise NoNextStepError()
        self._active = target

    def previous_step(self) -> None:
        """Move to the previous available step."""
        target = self._previous_available_step_id()
        if target is None:
            raise NoPreviousStepError()
        self._active = target

    def has_next(self) -> bool:
        """Whether a later step is available."""
        return self._next_available_step_id() is not None

    def has_previous(self) -> bool:
        """Whether an earlier step is available."""
        return self._previous_available_step_id() is not None

    def _active_index(self) -> int | None:
        ids = self.step_ids()
        if self._active is None or self._active not in ids:
            return None
        return ids.index(self._active)

    def _next_available_step_id(self) -> str | None:
        index = self._active_index()
        if index is None:
            return None
        later = self.step_ids()[index + 1:]
        return next((s for s in later if self.is_step_available(s)), None)

    def _previous_available_step_id(self) -> str | None:
        index = self._active_index()
        if index is None:
            return None
        earlier = self.step_ids()[:index]
        return next((s for s in reversed(earlier) if self.is_step_available(s)), None)