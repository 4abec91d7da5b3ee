"""Workflow steps, their display metadata, and the registry that creates them."""

from __future__ import annotations

import abc
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Union

log = logging.getLogger(__name__)


class WorkflowStepError(Exception):
    """Raised when a workflow step cannot complete."""


class UserAbortedError(WorkflowStepError):
    """Raised when the user aborts the installation."""

    def __init__(self) -> None:
        super().__init__("User aborted installation")


@dataclass(frozen=True)
class StandardIcon:
    """A standard freedesktop icon, by name."""

    name: str


@dataclass(frozen=True)
class SymbolicIcon:
    """A symbolic freedesktop icon with a fallback icon name."""

    name: str
    fallback: str


@dataclass(frozen=True)
class CustomIcon:
    """A custom icon loaded from a path, shown at the given size."""

    path: str
    width: int
    height: int


Icon = Union[StandardIcon, SymbolicIcon, CustomIcon]


@dataclass
class DisplayInfo:
    """What the UI shows for a step.

    The strings may be localised, so they are unsuitable for comparison.
    """

    title: str
    description: str
    icon: Icon | None = None


class WorkflowStep(abc.ABC):
    """A distinct phase of the installation workflow the user must complete."""

    @abc.abstractmethod
    def info(self) -> DisplayInfo:
        """Return the display information for this step."""


@dataclass(frozen=True)
class StepInfo:
    """Registration metadata for a step, with the factory that creates it."""

    id: str
    author: str
    description: str
    create: Callable[[], WorkflowStep]


@dataclass
class RegionSettings:
    """Region specific installation settings."""

    language: str = "en_US.UTF-8"
    timezone: str = "UTC"


@dataclass
class Settings:
    """Installation settings chosen through the workflow."""

    region: RegionSettings = field(default_factory=RegionSettings)


class StepRegistry:
    """Maps step IDs to the factories that create them."""

    def __init__(self) -> None:
        self._steps: dict[str, StepInfo] = {}

    def register(
        self,
        id: str,
        author: str,
        description: str,
        create: Callable[[], WorkflowStep],
    ) -> StepInfo:
        """Register a step factory under ``id``, replacing any earlier one."""
        info = StepInfo(id=id, author=author, description=description, create=create)
        self._steps[id] = info
        log.debug("Registered step id=%s author=%s", id, author)
        return info

    def get(self, id: str) -> WorkflowStep | None:
        """Create a new instance of the step ``id``, or return None if it is unknown."""
        info = self._steps.get(id)
        if info is None:
            log.error('Step "%s" not found', id)
            return None
        log.debug("Creating step instance id=%s", id)
        return info.create()

    def __contains__(self, id: object) -> bool:
        return id in self._steps

    def __len__(self) -> int:
        return len(self._steps)


_default_registry = StepRegistry()


def default_registry() -> StepRegistry:
    """Return the registry used by :func:`register_step` and :func:`get_step`."""
    return _default_registry


def register_step(
    id: str,
    author: str,
    description: str,
    create: Callable[[], WorkflowStep],
) -> StepInfo:
    """Register a step in the default registry."""
    return _default_registry.register(id, author, description, create)


def get_step(id: str) -> WorkflowStep | None:
    """Create a step from the default registry, or return None if it is unknown."""
    return _default_registry.get(id)