"""Common interfaces for installation steps and cleanup stages."""

from __future__ import annotations

import abc

from lichen.steps.context import Context


class Step(abc.ABC):
    """A single action performed while installing the system.

    Each step can describe itself for display and be executed against a
    :class:`~lichen.steps.context.Context`.
    """

    @abc.abstractmethod
    def title(self) -> str:
        """Return the short display title of the step."""

    @abc.abstractmethod
    def describe(self) -> str:
        """Describe what the step acts upon."""

    @abc.abstractmethod
    def execute(self, context: Context) -> None:
        """Perform the step, raising on failure."""

    def is_indeterminate(self) -> bool:
        """Whether an indeterminate progress spinner should be shown while this step runs."""
        return True


class Cleanup(abc.ABC):
    """A stage run after the installation steps, such as unmounting filesystems.

    Cleanups mirror :class:`Step` so that the user gets feedback while they run.
    """

    @abc.abstractmethod
    def title(self) -> str:
        """Return the short display title of the cleanup stage."""

    @abc.abstractmethod
    def describe(self) -> str:
        """Describe what the cleanup stage acts upon."""

    @abc.abstractmethod
    def execute(self, context: Context) -> None:
        """Perform the cleanup stage."""