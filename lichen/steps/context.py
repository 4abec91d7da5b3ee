"""Execution context for installation steps, and the errors steps raise."""

from __future__ import annotations

import abc
import os
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Union

Arg = Union[str, "os.PathLike[str]"]


class StepError(Exception):
    """Raised when an installation step cannot complete."""


class UnknownFilesystemError(StepError):
    """Raised when a partition's filesystem cannot be determined."""

    def __init__(self) -> None:
        super().__init__("unknown filesystem")


class NoMountpointError(StepError):
    """Raised when a partition has no mountpoint assigned."""

    def __init__(self) -> None:
        super().__init__("no mountpoint given")


def _describe_status(returncode: int) -> str:
    if returncode < 0:
        return f"signal: {-returncode}"
    return f"exit status: {returncode}"


class CommandFailedError(StepError):
    """Raised when a command run by a step exits unsuccessfully."""

    def __init__(self, program: str, returncode: int) -> None:
        super().__init__(f"command `{program}` exited with {_describe_status(returncode)}")
        self.program = program
        self.returncode = returncode


class Context(abc.ABC):
    """Gives steps the installation root and a consistent way to run commands.

    Failing to start a command raises :class:`OSError`.
    """

    @property
    @abc.abstractmethod
    def root(self) -> Path:
        """The root directory of the installation."""

    @abc.abstractmethod
    def run_command(self, args: Sequence[Arg]) -> None:
        """Run a command, raising :class:`CommandFailedError` if it fails."""

    @abc.abstractmethod
    def run_command_captured(
        self, args: Sequence[Arg], input: str | None = None
    ) -> subprocess.CompletedProcess[bytes]:
        """Run a command with its output captured, optionally feeding text to stdin."""


class CommandContext(Context):
    """A context running commands directly; uncaptured output goes to the terminal."""

    def __init__(self, root: Arg) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def __repr__(self) -> str:
        return f"{type(self).__name__}(root={str(self._root)!r})"

    def run_command(self, args: Sequence[Arg]) -> None:
        argv = [os.fspath(a) for a in args]
        completed = subprocess.run(argv, check=False)
        if completed.returncode != 0:
            raise CommandFailedError(argv[0], completed.returncode)

    def run_command_captured(
        self, args: Sequence[Arg], input: str | None = None
    ) -> subprocess.CompletedProcess[bytes]:
        argv = [os.fspath(a) for a in args]
        data = input.encode("utf-8") if input is not None else b""
        return subprocess.run(
            argv,
            input=data,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )