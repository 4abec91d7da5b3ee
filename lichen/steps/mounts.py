"""Steps that format and mount partitions, and the cleanups that undo mounts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from lichen.partitions import Partition
from lichen.steps.base import Cleanup, Step
from lichen.steps.context import Context, UnknownFilesystemError

log = logging.getLogger(__name__)

_FORMATTERS = {
    "ext4": ("mkfs.ext4", "-F"),
    "xfs": ("mkfs.xfs", "-f"),
    "f2fs": ("mkfs.f2fs", "-f"),
}


@dataclass
class FormatPartition(Step):
    """Format a partition with the requested filesystem."""

    partition: Partition
    filesystem: str

    def title(self) -> str:
        return "Format partition"

    def describe(self) -> str:
        return f"{self.partition.path} as {self.filesystem}"

    def execute(self, context: Context) -> None:
        try:
            program, force = _FORMATTERS[self.filesystem.lower()]
        except KeyError:
            raise UnknownFilesystemError() from None
        args = [program, force, str(self.partition.path)]
        log.info("Formatting %s as %s", self.partition.path, self.filesystem)
        log.debug("Running: %s", args)
        context.run_command_captured(args)


@dataclass
class MountPartition(Step):
    """Mount a partition at the given mountpoint."""

    partition: Partition
    mountpoint: Path

    def __post_init__(self) -> None:
        self.mountpoint = Path(self.mountpoint)

    def title(self) -> str:
        return "Mount filesystem"

    def describe(self) -> str:
        return f"{self.partition.path} as {self.mountpoint}"

    def execute(self, context: Context) -> None:
        log.info("Mounting %s to %s", self.partition.path, self.mountpoint)
        self.mountpoint.mkdir(parents=True, exist_ok=True)
        context.run_command_captured(["mount", str(self.partition.path), str(self.mountpoint)])


@dataclass
class BindMount(Step):
    """Bind mount a source directory onto a destination directory."""

    source: Path
    dest: Path

    def __post_init__(self) -> None:
        self.source = Path(self.source)
        self.dest = Path(self.dest)

    def title(self) -> str:
        return "Bind mount filesystem"

    def describe(self) -> str:
        return f"{self.source} on {self.dest}"

    def execute(self, context: Context) -> None:
        log.info("Bind mounting %s to %s", self.source, self.dest)
        self.dest.mkdir(parents=True, exist_ok=True)
        context.run_command_captured(["mount", "--bind", str(self.source), str(self.dest)])


@dataclass
class Unmount(Cleanup):
    """Unmount a mountpoint."""

    mountpoint: Path

    def __post_init__(self) -> None:
        self.mountpoint = Path(self.mountpoint)

    def title(self) -> str:
        return "Unmount"

    def describe(self) -> str:
        return str(self.mountpoint)

    def execute(self, context: Context) -> None:
        log.info("Unmounting %s", self.mountpoint)
        context.run_command_captured(["umount", str(self.mountpoint)])


@dataclass
class SyncFS(Cleanup):
    """Flush filesystem buffers before unmounting; failures are ignored."""

    def title(self) -> str:
        return "Sync"

    def describe(self) -> str:
        return "filesystems"

    def execute(self, context: Context) -> None:
        log.info("Syncing filesystems")
        try:
            context.run_command_captured(["sync"])
        except OSError as exc:
            log.debug("sync failed: %s", exc)