"""Compiles an installation model into ordered steps and cleanups."""

from __future__ import annotations

import os
from pathlib import Path

from lichen.model import Model
from lichen.steps.base import Cleanup, Step
from lichen.steps.context import Context
from lichen.steps.mounts import BindMount, FormatPartition, MountPartition, SyncFS, Unmount
from lichen.steps.packaging import AddRepo, InstallPackages
from lichen.steps.postinstall import (
    CreateAccount,
    EmitFstab,
    FstabComment,
    FstabDevice,
    SetLocale,
    SetMachineID,
    SetPassword,
    SetTimezone,
)

VOLATILE_REPO_URI = "https://dev.serpentos.com/volatile/x86_64/stone.index"
VOLATILE_REPO_NAME = "unstable"

_VFS_MOUNTS = (
    ("/dev", "dev"),
    ("/dev/shm", "dev/shm"),
    ("/dev/pts", "dev/pts"),
    ("/proc", "proc"),
    ("/sys", "sys"),
)


class EngineError(Exception):
    """Raised when a model cannot be turned into installation steps."""


class MissingPartitionError(EngineError):
    """Raised when a mandatory partition is absent from the model."""

    def __init__(self, mountpoint: str) -> None:
        super().__init__(f"missing mandatory partition: {mountpoint}")
        self.mountpoint = mountpoint


def create_vfs_mounts(prefix: str | os.PathLike[str]) -> tuple[list[Step], list[Cleanup]]:
    """Return bind mounts of the virtual filesystems under ``prefix`` and their unmounts."""
    base = Path(prefix)
    mounts: list[Step] = [BindMount(Path(source), base / dest) for source, dest in _VFS_MOUNTS]
    unmounts: list[Cleanup] = [Unmount(base / dest) for _, dest in _VFS_MOUNTS]
    return mounts, unmounts


def compile_to_steps(model: Model, context: Context) -> tuple[list[Cleanup], list[Step]]:
    """Build the cleanups and steps that install ``model`` into ``context.root``.

    Cleanups are returned in the order they must run. A root partition
    without a known filesystem raises a step error.
    """
    root = context.root
    steps: list[Step] = []
    cleanups: list[Cleanup] = []

    root_partition = next((p for p in model.partitions if p.mountpoint == "/"), None)
    if root_partition is None:
        raise MissingPartitionError("/")

    steps.append(FormatPartition(root_partition.partition, model.rootfs_type))
    steps.append(MountPartition(root_partition.partition, root))
    cleanups.append(Unmount(root))

    steps.append(MountPartition(model.boot_partition.esp, root / "efi"))
    cleanups.append(Unmount(root / "efi"))

    xbootldr = model.boot_partition.xbootldr
    if xbootldr is not None:
        steps.append(MountPartition(xbootldr, root / "boot"))
        cleanups.append(Unmount(root / "boot"))

    mounts, unmounts = create_vfs_mounts(root)
    steps.extend(mounts)
    cleanups.extend(unmounts)

    steps.append(AddRepo(uri=VOLATILE_REPO_URI, name=VOLATILE_REPO_NAME, priority=0))
    steps.append(InstallPackages(names=list(model.packages)))

    for account in model.accounts:
        if not account.builtin:
            steps.append(CreateAccount(account))
        if account.password is not None:
            steps.append(SetPassword(account, account.password))

    if model.locale is not None:
        steps.append(SetLocale(model.locale))
    if model.timezone is not None:
        steps.append(SetTimezone(model.timezone))

    steps.append(SetMachineID())

    fstab = EmitFstab().with_entries(
        [
            FstabComment(f"{root_partition.partition.path} at time of installation"),
            FstabDevice.from_system_partition(root_partition),
        ]
    )
    steps.append(fstab)

    cleanups.append(SyncFS())
    cleanups.reverse()
    return cleanups, steps