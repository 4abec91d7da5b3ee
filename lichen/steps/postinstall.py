"""Steps that configure the installed system once packages are in place."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union

from lichen.account import Account
from lichen.model import Locale
from lichen.partitions import SystemPartition
from lichen.steps.base import Step
from lichen.steps.context import Context, NoMountpointError, UnknownFilesystemError

log = logging.getLogger(__name__)

_USER_GROUPS = "audio,adm,wheel,render,kvm,input,users"


@dataclass
class SetPassword(Step):
    """Set the password of an account via ``chpasswd`` in the target root."""

    account: Account
    password: str

    def title(self) -> str:
        return "Set account password"

    def describe(self) -> str:
        return self.account.username

    def execute(self, context: Context) -> None:
        text = f"{self.account.username}:{self.password}\n"
        context.run_command_captured(["chroot", context.root, "chpasswd"], text)


@dataclass
class CreateAccount(Step):
    """Create a user account in the target root via ``useradd``."""

    account: Account

    def title(self) -> str:
        return "Create account"

    def describe(self) -> str:
        return self.account.username

    def execute(self, context: Context) -> None:
        args = [
            "chroot",
            context.root,
            "useradd",
            self.account.username,
            "-m",
            "-U",
            "-G",
            _USER_GROUPS,
        ]
        if self.account.gecos is not None:
            args += ["-C", self.account.gecos]
        args += ["-s", self.account.shell]
        context.run_command_captured(args)


@dataclass
class SetLocale(Step):
    """Write the system locale to ``/etc/locale.conf``."""

    locale: Locale

    def title(self) -> str:
        return "Set system locale"

    def describe(self) -> str:
        return self.locale.display_name

    def execute(self, context: Context) -> None:
        path = context.root / "etc" / "locale.conf"
        path.write_text(f"LANG={self.locale.name}\n", encoding="utf-8")


@dataclass
class SetTimezone(Step):
    """Point ``/etc/localtime`` at the chosen zoneinfo file."""

    timezone: str

    def title(self) -> str:
        return "Set system timezone"

    def describe(self) -> str:
        return self.timezone

    def execute(self, context: Context) -> None:
        link = context.root / "etc" / "localtime"
        try:
            link.unlink()
        except OSError:
            pass
        os.symlink(f"../usr/share/zoneinfo/{self.timezone}", link)


@dataclass
class SetMachineID(Step):
    """Allocate a fresh machine ID in the target root."""

    def title(self) -> str:
        return "Allocate machine-id"

    def describe(self) -> str:
        return "via systemd-machine-id-setup"

    def execute(self, context: Context) -> None:
        machine_id = context.root / "etc" / "machine-id"
        if machine_id.exists():
            machine_id.unlink()
        context.run_command_captured(["chroot", context.root, "systemd-machine-id-setup"])


@dataclass(frozen=True)
class FstabComment:
    """A comment line in the filesystem table."""

    text: str

    def __str__(self) -> str:
        return f"# {self.text}"


@dataclass(frozen=True)
class FstabDevice:
    """A device line in the filesystem table."""

    fs: str
    mountpoint: str
    kind: str
    opts: str
    dump: int = 0
    passno: int = 0

    def __str__(self) -> str:
        return (
            f"{self.fs}\t{self.mountpoint}\t{self.kind}\t{self.opts}"
            f"\t{self.dump}\t{self.passno}"
        )

    @classmethod
    def from_system_partition(cls, partition: SystemPartition) -> FstabDevice:
        """Build the entry mounting a system partition by its PARTUUID."""
        if partition.mountpoint is None:
            raise NoMountpointError()
        if partition.partition.sb is None:
            raise UnknownFilesystemError()
        return cls(
            fs=f"PARTUUID={partition.partition.uuid}",
            mountpoint=partition.mountpoint,
            kind=str(partition.partition.sb),
            opts="rw,errors=remount-ro",
            dump=0,
            passno=1,
        )


FstabEntry = Union[FstabComment, FstabDevice]


def _default_entries() -> list[FstabEntry]:
    return [
        FstabComment("/etc/fstab: static filesystem information."),
        FstabComment(""),
        FstabComment("<fs>\t<mountpoint>\t<type>\t<opts>\t<dump>\t<pass>"),
        FstabComment(""),
        FstabComment("/dev/ROOT\t/\text3 \tnoatime\t0\t1"),
        FstabComment("/dev/SWAP\tnone\tswap\tsw\t0\t0"),
        FstabComment("/dev/fd0\t/mnt/floppy\tauto\tnoauto\t0\t0"),
        FstabDevice("none", "/proc", "proc", "nosuid,noexec", 0, 0),
        FstabDevice("none", "/dev/shm", "tmpfs", "defaults", 0, 0),
    ]


class EmitFstab(Step):
    """Write ``/etc/fstab``; starts from a template header unless entries are given."""

    def __init__(self, entries: Iterable[FstabEntry] | None = None) -> None:
        self.entries: list[FstabEntry] = (
            _default_entries() if entries is None else list(entries)
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(entries={self.entries!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EmitFstab):
            return NotImplemented
        return self.entries == other.entries

    def with_entries(self, entries: Iterable[FstabEntry]) -> EmitFstab:
        """Return a new table with the given entries appended."""
        return EmitFstab([*self.entries, *entries])

    def render(self) -> str:
        """Return the table text, one entry per line."""
        return "\n".join(str(entry) for entry in self.entries)

    def title(self) -> str:
        return "Generate fstab"

    def describe(self) -> str:
        return ""

    def execute(self, context: Context) -> None:
        path = context.root / "etc" / "fstab"
        path.write_text(self.render(), encoding="utf-8")