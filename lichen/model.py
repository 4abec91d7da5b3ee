"""The installation model: everything needed to build the install steps."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from lichen.account import Account
from lichen.partitions import BootPartition, SystemPartition


@dataclass(frozen=True)
class Locale:
    """A system locale: its identifier and a user-facing name."""

    name: str
    display_name: str

    def __str__(self) -> str:
        return self.display_name


@dataclass(kw_only=True)
class Model:
    """Core model for the installation target."""

    accounts: Iterable[Account]
    boot_partition: BootPartition
    rootfs_type: str
    partitions: list[SystemPartition] = field(default_factory=list)
    locale: Locale | None = None
    timezone: str | None = None
    packages: Iterable[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.accounts = sorted(set(self.accounts))
        self.packages = sorted(set(self.packages))
        self.partitions = list(self.partitions)