"""Partitions as seen by the installer: boot partitions and system partitions."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from pathlib import Path

_SUFFIXES = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB")


def human_bytes(size: float) -> str:
    """Format a byte count using binary units with at most one decimal."""
    size = float(size)
    if size <= 0.0:
        return "0 B"
    base = math.log10(size) / math.log10(1024.0)
    whole = math.floor(base)
    result = f"{1024.0 ** (base - whole):.1f}"
    while result.endswith(".0"):
        result = result[:-2]
    suffix = _SUFFIXES[min(int(whole), len(_SUFFIXES) - 1)]
    return f"{result} {suffix}"


class PartitionKind(enum.Enum):
    """The role of a partition on a GPT disk."""

    ESP = "esp"
    XBOOTLDR = "xbootldr"
    REGULAR = "regular"


@dataclass
class Partition:
    """A discovered disk partition."""

    path: Path
    size: int
    kind: PartitionKind = PartitionKind.REGULAR
    uuid: str = ""
    sb: str | None = None

    def __post_init__(self) -> None:
        self.path = Path(self.path)


@dataclass
class BootPartition:
    """An EFI system partition, optionally paired with an XBOOTLDR partition on the same disk."""

    esp: Partition
    xbootldr: Partition | None = None
    parent_desc: str = ""

    def __str__(self) -> str:
        extra = ""
        if self.xbootldr is not None:
            extra = f"with XBOOTLDR {self.xbootldr.path} ({human_bytes(self.xbootldr.size)}) "
        return f"{self.esp.path} ({human_bytes(self.esp.size)}) {extra}[on {self.parent_desc}]"


@dataclass
class SystemPartition:
    """A regular partition with an optional mountpoint within the new root."""

    partition: Partition
    mountpoint: str | None = None
    parent_desc: str = ""

    def __str__(self) -> str:
        return (
            f"{self.partition.path} ({human_bytes(self.partition.size)}) "
            f"[on {self.parent_desc}]"
        )