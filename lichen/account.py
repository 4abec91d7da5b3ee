"""User accounts to be configured on the installed system."""

from __future__ import annotations

import dataclasses
import functools
from dataclasses import dataclass


@functools.total_ordering
@dataclass(frozen=True, eq=True)
class Account:
    """An account definition; the default is an ordinary user account."""

    uid: int = 1000
    gid: int = 1000
    username: str = "user"
    gecos: str | None = None
    homedir: str = "/home/user"
    shell: str = "/bin/bash"
    password: str | None = None
    builtin: bool = False

    def _sort_key(self) -> tuple:
        return (
            self.uid,
            self.gid,
            self.username,
            (self.gecos is not None, self.gecos or ""),
            self.homedir,
            self.shell,
            (self.password is not None, self.password or ""),
            self.builtin,
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    @classmethod
    def root(cls) -> Account:
        """Return the built-in root account."""
        return cls(uid=0, gid=0, username="root", homedir="/root", builtin=True)

    def with_id(self, uid: int, gid: int) -> Account:
        """Return a copy with the given user and group IDs."""
        return dataclasses.replace(self, uid=uid, gid=gid)

    def with_gecos(self, gecos: str) -> Account:
        """Return a copy with the given human-readable name."""
        return dataclasses.replace(self, gecos=str(gecos))

    def with_shell(self, shell: str) -> Account:
        """Return a copy using the given login shell."""
        return dataclasses.replace(self, shell=str(shell))

    def with_password(self, password: str) -> Account:
        """Return a copy with the given new password."""
        return dataclasses.replace(self, password=str(password))