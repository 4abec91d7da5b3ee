"""Helpers that query systemd tools."""

from __future__ import annotations

import subprocess


def _lines(text: str) -> list[str]:
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


def localectl_list_locales() -> list[str]:
    """List all locales reported by ``localectl list-locales``."""
    output = subprocess.run(
        ["localectl", "list-locales"],
        stdout=subprocess.PIPE,
        check=False,
    )
    return _lines(output.stdout.decode("utf-8"))