"""Package management steps driven by moss."""

from __future__ import annotations

from dataclasses import dataclass, field

from lichen.steps.base import Step
from lichen.steps.context import Context


@dataclass
class AddRepo(Step):
    """Add a repository to the target root."""

    uri: str
    name: str
    priority: int = 0

    def title(self) -> str:
        return f"Add repo {self.name}"

    def describe(self) -> str:
        return f"{self.uri} (priority {self.priority})"

    def execute(self, context: Context) -> None:
        context.run_command(
            [
                "moss",
                "-D",
                context.root,
                "repo",
                "add",
                self.name,
                self.uri,
                "-p",
                str(self.priority),
                "-y",
            ]
        )


@dataclass
class InstallPackages(Step):
    """Install packages into the target root."""

    names: list[str] = field(default_factory=list)

    def title(self) -> str:
        return "Install"

    def describe(self) -> str:
        return "packages to sysroot"

    def execute(self, context: Context) -> None:
        context.run_command(["moss", "-D", context.root, "install", *self.names, "-y"])

    def is_indeterminate(self) -> bool:
        # moss draws its own progress, so no spinner is wanted
        return False