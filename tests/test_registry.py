import pytest

from lichen.workflow.registry import (
    CustomIcon,
    DisplayInfo,
    RegionSettings,
    Settings,
    StandardIcon,
    StepRegistry,
    SymbolicIcon,
    UserAbortedError,
    WorkflowStep,
    WorkflowStepError,
    get_step,
    register_step,
)


class DummyStep(WorkflowStep):
    def __init__(self, title: str) -> None:
        self._info = DisplayInfo(title=title, description=f"{title} step")

    def info(self) -> DisplayInfo:
        return self._info


def test_register_and_get_creates_fresh_instances():
    registry = StepRegistry()
    registry.register("disks", "Someone", "Pick a disk", lambda: DummyStep("Disks"))
    first = registry.get("disks")
    second = registry.get("disks")
    assert first.info().title == "Disks"
    assert first is not second
    assert isinstance(second, DummyStep)


def test_unknown_step_returns_none():
    registry = StepRegistry()
    assert registry.get("missing") is None


def test_contains():
    registry = StepRegistry()
    registry.register("summary", "Someone", "Review", lambda: DummyStep("Summary"))
    assert "summary" in registry
    assert "disks" not in registry


def test_register_returns_metadata():
    registry = StepRegistry()
    info = registry.register("summary", "Someone", "Review", lambda: DummyStep("Summary"))
    assert (info.id, info.author, info.description) == ("summary", "Someone", "Review")


def test_later_registration_replaces_earlier():
    registry = StepRegistry()
    registry.register("x", "A", "first", lambda: DummyStep("First"))
    registry.register("x", "B", "second", lambda: DummyStep("Second"))
    assert registry.get("x").info().title == "Second"


def test_default_registry_functions():
    register_step("test-registry-unique", "Someone", "desc", lambda: DummyStep("Unique"))
    assert get_step("test-registry-unique").info().title == "Unique"
    assert get_step("test-registry-never-registered") is None


def test_display_info_default_icon():
    info = DisplayInfo(title="T", description="D")
    assert info.icon is None


def test_icons_hold_values():
    assert SymbolicIcon("drive", "drive-harddisk").fallback == "drive-harddisk"
    assert CustomIcon("/x.png", 32, 48).height == 48
    assert StandardIcon("drive") == StandardIcon("drive")


def test_region_defaults():
    region = RegionSettings()
    assert region.language == "en_US.UTF-8"
    assert region.timezone == "UTC"
    assert Settings().region == region


def test_user_aborted_error_message():
    error = UserAbortedError()
    assert str(error) == "User aborted installation"
    assert issubclass(UserAbortedError, WorkflowStepError) is True


def test_abstract_step_cannot_be_created():
    with pytest.raises(TypeError):
        WorkflowStep()