import os
import subprocess
from pathlib import Path

import pytest

from lichen.account import Account
from lichen.model import Locale
from lichen.partitions import Partition, SystemPartition
from lichen.steps.context import Context, NoMountpointError, UnknownFilesystemError
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


class RecordingContext(Context):
    def __init__(self, root):
        self._root = Path(root)
        self.calls = []

    @property
    def root(self):
        return self._root

    def run_command(self, args):
        self.calls.append(([os.fspath(a) for a in args], None))

    def run_command_captured(self, args, input=None):
        argv = [os.fspath(a) for a in args]
        self.calls.append((argv, input))
        return subprocess.CompletedProcess(argv, 0, b"", b"")


@pytest.fixture
def context(tmp_path):
    (tmp_path / "etc").mkdir()
    return RecordingContext(tmp_path)


def test_set_password_feeds_chpasswd(context):
    password = "password"
    account = Account(username="alice").with_password(password)
    step = SetPassword(account, password)
    step.execute(context)
    assert context.calls == [
        (["chroot", str(context.root), "chpasswd"], "alice:password\n")
    ]
    assert step.title() == "Set account password"
    assert step.describe() == "alice"


def test_create_account_without_gecos(context):
    account = Account(username="bob").with_shell("/usr/bin/bash")
    CreateAccount(account).execute(context)
    args, stdin = context.calls[0]
    assert stdin is None
    assert args[:4] == ["chroot", str(context.root), "useradd", "bob"]
    assert "-C" not in args
    assert args[-2:] == ["-s", "/usr/bin/bash"]
    assert "audio,adm,wheel,render,kvm,input,users" in args


def test_create_account_with_gecos(context):
    account = Account(username="bob").with_gecos("Bob Builder")
    step = CreateAccount(account)
    step.execute(context)
    args, _ = context.calls[0]
    index = args.index("-C")
    assert args[index + 1] == "Bob Builder"
    assert step.title() == "Create account"


def test_set_locale_writes_locale_conf(context):
    locale = Locale(name="en_US.UTF-8", display_name="English (United States)")
    step = SetLocale(locale)
    step.execute(context)
    text = (context.root / "etc" / "locale.conf").read_text()
    assert text == "LANG=en_US.UTF-8\n"
    assert step.describe() == "English (United States)"


def test_set_timezone_creates_symlink(context):
    step = SetTimezone("Europe/London")
    step.execute(context)
    link = context.root / "etc" / "localtime"
    assert os.readlink(link) == "../usr/share/zoneinfo/Europe/London"
    assert step.describe() == "Europe/London"


def test_set_timezone_replaces_existing(context):
    link = context.root / "etc" / "localtime"
    link.write_text("old")
    SetTimezone("UTC").execute(context)
    assert os.readlink(link) == "../usr/share/zoneinfo/UTC"


def test_set_machine_id_removes_old_file(context):
    machine_id = context.root / "etc" / "machine-id"
    machine_id.write_text("stale")
    step = SetMachineID()
    step.execute(context)
    assert not machine_id.exists()
    assert context.calls == [
        (["chroot", str(context.root), "systemd-machine-id-setup"], None)
    ]
    assert step.describe() == "via systemd-machine-id-setup"


def test_fstab_comment_and_device_format():
    assert str(FstabComment("hello")) == "# hello"
    device = FstabDevice("none", "/proc", "proc", "nosuid,noexec", 0, 0)
    assert str(device) == "none\t/proc\tproc\tnosuid,noexec\t0\t0"


def test_fstab_device_from_system_partition():
    part = SystemPartition(
        Partition(Path("/dev/sda2"), 1024, uuid="abcd-1234", sb="xfs"),
        mountpoint="/",
    )
    device = FstabDevice.from_system_partition(part)
    assert device.fs == "PARTUUID=abcd-1234"
    assert device.mountpoint == "/"
    assert device.kind == "xfs"
    assert device.opts == "rw,errors=remount-ro"
    assert (device.dump, device.passno) == (0, 1)


def test_fstab_device_requires_mountpoint():
    part = SystemPartition(Partition(Path("/dev/sda2"), 1024, uuid="u", sb="xfs"))
    with pytest.raises(NoMountpointError):
        FstabDevice.from_system_partition(part)


def test_fstab_device_requires_filesystem():
    part = SystemPartition(Partition(Path("/dev/sda2"), 1024, uuid="u"), mountpoint="/")
    with pytest.raises(UnknownFilesystemError):
        FstabDevice.from_system_partition(part)


def test_emit_fstab_default_template():
    lines = EmitFstab().render().split("\n")
    assert lines[0] == "# /etc/fstab: static filesystem information."
    assert lines[-1] == "none\t/dev/shm\ttmpfs\tdefaults\t0\t0"
    assert len(lines) == 9


def test_emit_fstab_with_entries_appends_without_mutating():
    base = EmitFstab()
    extended = base.with_entries([FstabComment("extra")])
    assert len(extended.entries) == len(base.entries) + 1
    assert extended.entries[-1] == FstabComment("extra")
    assert base.render() + "\n# extra" == extended.render()


def test_emit_fstab_execute_writes_rendered(context):
    fstab = EmitFstab([FstabComment("a"), FstabComment("b")])
    fstab.execute(context)
    assert (context.root / "etc" / "fstab").read_text() == "# a\n# b"
    assert fstab.title() == "Generate fstab"
    assert fstab.describe() == ""