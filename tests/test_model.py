from lichen.account import Account
from lichen.model import Locale, Model
from lichen.partitions import BootPartition, Partition, PartitionKind, SystemPartition


def _boot() -> BootPartition:
    return BootPartition(
        esp=Partition(path="/dev/sda1", size=1024, kind=PartitionKind.ESP),
        parent_desc="Disk A",
    )


def test_locale_str_is_display_name():
    locale = Locale(name="en_US.UTF-8", display_name="English (United States)")
    assert str(locale) == "English (United States)"
    assert locale.name == "en_US.UTF-8"


def test_accounts_sorted_and_deduplicated():
    user = Account(username="alice").with_id(1001, 1001)
    model = Model(
        accounts=[user, Account.root(), Account.root()],
        boot_partition=_boot(),
        rootfs_type="xfs",
    )
    assert model.accounts == [Account.root(), user]


def test_packages_sorted_and_deduplicated():
    model = Model(
        accounts=[],
        boot_partition=_boot(),
        rootfs_type="xfs",
        packages=["vim", "bash", "vim"],
    )
    assert model.packages == ["bash", "vim"]


def test_defaults():
    model = Model(accounts=[], boot_partition=_boot(), rootfs_type="ext4")
    assert model.locale is None
    assert model.timezone is None
    assert model.partitions == []
    assert model.packages == []
    assert model.rootfs_type == "ext4"


def test_partitions_kept_in_order():
    root = SystemPartition(partition=Partition(path="/dev/sda3", size=10), mountpoint="/")
    home = SystemPartition(partition=Partition(path="/dev/sda4", size=10), mountpoint="/home")
    model = Model(
        accounts=[],
        boot_partition=_boot(),
        rootfs_type="xfs",
        partitions=(root, home),
        timezone="UTC",
    )
    assert [p.mountpoint for p in model.partitions] == ["/", "/home"]
    assert model.timezone == "UTC"