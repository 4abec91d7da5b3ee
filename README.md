# lichen

`lichen` provides the pieces an operating system installer is assembled from:

- **Accounts** (`lichen.account.Account`): the root account and regular users,
  built up with `with_id`, `with_gecos`, `with_shell` and `with_password`,
  each of which returns a new account.
- **Package selections** (`lichen.selections`): JSON-described groups of
  packages that may depend on other groups. `Manager.selections_with` resolves
  group names into the sorted, de-duplicated list of packages to install.
- **Partitions** (`lichen.partitions`): `Partition`, boot partitions (an EFI
  system partition, optionally paired with an XBOOTLDR partition) and system
  partitions with a mountpoint, rendered with sizes from `human_bytes`.
- **Locale listing** (`lichen.systemd.localectl_list_locales`): the locales
  reported by `localectl list-locales`.
- **Install steps** (`lichen.steps`): formatting, mounting, bind mounts,
  repository setup, package installation, account creation, password, locale,
  timezone and machine-id setup, and fstab generation, each with `title()`,
  `describe()` and `execute(context)`; plus the `Unmount` and `SyncFS`
  cleanups.
- **The engine** (`lichen.engine.compile_to_steps`): turns a `Model` into the
  ordered steps to run and the cleanups to run afterwards.
- **Workflow navigation** (`lichen.workflow`): a registry of interactive
  installer steps and a `Workflow` that tracks which steps are available and
  moves between them.

## Resolving package selections

```python
from lichen.selections import Group, Manager

base = Group.from_json(
    '{"name": "base", "summary": "Base", "description": "Core system",'
    ' "required": ["bash", "coreutils"]}'
)
develop = Group.from_json(
    '{"name": "develop", "summary": "Development", "description": "Tools",'
    ' "depends": ["base"], "required": ["git"]}'
)

manager = Manager([base, develop])
print(manager.selections_with(["develop"]))
# ['bash', 'coreutils', 'git']
```

Malformed JSON or missing fields raise `lichen.selections.SelectionError`; an
unknown group name raises `lichen.selections.UnknownGroupError`.

## Describing accounts

```python
from lichen.account import Account

password = "password"
root = Account.root().with_password(password)
user = Account(username="alice").with_shell("/usr/bin/bash").with_password(password)
```

## Compiling an installation

A `lichen.model.Model` names the accounts, the boot partition, the system
partitions (one of them mounted at `/`), the locale, the timezone, the
packages and the root filesystem type. `compile_to_steps(model, context)`
returns the cleanups and the steps in the order they must run:

```python
from lichen.account import Account
from lichen.engine import compile_to_steps
from lichen.model import Locale, Model
from lichen.partitions import BootPartition, Partition, PartitionKind, SystemPartition
from lichen.steps.context import CommandContext

esp = Partition("/dev/sda1", 512 * 1024 * 1024, PartitionKind.ESP)
root_part = Partition(
    "/dev/sda2", 40 * 1024**3, uuid="00000000-0000-0000-0000-000000000002", sb="xfs"
)

model = Model(
    accounts=[Account.root()],
    boot_partition=BootPartition(esp, parent_desc="sda"),
    partitions=[SystemPartition(root_part, mountpoint="/", parent_desc="sda")],
    locale=Locale("en_US.UTF-8", "English (United States)"),
    timezone="UTC",
    packages=["bash"],
    rootfs_type="xfs",
)

context = CommandContext("/tmp/lichen")
cleanups, steps = compile_to_steps(model, context)

for step in steps:
    print(step.title(), step.describe())
    step.execute(context)

for cleanup in cleanups:
    cleanup.execute(context)
```

A model without a partition mounted at `/` raises
`lichen.engine.MissingPartitionError`; a root partition without a known
filesystem (`sb`) raises `lichen.steps.context.UnknownFilesystemError`.

`CommandContext` runs each step's external commands (`mkfs.*`, `mount`,
`umount`, `moss`, `chroot`, `sync`). `run_command`, used by the `moss` steps,
raises `lichen.steps.context.CommandFailedError` when the command exits
unsuccessfully; `run_command_captured`, used by the other steps, returns the
completed process with its output captured. A program that cannot be started
raises `OSError`. `FormatPartition` raises `UnknownFilesystemError` for a
filesystem other than ext4, xfs or f2fs. Executing steps changes the disks of
the machine it runs on and needs root privileges.

## Navigating installer steps

Interactive steps subclass `lichen.workflow.registry.WorkflowStep` and are
registered with `register_step(id, author, description, create)`, then
created with `get_step(id)` (or through a `StepRegistry` of your own).

A `lichen.workflow.navigation.Workflow(step_ids, active_step, registry)`
creates each step from the registry (raising `StepLoadError` for an unknown
id), orders them by id, and makes only the first id given available. It offers
`goto_step`, `next_step`, `previous_step`, `has_next`, `has_previous`,
`make_step_available` and `make_step_unavailable`. Moving to a missing or
unavailable step raises `StepNotFoundError` or `StepUnavailableError`; moving
past either end raises `NoNextStepError` or `NoPreviousStepError`.

## What this package does not do

- It has no command to run and no interactive front end: prompting the user
  and showing progress is left to the program using it.
- It does not discover disks, partitions or filesystems; `Partition`,
  `BootPartition` and `SystemPartition` values are built by the caller.
- It has no locale database: `Locale` values are built by the caller, and
  `localectl_list_locales` only lists locale names.
- It has no privileged background service; steps run their commands directly
  in the calling process.