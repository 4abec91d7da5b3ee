"""Building blocks for an operating system installer: accounts, package selections, partitions, install steps and workflow navigation."""

__version__ = "0.1.0"