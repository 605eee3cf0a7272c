"""Package name and version shown in the banner and by ``--version``."""

NAME = "pi-edit"
VERSION = "0.1.0"
