import os
import tempfile
from pathlib import Path

import pytest

os.environ.setdefault(
    "FRAME_REGISTRY_LOG", str(Path(tempfile.gettempdir()) / "frame_registry_tests" / "test.log")
)

from frame_registry.errors import StoreUnavailable  # noqa: E402
from frame_registry.registry_store import CommandResult  # noqa: E402

NOT_FOUND = "ERROR: The system was unable to find the specified registry key or value.\r\n"


class FakeReg:
    """In-memory stand-in for reg.exe add/delete/query."""

    def __init__(self) -> None:
        self.values = {}
        self.calls = []
        self.unavailable = False
        self.fail_add = set()
        self.fail_delete = set()

    def __call__(self, argv):
        argv = list(argv)
        self.calls.append(argv)
        if self.unavailable:
            raise StoreUnavailable("reg.exe not found")
        command, root, key = argv[1], argv[2], argv[4]
        hive = self.values.setdefault(root, {})
        if command == "add":
            if key in self.fail_add:
                return CommandResult(1, "", "ERROR: Access is denied.\r\n")
            hive[key] = argv[argv.index("/d") + 1]
            return CommandResult(0, "The operation completed successfully.\r\n")
        if command == "delete":
            if key in self.fail_delete:
                return CommandResult(1, "", "ERROR: Access is denied.\r\n")
            if key not in hive:
                return CommandResult(1, "", NOT_FOUND)
            del hive[key]
            return CommandResult(0, "The operation completed successfully.\r\n")
        if command == "query":
            if key not in hive:
                return CommandResult(1, "", NOT_FOUND)
            value = hive[key]
            stdout = "\r\n%s\r\n    %s    REG_SZ    %s\r\n\r\n" % (root.replace("HKCU", "HKEY_CURRENT_USER"), key, value)
            return CommandResult(0, stdout)
        return CommandResult(1, "", "ERROR: Invalid syntax.\r\n")

    def commands(self, name):
        return [(c[4], c[c.index("/d") + 1] if "/d" in c else None) for c in self.calls if c[1] == name]

    def stored(self, root):
        return dict(self.values.get(root, {}))


@pytest.fixture
def fake_reg() -> FakeReg:
    return FakeReg()
