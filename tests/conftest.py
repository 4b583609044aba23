import os
import stat

import pytest

from Shell import shell


@pytest.fixture(autouse=True)
def _reset_last_status():
    shell.last_status = 0
    yield
    shell.last_status = 0


@pytest.fixture
def make_executable():
    """Write a /bin/sh script into a directory and mark it executable."""

    def _make(directory, name, body="exit 0"):
        path = os.path.join(str(directory), name)
        with open(path, "w") as f:
            f.write("#!/bin/sh\n" + body + "\n")
        os.chmod(path, os.stat(path).st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make


@pytest.fixture
def bin_dir(tmp_path):
    path = tmp_path / "bin"
    path.mkdir()
    return path
