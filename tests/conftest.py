"""Test configuration and fixtures."""

import gzip

import pytest

from tests.helpers import RecordingSink, build_archive, build_member, create_tar_bytes


@pytest.fixture
def hello_tar():
    """Single-entry archive holding hello.txt with content "hi"."""
    return build_archive(build_member("hello.txt", b"hi"))


@pytest.fixture
def project_tar():
    """Archive with a directory, files and a symlink, built by tarfile."""
    return create_tar_bytes(
        files={
            "project/README.md": b"# Project\n",
            "project/src/main.py": b"print('hello')\n" * 100,
        },
        directories=["project", "project/src"],
        symlinks={"project/latest": "src/main.py"},
    )


@pytest.fixture
def project_tar_gz(project_tar):
    """Gzip-wrapped variant of project_tar."""
    return gzip.compress(project_tar)


@pytest.fixture
def recording_sink():
    """Sink that records add_file/add_folder calls."""
    return RecordingSink()


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test (default)")
