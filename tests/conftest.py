import os

import pytest

# Keep tests off the real storage file; must be set before the app is imported.
os.environ.setdefault("ENV", "dev")
os.environ["STORAGE_BACKEND"] = "memory"

from mapty.app import env_loader  # noqa: F401, E402

from tests._factories import RunningFactory, CyclingFactory  # noqa: E402


class AccidentalStorageFileAccessError(Exception):
    """Raised when a test accidentally tries to use the real storage file."""

    pass


def _raise_storage_file_access_error(*args, **kwargs):
    raise AccidentalStorageFileAccessError(
        "Test attempted to use the default storage file! "
        "Pass a JsonFileKeyValueStore with a tmp_path, or use InMemoryKeyValueStore."
    )


@pytest.fixture(autouse=True)
def prevent_default_storage_file_access(monkeypatch):
    """Prevent any test from building storage from the environment.

    Tests that need storage construct it explicitly, so the process-wide session
    controller must never be created during a test run.
    """
    monkeypatch.setattr(
        "mapty.app.dependencies.get_storage", _raise_storage_file_access_error
    )
    yield


@pytest.fixture(scope="session")
def running_factory() -> RunningFactory:
    return RunningFactory()


@pytest.fixture(scope="session")
def cycling_factory() -> CyclingFactory:
    return CyclingFactory()
