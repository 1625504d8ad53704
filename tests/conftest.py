"""Shared fixtures for secret-registrar tests."""
from pathlib import Path

import pytest

from secret_registrar.secrets.domains.errors import RegistrationError, SecretListError


class RecordingClient:
    """In-memory registry that records every call."""

    def __init__(self, fail_keys=(), list_error=None):
        self.calls = []
        self.store = {}
        self.list_calls = 0
        self.fail_keys = set(fail_keys)
        self.list_error = list_error

    def register_secret(self, key, value):
        self.calls.append((key, value))
        if key in self.fail_keys:
            raise RegistrationError(key, "HTTP 422: Validation Failed")
        self.store[key] = value

    def list_secret_names(self):
        self.list_calls += 1
        if self.list_error:
            raise SecretListError(self.list_error)
        return sorted(self.store)


@pytest.fixture
def client():
    return RecordingClient()


@pytest.fixture
def make_client():
    """Factory for recording clients with scripted failures."""
    return RecordingClient


@pytest.fixture
def secrets_file(tmp_path):
    """Factory writing a secrets file and returning its path as str."""
    def _write(content, name="secrets.txt"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def temp_home(tmp_path, monkeypatch):
    """Fixture to create a temporary home directory for testing."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setattr(Path, "home", lambda: fake_home)
    return fake_home


@pytest.fixture
def temp_config_dir(temp_home):
    """Fixture to create temporary config directory."""
    config_dir = temp_home / ".config" / "secret-registrar"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir
