"""Shared fixtures."""

import pytest

from edsign.config import EdSignConfig
from edsign.crypto import KeyStore


@pytest.fixture
def config(tmp_path):
    return EdSignConfig.for_directory(tmp_path / "keys")


@pytest.fixture
def key_store(config):
    return KeyStore(config)


@pytest.fixture
def keypair(key_store):
    return key_store.create_keypair()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Empty working directory the test runs in."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work
