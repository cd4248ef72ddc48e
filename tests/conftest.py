"""Shared fixtures for sievedir tests."""

import pytest


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests away from the real ~/.sievedir and env overrides."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("SIEVEDIR_DIR", raising=False)
    monkeypatch.delenv("SIEVEDIR_CONFIG", raising=False)
    return home


@pytest.fixture
def sieve_dir(tmp_path):
    """An empty sieve directory."""
    path = tmp_path / "sieve"
    path.mkdir()
    return path
