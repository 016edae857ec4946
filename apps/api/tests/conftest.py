import os

import pytest
from fastapi.testclient import TestClient

from fakes import FakeGitHub, scenario_d_omdb


def _load_test_env() -> None:
    defaults = {
        "GITHUB_CLIENT_ID": "test-client-id",
        "GITHUB_CLIENT_SECRET": "test-client-secret",
        "OMDB_API_KEY": "test-omdb-key",
        "IS_PRODUCTION": "false",
        "PORT": "3000",
    }
    for key, value in defaults.items():
        os.environ.setdefault(key, value)


@pytest.fixture()
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture()
def fake_omdb():
    return scenario_d_omdb()


@pytest.fixture()
def test_client(fake_github, fake_omdb):
    # Ensure required env vars exist before importing the app
    _load_test_env()

    from app.main import app  # type: ignore
    from app.deps.deps import get_github_client, get_omdb_client  # type: ignore

    github = fake_github.client()
    omdb = fake_omdb.client()

    app.dependency_overrides[get_github_client] = lambda: github
    app.dependency_overrides[get_omdb_client] = lambda: omdb

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
