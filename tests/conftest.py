"""Shared fixtures for zwift_today tests."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

from zwift_today.config import Settings


def make_response(status_code=200, body=None, content=None):
    """Build a stand-in for requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if body is not None and not isinstance(body, str):
        body = json.dumps(body)
    response.text = body or ''
    response.content = content if content is not None else response.text.encode('utf-8')
    return response


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a temporary output file."""
    return Settings(
        token='secret-token',
        athlete_id='i12345',
        output_path=tmp_path / 'today.zwo',
    )


@pytest.fixture
def session():
    """A mock requests.Session; set .request.side_effect per test."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def env():
    """Minimal valid environment."""
    return {'INTERVALS_TOKEN': 'secret-token', 'INTERVALS_ID': 'i12345'}


@pytest.fixture
def clean_environ(monkeypatch, tmp_path):
    """Strip INTERVALS_* variables and run from an empty directory."""
    import os

    for name in list(os.environ):
        if name.startswith('INTERVALS_'):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers added by setup_logging() between tests."""
    import logging

    root = logging.getLogger()
    handlers = list(root.handlers)
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
