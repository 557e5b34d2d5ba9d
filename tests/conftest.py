"""
Pytest configuration and shared fixtures.

Provides:
- make_response: builds real requests.Response objects over in-memory bodies
- session: a mock requests.Session used as the client's transport
- client: a Client bound to that session
- prediction payloads in the API's JSON layout
"""

import io
import json
from typing import Any, Optional
from unittest.mock import Mock

import pytest
import requests

from replicateapi.models.client import Client

TOKEN = "r8_test_token"
MODEL = "stability-ai/sdxl"
VERSION = "39ed52f2a78e934b3ba6e2a89f5b1c712de7dfea535525255b1aa35c5565e08b"


def make_response(
    status_code: int,
    payload: Any = None,
    body: Optional[bytes] = None
) -> requests.Response:
    """Build a requests.Response whose body is read from memory."""
    if body is None:
        body = json.dumps(payload).encode('utf-8') if payload is not None else b''

    response = requests.Response()
    response.status_code = status_code
    response.headers['Content-Type'] = 'application/json'
    response.encoding = 'utf-8'
    response.raw = io.BytesIO(body)
    return response


def prediction_payload(**overrides: Any) -> dict:
    payload = {
        "id": "gm3qorzdhgbfurvjtvhg6dckhu",
        "version": VERSION,
        "urls": {
            "get": "https://api.replicate.com/v1/predictions/gm3qorzdhgbfurvjtvhg6dckhu",
            "cancel": "https://api.replicate.com/v1/predictions/gm3qorzdhgbfurvjtvhg6dckhu/cancel",
        },
        "created_at": "2023-06-01T12:00:00.123456Z",
        "started_at": None,
        "completed_at": None,
        "status": "starting",
        "input": {"prompt": "an astronaut riding a horse"},
        "output": None,
        "error": None,
        "logs": "",
        "metrics": {},
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def session():
    """Mock transport; tests set session.request.return_value."""
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session):
    """Client bound to the mock session."""
    return Client(TOKEN, MODEL, VERSION, session=session)


@pytest.fixture
def starting_payload():
    return prediction_payload()


@pytest.fixture
def succeeded_payload():
    return prediction_payload(
        status="succeeded",
        started_at="2023-06-01T12:00:01Z",
        completed_at="2023-06-01T12:00:09.5Z",
        output=[
            "https://replicate.delivery/pbxt/out-0.png",
            {"nested": [1, 2.5, None, True, {"deep": "value"}]},
        ],
        logs="Using seed: 42\n100%|██████████| 50/50\n",
        metrics={"predict_time": 8.1},
    )
