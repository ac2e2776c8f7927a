import copy
import os
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt

# Settings are read at import time
os.environ["SECRET_KEY"] = "test-secret"
os.environ["TESTING"] = "true"
os.environ["API_BASE_URL"] = "http://api.test/api"

from monhub.main import app
from monhub.config import settings
from monhub.dependencies import get_api_client, get_public_api_client
from monhub.services.api_client import ApiClient, ApiError


class Responses:
    """Successive bodies for one route; the last one repeats."""

    def __init__(self, *bodies):
        self.bodies = list(bodies)

    def next(self):
        if len(self.bodies) > 1:
            return self.bodies.pop(0)
        return self.bodies[0]


class FakeApiClient(ApiClient):
    """In-memory stand-in for the marketplace API, keyed by (method, path)."""

    def __init__(self):
        super().__init__(token="test-token")
        self.routes = {}
        self.calls = []

    def on(self, method, path, response):
        self.routes[(method, path)] = response
        return self

    def request(self, method, path, params=None, json=None, files=None, data=None):
        self.calls.append({"method": method, "path": path, "params": params, "json": json, "files": files})
        if (method, path) not in self.routes:
            raise ApiError(f"No route for {method} {path}", status_code=404)
        response = self.routes[(method, path)]
        if isinstance(response, Responses):
            response = response.next()
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(json=json, params=params)
        return copy.deepcopy(response)

    def called(self, method, path):
        return [c for c in self.calls if c["method"] == method and c["path"] == path]


def make_token(user_id="agent1", user_type="agent", **claims):
    payload = {
        "id": user_id,
        "email": f"{user_id}@example.com",
        "userType": user_type,
        "profileCompleted": True,
        "isPaid": True,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=30),
    }
    payload.update(claims)
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def auth_headers(user_id="agent1", user_type="agent", **claims):
    return {"Authorization": f"Bearer {make_token(user_id, user_type, **claims)}"}


def make_collaboration(**overrides):
    data = {
        "_id": "collab1",
        "postId": "prop1",
        "postType": "Property",
        "postOwnerId": "agent1",
        "collaboratorId": "apporteur1",
        "status": "pending",
        "proposedCommission": 30,
        "progressSteps": [],
        "activities": [],
        "ownerSigned": False,
        "collaboratorSigned": False,
        "createdAt": "2025-03-05T10:00:00Z",
    }
    data.update(overrides)
    return data


@pytest.fixture()
def api():
    return FakeApiClient()


@pytest.fixture()
def client(api):
    app.dependency_overrides[get_api_client] = lambda: api
    app.dependency_overrides[get_public_api_client] = lambda: api
    # Disable rate limiter globally for tests
    if hasattr(app.state, "limiter"):
        setattr(app.state.limiter, "enabled", False)
    yield TestClient(app)
    app.dependency_overrides.clear()
