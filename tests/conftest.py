"""Test configuration and fixtures.

HTTP is served by an in-process fake of the Freelo API built on
``httpx.MockTransport``; no test touches the network.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx
import pytest

from freelo_mcp.client import FreeloClient

TEST_EMAIL = "jane@example.com"
TEST_API_KEY = "secret-api-key"
API_PREFIX = "/v1"


@dataclass
class Route:
    """Canned response for one path."""

    status_code: int = 200
    json: Optional[Any] = None
    content: Optional[bytes] = None
    headers: Dict[str, str] = field(default_factory=dict)
    error: Optional[Exception] = None


class FakeFreeloAPI:
    """Records requests and answers them from registered routes."""

    def __init__(self):
        self.routes: Dict[str, Route] = {}
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def add(self, path: str, **kwargs) -> None:
        """Register a canned response for a path such as ``/task/42``."""
        self.routes[path] = Route(**kwargs)

    def paths(self) -> List[str]:
        return [r.url.path[len(API_PREFIX):] for r in self.requests]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path[len(API_PREFIX):]
        route = self.routes.get(path)
        if route is None:
            return httpx.Response(404, json={"error": "not_found", "message": f"No route {path}"})
        if route.error is not None:
            raise route.error
        if route.content is not None:
            return httpx.Response(route.status_code, content=route.content, headers=route.headers)
        return httpx.Response(route.status_code, json=route.json, headers=route.headers)


@pytest.fixture
def fake_api() -> FakeFreeloAPI:
    """Provide an empty fake Freelo API."""
    return FakeFreeloAPI()


@pytest.fixture
def client(fake_api: FakeFreeloAPI) -> FreeloClient:
    """Provide a FreeloClient wired to the fake API."""
    return FreeloClient(TEST_EMAIL, TEST_API_KEY, transport=fake_api.transport)


@pytest.fixture(autouse=True)
def _reset_freelo_loggers():
    """Drop handlers tests may have attached to freelo_mcp loggers."""
    yield
    for logger_name in list(logging.Logger.manager.loggerDict):
        if logger_name.startswith("freelo_mcp."):
            logger = logging.getLogger(logger_name)
            for handler in logger.handlers[:]:
                handler.close()
                logger.removeHandler(handler)


def make_task(**overrides) -> Dict[str, Any]:
    """A task payload shaped like GET /task/{id}."""
    task: Dict[str, Any] = {
        "id": 42,
        "name": "Prepare release",
        "description": "Ship version 2",
        "priority_enum": "h",
        "date_add": "2025-01-10T09:00:00+01:00",
        "due_date": "2025-02-01T00:00:00+01:00",
        "author": {"id": 1, "fullname": "Jane Doe", "email": TEST_EMAIL},
        "worker": {"id": 2, "fullname": "John Roe"},
        "tasklist": {"id": 7, "name": "Backlog", "state": {"id": 1, "state": "active"}},
        "project": {"id": 3, "name": "Website"},
        "state": {"id": 1, "state": "active"},
        "tags": ["release"],
        "comments": [
            {
                "id": 100,
                "content": "Specs attached",
                "date_add": "2025-01-11T10:00:00+01:00",
                "author": {"id": 1, "fullname": "Jane Doe"},
                "is_description": True,
                "files": [
                    {
                        "uuid": "0b7e9a52-2f6e-4d0e-9d6b-3c1a2b4c5d6e",
                        "filename": "specs.pdf",
                        "size": 1536,
                        "date_add": "2025-01-11T10:00:00+01:00",
                    }
                ],
            }
        ],
    }
    task.update(overrides)
    return task


def make_subtask(subtask_id: int, state: str = "active", **overrides) -> Dict[str, Any]:
    """A subtask item as found in the subtasks envelope."""
    subtask: Dict[str, Any] = {
        "id": subtask_id,
        "task_id": 42,
        "name": f"Step {subtask_id}",
        "date_add": "2025-01-12T08:00:00+01:00",
        "count_comments": 0,
        "count_subtasks": 0,
        "author": {"id": 1, "fullname": "Jane Doe"},
        "state": {"id": 1, "state": state},
        "project": {"id": 3, "name": "Website"},
        "tasklist": {"id": 7, "name": "Backlog"},
    }
    subtask.update(overrides)
    return subtask


def make_envelope(subtasks: List[Dict[str, Any]], total: Optional[int] = None) -> Dict[str, Any]:
    """Wrap subtasks in the paginated envelope."""
    return {
        "total": len(subtasks) if total is None else total,
        "count": len(subtasks),
        "page": 1,
        "per_page": 25,
        "data": {"subtasks": subtasks},
    }
