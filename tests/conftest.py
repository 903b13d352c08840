import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.errors import TransportError
from core.models import CallerIdentity


class StubPoster:
    """Records every POST and answers with a canned JSON body."""

    def __init__(self, response: Any = None):
        self.response = {} if response is None else response
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    async def post(self, url: str, body: Dict[str, Any]) -> Any:
        self.calls.append((url, dict(body)))
        return self.response


class FailingPoster:
    """Fails every POST the way an unreachable collaborator would."""

    def __init__(self):
        self.calls = 0

    async def post(self, url: str, body: Dict[str, Any]) -> Any:
        self.calls += 1
        raise TransportError(url, "connection refused")


@pytest.fixture
def stub_poster():
    return StubPoster()


@pytest.fixture
def caller():
    return CallerIdentity(id="agent-007", profile={"name": "Test Agent"})


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep FLOW_PILOT_* from the developer's shell out of the tests."""
    import os

    for name in list(os.environ):
        if name.startswith("FLOW_PILOT_"):
            monkeypatch.delenv(name, raising=False)
    yield
