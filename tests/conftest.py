"""Shared test fixtures."""

from typing import Iterable

import pytest
from fastapi.testclient import TestClient

from src.main import app


class ScriptedRng:
    """미리 정한 눈을 순서대로 돌려주는 RNG. randint 호출 인자를 기록."""

    def __init__(self, rolls: Iterable[int]):
        self._rolls = list(rolls)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return self._rolls.pop(0)


@pytest.fixture()
def client() -> TestClient:
    """FastAPI TestClient for the stateless preview app."""
    return TestClient(app)


@pytest.fixture()
def scripted_rng():
    """ScriptedRng 팩토리."""
    return ScriptedRng
