"""Fixtures shared by the service tests."""

from typing import AsyncIterator

import pytest

from tests.services.mock_repository import MockRepository


@pytest.fixture
async def mock_repository() -> AsyncIterator[MockRepository]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()
