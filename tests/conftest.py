import pytest
from httpx import ASGITransport, AsyncClient

from ghratelimit.api.main import app


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture(autouse=True)
def _clear_dependency_overrides():
    """Drop injected clients and clocks between every test."""
    yield
    app.dependency_overrides.clear()
