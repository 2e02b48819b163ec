import pytest
from sqlalchemy.exc import OperationalError

from notefeed.core.services.health_service import HealthService


class FakeScalarResult:
    def __init__(self, scalar_value):
        self._scalar_value = scalar_value
    def scalar(self):
        return self._scalar_value


class FakeSession:
    def __init__(self, ok=True):
        self.ok = ok
        self.executed = []
    async def execute(self, stmt):
        self.executed.append(stmt)
        if self.ok:
            return FakeScalarResult(1)
        raise OperationalError("SELECT 1", {}, Exception("db down"))


@pytest.mark.asyncio
async def test_get_health_status_ok():
    session = FakeSession(ok=True)
    svc = HealthService(session)

    resp = await svc.get_health_status()
    assert resp.status == "healthy"
    assert resp.version == svc.settings.app_version
    assert resp.checks["database"]["connected"] is True
    assert resp.checks["database"]["response_time_ms"] >= 0
    assert len(session.executed) == 1


@pytest.mark.asyncio
async def test_get_health_status_db_down():
    svc = HealthService(FakeSession(ok=False))

    resp = await svc.get_health_status()
    assert resp.status == "unhealthy"
    db = resp.checks["database"]
    assert db["connected"] is False
    assert "db down" in db["error"]


@pytest.mark.asyncio
async def test_check_database_health_against_sqlite(test_session):
    result = await HealthService(test_session).check_database_health()
    assert result["status"] == "healthy"
