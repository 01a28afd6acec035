import json
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from lambda_jobs.handlers.health import check
from lambda_jobs.infrastructure.persistence.models import HealthCheckModel
from tests.unit.handlers.helpers import make_container, mock_database


class TestHealthHandler:
    @pytest.mark.asyncio
    async def test_connected(self, metrics, lambda_context):
        database, session = mock_database()
        rows = [
            HealthCheckModel(id=2, timestamp=datetime(2024, 1, 1, 12, 0, 5), message="Lambda execution at b"),
            HealthCheckModel(id=1, timestamp=datetime(2024, 1, 1, 12, 0, 0), message="Lambda execution at a"),
        ]
        result = MagicMock()
        result.scalars.return_value = rows
        session.execute.return_value = result

        response = await check({"path": "/health"}, lambda_context, make_container(metrics, database=database))

        assert response["statusCode"] == 200
        assert response["headers"]["Content-Type"] == "application/json"
        assert response["headers"]["Access-Control-Allow-Origin"] == "*"
        body = json.loads(response["body"])
        assert body["message"] == "Hello from Lambda with Database!"
        assert body["environment"] == "test"
        assert body["database"]["connected"] is True
        assert body["database"]["error"] is None
        assert [r["id"] for r in body["database"]["query_results"]] == [2, 1]
        assert body["database"]["query_results"][0]["timestamp"] == "2024-01-01T12:00:05"

        inserted = session.add.call_args.args[0]
        assert inserted.message.startswith("Lambda execution at ")
        database.create_tables.assert_awaited_once()
        database.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_database_failure_returns_500(self, metrics, lambda_context):
        database, _ = mock_database()
        database.create_tables.side_effect = ConnectionError("connection refused")

        response = await check({}, lambda_context, make_container(metrics, database=database))

        assert response["statusCode"] == 500
        body = json.loads(response["body"])
        assert body["message"] == "Database connection failed"
        assert body["database"] == {
            "connected": False,
            "error": "connection refused",
            "query_results": None,
        }
        database.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_failure_does_not_change_response(self, metrics, lambda_context):
        database, session = mock_database()
        result = MagicMock()
        result.scalars.return_value = []
        session.execute.return_value = result
        database.close.side_effect = RuntimeError("already disposed")

        response = await check({}, lambda_context, make_container(metrics, database=database))

        assert response["statusCode"] == 200
