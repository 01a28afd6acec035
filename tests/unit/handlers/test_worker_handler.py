from unittest.mock import AsyncMock

import pytest

from lambda_jobs.application.processors import ReportGenerationProcessor
from lambda_jobs.handlers.worker import process
from tests.unit.handlers.helpers import make_container, mock_database, sqs_event

USER_UPDATE = {"id": 1, "type": "data_processing", "payload": {"userId": 123, "action": "update_profile"}}
EMAIL = {
    "id": 2,
    "type": "email_notification",
    "payload": {"email": "user@example.com", "template": "welcome"},
}
UNKNOWN = {"id": 9, "type": "teleport", "payload": {}}


class TestWorkerHandler:
    @pytest.mark.asyncio
    async def test_all_succeed(self, metrics, lambda_context):
        response = await process(sqs_event(USER_UPDATE, EMAIL), lambda_context, make_container(metrics))

        assert response["statusCode"] == 200
        processing = response["processing"]
        assert processing["totalMessages"] == 2
        assert processing["successfulMessages"] == 2
        assert processing["failedMessages"] == 0
        assert [i["workId"] for i in processing["processedItems"]] == [1, 2]
        assert processing["processedItems"][0]["status"] == "success"
        assert "batchItemFailures" not in response
        assert metrics.closed

    @pytest.mark.asyncio
    async def test_partial_failure(self, metrics, lambda_context):
        response = await process(
            sqs_event(USER_UPDATE, UNKNOWN, EMAIL), lambda_context, make_container(metrics)
        )

        assert response["statusCode"] == 207
        processing = response["processing"]
        assert processing["successfulMessages"] == 2
        assert processing["failedMessages"] == 1
        failed = processing["failedItems"][0]
        assert failed["messageId"] == "m-2"
        assert failed["status"] == "error"
        assert failed["error"] == "Unknown work item type: teleport"

    @pytest.mark.asyncio
    async def test_empty_batch(self, metrics, lambda_context):
        response = await process({"Records": []}, lambda_context, make_container(metrics))

        assert response["statusCode"] == 200
        assert response["processing"]["totalMessages"] == 0

    @pytest.mark.asyncio
    async def test_invalid_payload_fails_only_that_message(self, metrics, lambda_context):
        invalid_email = {"id": 3, "type": "email_notification", "payload": {"template": "welcome"}}

        response = await process(
            sqs_event(USER_UPDATE, invalid_email, EMAIL), lambda_context, make_container(metrics)
        )

        assert response["statusCode"] == 207
        processing = response["processing"]
        assert [i["workId"] for i in processing["processedItems"]] == [1, 2]
        failed = processing["failedItems"]
        assert [i["workId"] for i in failed] == [3]
        assert failed[0]["error"] == "missing or invalid email in payload"

    @pytest.mark.asyncio
    async def test_batch_item_failures_only_lists_retryable(
        self, metrics, lambda_context, monkeypatch
    ):
        monkeypatch.setattr(
            ReportGenerationProcessor,
            "process",
            AsyncMock(side_effect=RuntimeError("report store unavailable")),
        )
        invalid_email = {"id": 3, "type": "email_notification", "payload": {"template": "welcome"}}
        report = {"id": 4, "type": "report_generation", "payload": {"reportType": "monthly"}}
        container = make_container(metrics, report_batch_item_failures=True)

        response = await process(
            sqs_event(USER_UPDATE, UNKNOWN, invalid_email, report), lambda_context, container
        )

        assert response["statusCode"] == 207
        assert response["processing"]["failedMessages"] == 3
        assert response["batchItemFailures"] == [{"itemIdentifier": "m-4"}]

    @pytest.mark.asyncio
    async def test_setup_failure_propagates(self, lambda_context):
        container = make_container(None)

        def broken_factory(settings, secrets):
            raise RuntimeError("secret unavailable")

        container.metrics_factory = broken_factory

        with pytest.raises(RuntimeError, match="secret unavailable"):
            await process(sqs_event(USER_UPDATE), lambda_context, container)

    @pytest.mark.asyncio
    async def test_database_not_opened_without_work_log(self, metrics, lambda_context):
        database, _ = mock_database()
        container = make_container(metrics, database=database)

        await process(sqs_event(USER_UPDATE), lambda_context, container)

        database.create_tables.assert_not_awaited()
        database.session.assert_not_called()


class TestWorkerHandlerWorkLog:
    @pytest.mark.asyncio
    async def test_records_each_attempt(self, metrics, lambda_context):
        database, session = mock_database()
        container = make_container(metrics, database=database, work_log_enabled=True)

        response = await process(sqs_event(USER_UPDATE, UNKNOWN), lambda_context, container)

        assert response["statusCode"] == 207
        database.create_tables.assert_awaited_once()
        logged = [call.args[0] for call in session.add.call_args_list]
        assert [(m.work_id, m.status) for m in logged] == [(1, "success"), (9, "error")]
        assert logged[1].error_message == "Unknown work item type: teleport"
        assert session.commit.await_count == 2
        database.close.assert_awaited_once()
        assert metrics.closed

    @pytest.mark.asyncio
    async def test_database_setup_failure_propagates(self, metrics, lambda_context):
        database, _ = mock_database()
        database.create_tables.side_effect = ConnectionError("db unreachable")
        container = make_container(metrics, database=database, work_log_enabled=True)

        with pytest.raises(ConnectionError):
            await process(sqs_event(USER_UPDATE), lambda_context, container)

        database.close.assert_awaited_once()
        assert metrics.closed
