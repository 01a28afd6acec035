from unittest.mock import AsyncMock, MagicMock

import pytest

from lambda_jobs.domain.ports import QueueMessage
from lambda_jobs.infrastructure.adapters import SqsQueuePublisher


class TestSqsQueuePublisher:
    @pytest.fixture
    def sqs_client(self):
        client = MagicMock()
        client.send_message = AsyncMock(return_value={"MessageId": "abc-123"})
        return client

    @pytest.fixture
    def publisher(self, sqs_client):
        publisher = SqsQueuePublisher(region="eu-west-1", endpoint_url="http://localhost:4566")
        session = MagicMock()
        session.create_client.return_value.__aenter__ = AsyncMock(return_value=sqs_client)
        session.create_client.return_value.__aexit__ = AsyncMock(return_value=None)
        publisher._session = session
        return publisher

    @pytest.mark.asyncio
    async def test_send_message(self, publisher, sqs_client):
        message = QueueMessage(body='{"id": 1}', attributes={"workType": "backup_task", "workId": 1})

        message_id = await publisher.publish("queue-url", message)

        assert message_id == "abc-123"
        sqs_client.send_message.assert_awaited_once_with(
            QueueUrl="queue-url",
            MessageBody='{"id": 1}',
            MessageAttributes={
                "workType": {"DataType": "String", "StringValue": "backup_task"},
                "workId": {"DataType": "Number", "StringValue": "1"},
            },
        )

    @pytest.mark.asyncio
    async def test_client_uses_region_and_endpoint(self, publisher):
        await publisher.publish("queue-url", QueueMessage(body="{}"))

        publisher._session.create_client.assert_called_once_with(
            "sqs", region_name="eu-west-1", endpoint_url="http://localhost:4566"
        )

    @pytest.mark.asyncio
    async def test_send_failure_propagates(self, publisher, sqs_client):
        sqs_client.send_message.side_effect = ConnectionError("throttled")

        with pytest.raises(ConnectionError):
            await publisher.publish("queue-url", QueueMessage(body="{}"))
