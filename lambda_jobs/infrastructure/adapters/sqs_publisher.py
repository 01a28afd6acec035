from aiobotocore.session import get_session

from ...domain.ports import QueueMessage, QueuePublisher


class SqsQueuePublisher(QueuePublisher):
    """SQS implementation of QueuePublisher."""

    def __init__(self, region: str = "us-east-1", endpoint_url: str | None = None) -> None:
        self._region = region
        self._endpoint_url = endpoint_url
        self._session = get_session()

    async def publish(self, queue_url: str, message: QueueMessage) -> str:
        """Send one message and return the SQS message ID."""
        client_kwargs = {"region_name": self._region}
        if self._endpoint_url:
            client_kwargs["endpoint_url"] = self._endpoint_url

        async with self._session.create_client("sqs", **client_kwargs) as client:
            response = await client.send_message(
                QueueUrl=queue_url,
                MessageBody=message.body,
                MessageAttributes=_to_message_attributes(message.attributes),
            )
        return response["MessageId"]


def _to_message_attributes(attributes: dict[str, str | int]) -> dict[str, dict[str, str]]:
    converted = {}
    for name, value in attributes.items():
        data_type = "Number" if isinstance(value, int) and not isinstance(value, bool) else "String"
        converted[name] = {"DataType": data_type, "StringValue": str(value)}
    return converted
