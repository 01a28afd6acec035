from unittest.mock import MagicMock, patch

import pytest

from lambda_jobs.config import Settings
from lambda_jobs.domain.exceptions import ConfigurationError
from lambda_jobs.infrastructure.adapters import InfluxMetricsSink, NullMetricsSink, open_metrics_sink


class TestInfluxMetricsSink:
    @pytest.fixture
    def client(self):
        return MagicMock()

    @pytest.fixture
    def sink(self, client):
        return InfluxMetricsSink(client, org="acme", bucket="jobs")

    def test_points_are_buffered_until_flush(self, sink, client):
        sink.write_point("sqs_messages", tags={"status": "sent"}, fields={"work_id": 1})
        sink.write_point("sqs_messages", tags={"status": "sent"}, fields={"work_id": 2})

        write = client.write_api.return_value.write
        write.assert_not_called()

        sink.flush()

        write.assert_called_once()
        kwargs = write.call_args.kwargs
        assert kwargs["bucket"] == "jobs"
        assert kwargs["org"] == "acme"
        assert len(kwargs["record"]) == 2
        assert kwargs["record"][0].to_line_protocol().startswith("sqs_messages,status=sent work_id=1i")

    def test_flush_without_points_is_noop(self, sink, client):
        sink.flush()

        client.write_api.return_value.write.assert_not_called()

    def test_write_failure_is_swallowed(self, sink, client):
        client.write_api.return_value.write.side_effect = ConnectionError("influx down")
        sink.write_point("cron_job_execution", fields={"request_id": "r"})

        sink.flush()

    def test_close_flushes_and_releases(self, sink, client):
        sink.write_point("cron_job_execution", fields={"messages_sent": 5})

        sink.close()

        client.write_api.return_value.write.assert_called_once()
        client.write_api.return_value.close.assert_called_once()
        client.close.assert_called_once()

    def test_close_failure_is_swallowed(self, sink, client):
        client.close.side_effect = RuntimeError("already closed")

        sink.close()

    def test_points_after_close_are_dropped(self, sink, client):
        sink.close()
        sink.write_point("late", fields={"x": 1})
        sink.flush()

        client.write_api.return_value.write.assert_not_called()


class TestOpenMetricsSink:
    def test_null_sink_when_unconfigured(self):
        secrets = MagicMock()

        sink = open_metrics_sink(Settings(influxdb_url=None), secrets)

        assert isinstance(sink, NullMetricsSink)
        secrets.get_secret_value.assert_not_called()

    def test_requires_secret_arn(self):
        with pytest.raises(ConfigurationError, match="INFLUXDB_SECRET_ARN"):
            open_metrics_sink(
                Settings(influxdb_url="https://influx.local", influxdb_secret_arn=None),
                MagicMock(),
            )

    def test_fetches_token_and_connects(self):
        secrets = MagicMock()
        secrets.get_secret_value.return_value = "tok-123"
        settings = Settings(
            influxdb_url="https://influx.local",
            influxdb_secret_arn="arn:aws:secretsmanager:us-east-1:123:secret:influx",
            influxdb_org="acme",
            influxdb_bucket="jobs",
            environment="dev",
        )

        with patch("lambda_jobs.infrastructure.adapters.influx_metrics.InfluxDBClient") as client_cls:
            sink = open_metrics_sink(settings, secrets)

        secrets.get_secret_value.assert_called_once_with(settings.influxdb_secret_arn, "token")
        kwargs = client_cls.call_args.kwargs
        assert kwargs["token"] == "tok-123"
        assert kwargs["default_tags"] == {"host": "lambda-cron", "environment": "dev"}
        assert isinstance(sink, InfluxMetricsSink)

    def test_secret_failure_propagates(self):
        secrets = MagicMock()
        secrets.get_secret_value.side_effect = KeyError("token")
        settings = Settings(influxdb_url="https://influx.local", influxdb_secret_arn="arn")

        with pytest.raises(KeyError):
            open_metrics_sink(settings, secrets)
