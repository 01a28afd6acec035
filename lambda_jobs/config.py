from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Handler settings loaded from environment."""

    # Service
    service_name: str = "lambda-jobs"
    environment: str = "unknown"

    # AWS
    aws_region: str = "us-east-1"
    aws_endpoint_url: str | None = None  # For LocalStack
    sqs_queue_url: str | None = None

    # InfluxDB (time-series metrics)
    influxdb_secret_arn: str | None = None
    influxdb_url: str | None = None
    influxdb_org: str = ""
    influxdb_bucket: str = ""
    influxdb_timeout_ms: int = 10000
    metrics_host_tag: str = "lambda-cron"

    # Database
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "postgres"
    db_username: str = "postgres"
    db_password: str = ""
    db_ssl: bool = True

    # Worker
    work_log_enabled: bool = False  # Append each attempt to work_item_log
    report_batch_item_failures: bool = False  # SQS partial batch response

    # Simulation
    simulated_delay_scale: float = 1.0  # 0 disables simulated work delays

    # Local runner
    dispatch_interval_seconds: int = 300

    @property
    def database_url(self) -> str:
        return f"postgresql+asyncpg://{self.db_username}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
