from .database import Database
from .repositories import PostgresHealthCheckRepository, PostgresWorkLogRepository

__all__ = [
    "Database",
    "PostgresHealthCheckRepository",
    "PostgresWorkLogRepository",
]
