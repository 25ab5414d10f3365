"""Data source and handle pool."""

from redisconn.datasource.pool import HandlePool
from redisconn.datasource.source import CommandFamily, DataSource, DataSourceState

__all__ = ["CommandFamily", "DataSource", "DataSourceState", "HandlePool"]
