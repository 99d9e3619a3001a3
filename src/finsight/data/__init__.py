"""Data provider layer for finsight."""

from finsight.data.base import DataProvider
from finsight.data.json_provider import JsonFileProvider
from finsight.data.memory import InMemoryProvider
from finsight.data.factories import create_json_provider

__all__ = ["DataProvider", "JsonFileProvider", "InMemoryProvider", "create_json_provider"]
