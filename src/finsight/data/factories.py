"""Data provider factory functions."""

import os
from pathlib import Path
from typing import Optional

from finsight.data.json_provider import JsonFileProvider

DATA_PATH_ENV = "FINSIGHT_DATA_PATH"


def create_json_provider(data_path: Optional[str] = None) -> JsonFileProvider:
    """Create a JSON snapshot provider.

    Args:
        data_path: Path to the JSON snapshot. If None, checks FINSIGHT_DATA_PATH
            environment variable, then defaults to ~/.finsight/data.json

    Returns:
        JsonFileProvider instance
    """
    if data_path is None:
        data_path = os.environ.get(DATA_PATH_ENV)

    if data_path is None:
        data_path = str(Path.home() / ".finsight" / "data.json")

    return JsonFileProvider(data_path)
