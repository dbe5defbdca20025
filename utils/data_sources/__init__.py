"""
Data source adapters.
"""
from utils.data_sources.base import BaseDataSource
from utils.data_sources.json_source import JsonDirectoryDataSource

__all__ = ["BaseDataSource", "JsonDirectoryDataSource"]
