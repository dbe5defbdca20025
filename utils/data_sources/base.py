"""
Base data source interfaces.
"""
from __future__ import annotations

from typing import Any, Dict, List


class BaseDataSource:
    """Abstract interface for raw document sources."""

    def list_files(self) -> List[str]:
        raise NotImplementedError

    def load_file(self, name: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def load_documents(self) -> List[Dict[str, Any]]:
        raise NotImplementedError
