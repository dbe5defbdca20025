"""
Local JSON directory data source.

Mirrors the bucket layout of the upstream export: every ``*.json`` file under
``<root>/<prefix>/`` holds either one raw record or an array of records.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from utils.data_sources.base import BaseDataSource
from utils import data_loader

logger = logging.getLogger(__name__)


class JsonDirectoryDataSource(BaseDataSource):
    """Load raw records from JSON files in a directory."""

    def __init__(
        self,
        root: str,
        prefix: str = "rawdata",
        loader: Optional[Callable[[str], List[Dict[str, Any]]]] = None,
    ):
        self.root = Path(root)
        self.prefix = prefix or ""
        self._load_file = loader or data_loader.load_raw_documents

    @property
    def directory(self) -> Path:
        return self.root / self.prefix if self.prefix else self.root

    def list_files(self) -> List[str]:
        if not self.directory.is_dir():
            logger.warning(f"数据目录不存在: {self.directory}")
            return []
        return sorted(
            str(p.relative_to(self.root)).replace("\\", "/")
            for p in self.directory.rglob("*.json")
            if p.is_file()
        )

    def load_file(self, name: str) -> List[Dict[str, Any]]:
        return self._load_file(str(self.root / name))

    def load_documents(self) -> List[Dict[str, Any]]:
        """Read every file; files that fail to parse are logged and skipped."""
        files = self.list_files()
        logger.info(f"发现 {len(files)} 个 JSON 文件")

        records: List[Dict[str, Any]] = []
        for name in files:
            try:
                records.extend(self.load_file(name))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                logger.error(f"解析 {name} 失败，已跳过: {e}")

        logger.info(f"共读取 {len(records)} 条原始记录")
        return records
