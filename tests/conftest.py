"""
conftest.py - pytest 共享 Fixtures

为所有测试提供统一的测试数据、固定时钟与 shared 字典。
"""
import copy
import itertools
import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from config import AppConfig, DataConfig, config_to_shared

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

FIXED_NOW = datetime(2025, 10, 20, 9, 0, tzinfo=timezone.utc)


# =============================================================================
# 数据 Fixtures
# =============================================================================

@pytest.fixture
def sample_raw_documents():
    """3条 Dcard 原始记录 + 1条缺少正文的损坏记录"""
    with open(FIXTURES_DIR / "sample_raw_documents.json", "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def sample_documents():
    """4条已打分的规范文档（2025-10-10 ~ 2025-10-12）"""
    with open(FIXTURES_DIR / "sample_documents.json", "r", encoding="utf-8") as f:
        return json.load(f)


# =============================================================================
# 时钟与 id Fixtures
# =============================================================================

@pytest.fixture
def fixed_now():
    """固定为 2025-10-20 09:00 UTC 的时钟"""
    return lambda: FIXED_NOW


@pytest.fixture
def sequential_ids():
    """doc-1, doc-2, ... 依次递增的 id 生成器"""
    counter = itertools.count(1)
    return lambda: f"doc-{next(counter)}"


# =============================================================================
# shared 字典 Fixtures
# =============================================================================

@pytest.fixture
def data_dir(tmp_path, sample_raw_documents):
    """临时数据目录：rawdata/ 下两个文件（对象数组 + 单对象）"""
    raw_dir = tmp_path / "data" / "rawdata"
    raw_dir.mkdir(parents=True)
    (raw_dir / "batch1.json").write_text(
        json.dumps(sample_raw_documents[:2], ensure_ascii=False), encoding="utf-8"
    )
    (raw_dir / "nested").mkdir()
    (raw_dir / "nested" / "single.json").write_text(
        json.dumps(sample_raw_documents[2], ensure_ascii=False), encoding="utf-8"
    )
    (raw_dir / "broken.json").write_text(
        json.dumps(sample_raw_documents[3], ensure_ascii=False), encoding="utf-8"
    )
    return tmp_path / "data"


@pytest.fixture
def pipeline_shared(tmp_path, data_dir):
    """
    完整的 shared 字典，数据目录与输出目录都指向 tmp_path。
    模拟 main.py 中 config_to_shared() 产生的结构。
    """
    config = AppConfig(
        data=DataConfig(
            input_dir=str(data_dir),
            prefix="rawdata",
            output_dir=str(tmp_path / "output"),
        )
    )
    config.network.threshold = 2
    return config_to_shared(config)


@pytest.fixture
def analysis_shared(pipeline_shared, sample_documents):
    """已完成标准化与筛选的 shared，可直接驱动统计/网络节点"""
    shared = copy.deepcopy(pipeline_shared)
    shared["data"]["documents"] = sample_documents
    shared["data"]["filtered_documents"] = list(sample_documents)
    return shared
