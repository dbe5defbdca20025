"""
nodes/ 包 - 流水线节点导出层

保证 ``from nodes import XXX`` 与 ``@patch("nodes.<module>.XXX")`` 路径可用。
"""

# ── 基类 ──────────────────────────────────────────────────────
from nodes.base import MonitoredNode

# ── 数据加载 & 标准化 ────────────────────────────────────────
from nodes.load import LoadRawDocumentsNode, LoadDocumentsNode
from nodes.normalize import NormalizeDocumentsNode, FilterDocumentsNode

# ── 统计 & 共现网络 ──────────────────────────────────────────
from nodes.analysis import AggregateAnalyticsNode, BuildCooccurrenceNetworkNode

# ── 保存 & 终止 ──────────────────────────────────────────────
from nodes.save import SaveResultsNode
from nodes.terminal import TerminalNode

__all__ = [
    "MonitoredNode",
    "LoadRawDocumentsNode",
    "LoadDocumentsNode",
    "NormalizeDocumentsNode",
    "FilterDocumentsNode",
    "AggregateAnalyticsNode",
    "BuildCooccurrenceNetworkNode",
    "SaveResultsNode",
    "TerminalNode",
]
