"""
Dcard 情感分析 - Flow编排定义

================================================================================
架构说明
================================================================================

LoadRawDocumentsNode（读取本地 JSON 目录）
    ├─ empty   → TerminalNode（空语料，直接结束）
    └─ default → NormalizeDocumentsNode（情感/关键词/元数据）
                   → FilterDocumentsNode（情感类型、日期区间）
                   → AggregateAnalyticsNode（分布、时间线、分类、词云）
                   → BuildCooccurrenceNetworkNode（目标词共现网络）
                   → SaveResultsNode（JSON / GraphML）
                   → TerminalNode

================================================================================
"""

from pocketflow import Flow

from nodes import (
    LoadRawDocumentsNode,
    LoadDocumentsNode,
    NormalizeDocumentsNode,
    FilterDocumentsNode,
    AggregateAnalyticsNode,
    BuildCooccurrenceNetworkNode,
    SaveResultsNode,
    TerminalNode,
)


def create_main_flow(now=None, id_factory=None) -> Flow:
    """
    创建主Flow - 系统唯一入口

    Args:
        now: 当前时间来源，传给标准化节点（测试中固定年份）
        id_factory: 缺少 id 的记录使用的 id 生成器

    Returns:
        Flow: 配置好的主Flow
    """
    load_node = LoadRawDocumentsNode()
    normalize_node = NormalizeDocumentsNode(now=now, id_factory=id_factory)
    filter_node = FilterDocumentsNode()
    analytics_node = AggregateAnalyticsNode()
    network_node = BuildCooccurrenceNetworkNode()
    save_node = SaveResultsNode()
    terminal = TerminalNode()

    # 空语料直接结束
    load_node - "empty" >> terminal

    load_node >> normalize_node
    normalize_node >> filter_node
    filter_node >> analytics_node
    analytics_node >> network_node
    network_node >> save_node
    save_node >> terminal

    return Flow(start=load_node)


def create_analysis_flow() -> Flow:
    """
    规范文档分析Flow（main.py --documents）

    LoadDocumentsNode 读取已标准化的文档文件，跳过原始数据加载与标准化，
    用于对已有文档换目标词/阈值/筛选条件重新计算统计与共现网络。

    Returns:
        Flow: 配置好的分析Flow
    """
    load_node = LoadDocumentsNode()
    filter_node = FilterDocumentsNode()
    analytics_node = AggregateAnalyticsNode()
    network_node = BuildCooccurrenceNetworkNode()
    save_node = SaveResultsNode()
    terminal = TerminalNode()

    load_node - "empty" >> terminal

    load_node >> filter_node
    filter_node >> analytics_node
    analytics_node >> network_node
    network_node >> save_node
    save_node >> terminal

    return Flow(start=load_node)
