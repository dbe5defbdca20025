"""
文档分析工具集

1. sentiment_tools: 情感分布、时间线、分类汇总、词频与筛选
2. cooccurrence_tools: 目标词关键词共现网络
"""

from .sentiment_tools import (
    aggregate_sentiment,
    sentiment_timeline,
    category_breakdown,
    keyword_frequency,
    filter_documents,
    sentiment_overview,
)

from .cooccurrence_tools import (
    build_cooccurrence_network,
    dominant_sentiment,
    tally_sentiment_score,
    network_to_graph,
)

__all__ = [
    "aggregate_sentiment",
    "sentiment_timeline",
    "category_breakdown",
    "keyword_frequency",
    "filter_documents",
    "sentiment_overview",
    "build_cooccurrence_network",
    "dominant_sentiment",
    "tally_sentiment_score",
    "network_to_graph",
]
