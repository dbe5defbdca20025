"""
关键词共现网络工具集

围绕目标词构建星型共现图：中心节点为目标词，关联节点为与目标词出现在同一文档
关键词列表中的其他词，边权重为共现文档数，节点带主导情感与情感分。
"""
from __future__ import annotations

from typing import Any, Dict, List, Sequence

import networkx as nx

from utils.nlp.keyword_extractor import extract_candidate_terms
from utils.query import sentiment_label
from utils.rounding import round_fixed


CENTER_NODE_SIZE = 100
MAX_RELATED_TERMS = 50


def _new_tally() -> Dict[str, int]:
    return {"positive": 0, "negative": 0, "neutral": 0, "total": 0}


def document_keywords(doc: Dict[str, Any]) -> List[str]:
    """已存关键词；文档没有关键词列表时从正文回退抽取。"""
    keywords = doc.get("keywords")
    if isinstance(keywords, list):
        return keywords
    return extract_candidate_terms(doc.get("text") or "")


def dominant_sentiment(tally: Dict[str, int]) -> str:
    """计数最高的情感；并列时 positive 优先于 negative，negative 优先于 neutral。"""
    positive = tally.get("positive", 0)
    negative = tally.get("negative", 0)
    neutral = tally.get("neutral", 0)
    if positive >= negative and positive >= neutral:
        return "positive"
    if negative >= neutral:
        return "negative"
    return "neutral"


def tally_sentiment_score(tally: Dict[str, int]) -> float:
    """(positive - negative) / total，保留两位小数；total 为 0 时为 0。"""
    total = tally.get("total", 0)
    if not total:
        return 0
    return round_fixed((tally.get("positive", 0) - tally.get("negative", 0)) / total, 2)


def related_node_size(frequency: int) -> int:
    return min(20 + frequency * 2, 80)


def build_cooccurrence_network(
    docs: Sequence[Dict[str, Any]],
    target_term: str,
    min_frequency: int,
    max_related: int = MAX_RELATED_TERMS,
) -> Dict[str, Any]:
    """
    构建目标词的共现网络。

    min_frequency 需由调用方先行校验为正整数（见 utils.query.parse_threshold）。
    纯函数，相同输入得到相同输出。

    Args:
        docs: 规范文档列表
        target_term: 中心词
        min_frequency: 关联词最小共现次数
        max_related: 参与阈值过滤的高频词上限

    Returns:
        {nodes, edges, metadata}
    """
    cooccurrence: Dict[str, int] = {}
    tallies: Dict[str, Dict[str, int]] = {}
    target_frequency = 0

    for doc in docs:
        keywords = document_keywords(doc)
        if target_term not in keywords:
            continue
        target_frequency += 1

        sentiment = sentiment_label(doc.get("sentiment")) or "neutral"

        for keyword in keywords:
            if keyword == target_term or not isinstance(keyword, str) or len(keyword) <= 1:
                continue
            cooccurrence[keyword] = cooccurrence.get(keyword, 0) + 1
            tally = tallies.setdefault(keyword, _new_tally())
            tally[sentiment] += 1
            tally["total"] += 1

    nodes: List[Dict[str, Any]] = [{
        "id": target_term,
        "label": target_term,
        "size": CENTER_NODE_SIZE,
        "sentiment": "neutral",
        "group": "center",
        "frequency": target_frequency,
    }]
    edges: List[Dict[str, Any]] = []

    # sorted() is stable: equal counts keep first-seen order
    ranked = sorted(cooccurrence.items(), key=lambda item: item[1], reverse=True)[:max_related]
    for term, frequency in ranked:
        if frequency < min_frequency:
            continue
        tally = tallies[term]
        sentiment = dominant_sentiment(tally)
        nodes.append({
            "id": term,
            "label": term,
            "size": related_node_size(frequency),
            "sentiment": sentiment,
            "group": "related",
            "frequency": frequency,
            "sentimentScore": tally_sentiment_score(tally),
        })
        edges.append({
            "source": target_term,
            "target": term,
            "weight": frequency,
            "sentiment": sentiment,
        })

    return {
        "nodes": nodes,
        "edges": edges,
        "metadata": {
            "totalEntries": len(docs),
            "targetFrequency": target_frequency,
            "relatedWordsCount": len(edges),
        },
    }


def network_to_graph(network: Dict[str, Any]) -> nx.Graph:
    """共现网络 → networkx 星型图（用于 GraphML 导出）。"""
    graph = nx.Graph()
    for node in network.get("nodes", []):
        attrs = {k: v for k, v in node.items() if k != "id" and v is not None}
        if "sentimentScore" in attrs:
            attrs["sentimentScore"] = float(attrs["sentimentScore"])
        graph.add_node(node["id"], **attrs)
    for edge in network.get("edges", []):
        graph.add_edge(edge["source"], edge["target"], weight=edge["weight"], sentiment=edge["sentiment"])
    graph.graph["totalEntries"] = network.get("metadata", {}).get("totalEntries", 0)
    graph.graph["targetFrequency"] = network.get("metadata", {}).get("targetFrequency", 0)
    return graph
