"""
情感统计工具集

基于规范文档的情感聚合，包括：
- aggregate_sentiment: 情感分布、平均分、日期范围与每日数量
- sentiment_timeline: 按天的三类情感数量（时间线）
- category_breakdown: 按分类的情感汇总（热力图）
- keyword_frequency: 关键词频次（词云）
- filter_documents: 按情感类型与日期范围筛选
- sentiment_overview: 以上结果的汇总结构
"""
from __future__ import annotations

import math
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from utils.query import SENTIMENT_LABELS, parse_date, parse_sentiment_type, sentiment_label
from utils.rounding import round_fixed


def document_date(timestamp: Any) -> Optional[str]:
    """ISO 时间戳 → UTC 日历日期（YYYY-MM-DD），无法解析返回 None；无时区按 UTC。"""
    if not isinstance(timestamp, str) or not timestamp.strip():
        return None
    parsed = pd.to_datetime(timestamp.strip(), utc=True, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date().isoformat()


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _sentiment_label(doc: Dict[str, Any]) -> str:
    """缺失或未知的情感按 neutral 计。"""
    return sentiment_label(doc.get("sentiment")) or "neutral"


def aggregate_sentiment(docs: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """
    单次遍历计算语料级情感统计。

    情感不在三类之内的文档不计入分布，但计入 totalAnalyzed；
    score 非数值的文档不参与平均分；日期按 UTC 截断。

    Returns:
        {distribution, averageScore, totalAnalyzed, dateRange, dailyCounts}
    """
    distribution = {label: 0 for label in SENTIMENT_LABELS}
    daily_counts: Dict[str, int] = {}
    score_sum = 0.0
    score_count = 0
    total = 0

    for doc in docs:
        total += 1
        label = sentiment_label(doc.get("sentiment"))
        if label is not None:
            distribution[label] += 1

        score = doc.get("score")
        if _is_number(score):
            score_sum += score
            score_count += 1

        day = document_date(doc.get("timestamp"))
        if day is not None:
            daily_counts[day] = daily_counts.get(day, 0) + 1

    # sum of finite scores can still overflow
    average = round_fixed(score_sum / score_count, 2) if score_count and math.isfinite(score_sum) else 0
    date_range = None
    if daily_counts:
        date_range = {"start": min(daily_counts), "end": max(daily_counts)}

    return {
        "distribution": distribution,
        "averageScore": average,
        "totalAnalyzed": total,
        "dateRange": date_range,
        "dailyCounts": daily_counts,
    }


def sentiment_timeline(docs: Iterable[Dict[str, Any]], max_days: int = 30) -> List[Dict[str, Any]]:
    """按天统计三类情感数量，日期升序，仅保留最近 max_days 天。"""
    rows = []
    for doc in docs:
        day = document_date(doc.get("timestamp"))
        if day is not None:
            rows.append({"date": day, "sentiment": _sentiment_label(doc)})
    if not rows:
        return []

    df = pd.DataFrame(rows)
    counts = (
        pd.crosstab(df["date"], df["sentiment"])
        .reindex(columns=list(SENTIMENT_LABELS), fill_value=0)
        .sort_index()
    )
    if max_days and max_days > 0:
        counts = counts.tail(max_days)

    timeline = []
    for day, row in counts.iterrows():
        entry = {"date": str(day)}
        entry.update({label: int(row[label]) for label in SENTIMENT_LABELS})
        timeline.append(entry)
    return timeline


def category_breakdown(docs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    按分类汇总情感，顺序为分类首次出现的顺序。

    score = (positive - negative) / total * 100，保留两位小数。
    """
    rows = [
        {"category": str(doc.get("category") or "uncategorized"), "sentiment": _sentiment_label(doc)}
        for doc in docs
    ]
    if not rows:
        return []

    df = pd.DataFrame(rows)
    order = list(dict.fromkeys(df["category"]))
    counts = (
        pd.crosstab(df["category"], df["sentiment"])
        .reindex(index=order, columns=list(SENTIMENT_LABELS), fill_value=0)
    )

    breakdown = []
    for category, row in counts.iterrows():
        positive, negative, neutral = (int(row[label]) for label in SENTIMENT_LABELS)
        total = positive + negative + neutral
        breakdown.append({
            "category": category,
            "positive": positive,
            "negative": negative,
            "neutral": neutral,
            "total": total,
            "score": round_fixed((positive - negative) / total * 100, 2) if total else 0,
        })
    return breakdown


def keyword_frequency(docs: Iterable[Dict[str, Any]], top_n: int = 50) -> List[Dict[str, Any]]:
    """词云数据：关键词出现次数 Top-N，同频按首次出现顺序。"""
    counter: Counter = Counter()
    for doc in docs:
        keywords = doc.get("keywords")
        if isinstance(keywords, list):
            counter.update(k for k in keywords if isinstance(k, str) and k)
    return [{"text": word, "value": count} for word, count in counter.most_common(top_n)]


def filter_documents(
    docs: Iterable[Dict[str, Any]],
    sentiment: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    按情感类型与闭区间日期筛选文档。

    指定了日期边界时，时间戳无法解析的文档会被排除。
    参数非法时抛出 InvalidQueryError。
    """
    sentiment = parse_sentiment_type(sentiment)
    start_date = parse_date(start_date)
    end_date = parse_date(end_date)

    selected = []
    for doc in docs:
        if sentiment is not None and sentiment_label(doc.get("sentiment")) != sentiment:
            continue
        if start_date is not None or end_date is not None:
            day = document_date(doc.get("timestamp"))
            if day is None:
                continue
            if start_date is not None and day < start_date:
                continue
            if end_date is not None and day > end_date:
                continue
        selected.append(doc)
    return selected


def sentiment_overview(
    docs: List[Dict[str, Any]],
    timeline_days: int = 30,
    word_cloud_top_n: int = 50,
) -> Dict[str, Any]:
    """
    情感统计汇总

    Returns:
        包含data、summary的标准字典结构
    """
    if not docs:
        return {
            "data": {
                "summary": aggregate_sentiment([]),
                "timeline": [],
                "categories": [],
                "word_cloud": [],
            },
            "summary": "没有可分析的文档数据",
        }

    summary = aggregate_sentiment(docs)
    dist = summary["distribution"]
    text = (
        f"共分析{summary['totalAnalyzed']}篇文档，正面{dist['positive']}、负面{dist['negative']}、"
        f"中性{dist['neutral']}，平均情感分{summary['averageScore']}"
    )
    return {
        "data": {
            "summary": summary,
            "timeline": sentiment_timeline(docs, max_days=timeline_days),
            "categories": category_breakdown(docs),
            "word_cloud": keyword_frequency(docs, top_n=word_cloud_top_n),
        },
        "summary": text,
    }
