"""
Rule-based sentiment scoring with a small Traditional Chinese lexicon.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from utils.rounding import round_fixed


@dataclass(frozen=True)
class SentimentLexicon:
    """Immutable keyword lists plus the label thresholds applied to the score."""

    positive: Tuple[str, ...]
    negative: Tuple[str, ...]
    positive_threshold: float = 0.2
    negative_threshold: float = -0.2

    def count_hits(self, text: str) -> Tuple[int, int]:
        pos = sum(text.count(word) for word in self.positive)
        neg = sum(text.count(word) for word in self.negative)
        return pos, neg

    def label(self, score: float) -> str:
        if score > self.positive_threshold:
            return "positive"
        if score < self.negative_threshold:
            return "negative"
        return "neutral"


DEFAULT_LEXICON = SentimentLexicon(
    positive=(
        "開心", "快樂", "喜歡", "愛", "好", "棒", "讚", "感謝", "謝謝",
        "美好", "幸福", "完美", "優秀", "厲害", "加油", "支持", "溫暖",
        "可愛", "帥", "漂亮", "成功", "順利", "有趣", "笑", "哈哈",
    ),
    negative=(
        "難過", "傷心", "痛苦", "討厭", "糟", "爛", "差", "壞", "失望",
        "生氣", "憤怒", "煩", "累", "辛苦", "困難", "問題", "錯誤", "失敗",
        "害怕", "擔心", "焦慮", "後悔", "哭", "可惜", "無聊", "寂寞",
    ),
)


def score_sentiment(text: Any, lexicon: SentimentLexicon = DEFAULT_LEXICON) -> Dict[str, Any]:
    """
    Score text against the lexicon.

    Returns ``sentiment``, ``score`` in [-1, 1] (3 decimals), ``confidence`` in
    [0, 1] (hits per 100 characters, halved and capped) and the raw hit counts.
    Non-string or empty input yields a bare neutral result without counts.
    """
    if not text or not isinstance(text, str):
        return {"sentiment": "neutral", "score": 0, "confidence": 0}

    pos, neg = lexicon.count_hits(text)
    total = pos + neg

    score = 0.0
    sentiment = "neutral"
    if total > 0:
        score = (pos - neg) / total
        sentiment = lexicon.label(score)

    density = total / (len(text) / 100)
    confidence = min(density / 2, 1)

    return {
        "sentiment": sentiment,
        "score": round_fixed(score, 3),
        "confidence": round_fixed(confidence, 3),
        "positive_count": pos,
        "negative_count": neg,
    }
