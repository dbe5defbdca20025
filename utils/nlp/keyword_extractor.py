"""
Keyword extraction from curated pattern buckets plus frequent CJK spans.

No segmentation model is involved: bucket regexes pick known vocabulary and
2-4 character ideograph spans supply the frequency-ranked remainder.
"""
from __future__ import annotations

from collections import Counter
from typing import Any, FrozenSet, List, Pattern, Sequence, Tuple
import re


KEYWORD_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("emotion", re.compile(r"暈船|曖昧|喜歡|愛情|感情|交友|約會|分手|想念")),
    ("social", re.compile(r"朋友|家人|同學|室友|鄰居|陌生人")),
    ("place", re.compile(r"台北|台中|台南|高雄|學校|公司|家裡|餐廳")),
    ("activity", re.compile(r"吃飯|看電影|聊天|玩遊戲|運動|旅遊|工作|讀書")),
    ("time", re.compile(r"今天|昨天|明天|週末|假日|早上|晚上|最近")),
)

STOP_WORDS: FrozenSet[str] = frozenset({
    "的", "是", "在", "了", "和", "有", "我", "你", "他", "她",
    "這", "那", "就", "都", "而", "及", "與", "或", "等", "著",
    "很", "不", "也", "要", "會", "可", "能", "到", "為", "但",
    "一", "個", "們", "對", "說", "用", "把", "從", "以", "所",
})

_PHRASE_RE = re.compile(r"[\u4e00-\u9fa5]{2,4}")
_CJK_RUN_RE = re.compile(r"[\u4e00-\u9fa5]+")


def match_patterns(
    text: str,
    patterns: Sequence[Tuple[str, Pattern[str]]] = KEYWORD_PATTERNS,
) -> List[str]:
    """Every bucket match in bucket order, duplicates collapsed."""
    found: dict = {}
    for _bucket, pattern in patterns:
        for match in pattern.findall(text):
            found.setdefault(match, None)
    return list(found)


def top_phrases(text: str, limit: int) -> List[str]:
    """Most frequent 2-4 char CJK spans; ties keep first-seen order."""
    counter = Counter(_PHRASE_RE.findall(text))
    # Counter preserves insertion order and sorted() is stable
    ranked = sorted(counter.items(), key=lambda item: item[1], reverse=True)
    return [phrase for phrase, _ in ranked[:limit]]


def extract_keywords(
    text: Any,
    limit: int = 20,
    patterns: Sequence[Tuple[str, Pattern[str]]] = KEYWORD_PATTERNS,
) -> List[str]:
    """Extract up to ``limit`` unique keywords, bucket matches first."""
    if not text or not isinstance(text, str):
        return []
    limit = max(0, int(limit))

    keywords: dict = {}
    for word in match_patterns(text, patterns):
        keywords.setdefault(word, None)
    for phrase in top_phrases(text, limit):
        keywords.setdefault(phrase, None)
    return list(keywords)[:limit]


def extract_candidate_terms(text: Any, stop_words: FrozenSet[str] = STOP_WORDS) -> List[str]:
    """
    Co-occurrence fallback for documents without a stored keyword list.

    Whole CJK runs of length >= 2, minus stop words, unique in first-seen order.
    """
    if not text or not isinstance(text, str):
        return []
    seen: dict = {}
    for word in _CJK_RUN_RE.findall(text):
        if len(word) >= 2 and word not in stop_words:
            seen.setdefault(word, None)
    return list(seen)
