"""
原始文档标准化

把 Dcard 导出的原始记录（``{id?, document: {text, entities}}``）转换为规范文档：
抽取时间/分类/标题，计算词典情感与关键词，截断正文并保留原始记录。
已经打过分的扁平记录走白名单合并（coerce_scored_record），未知字段收进 ``extra``。
"""
from __future__ import annotations

import logging
import math
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from utils.nlp.keyword_extractor import extract_keywords
from utils.nlp.sentiment_lexicon import DEFAULT_LEXICON, SentimentLexicon, score_sentiment
from utils.query import sentiment_label

logger = logging.getLogger(__name__)

TEXT_LIMIT = 500
TITLE_PREVIEW = 50
DEFAULT_CATEGORY = "general"

# 例如 "9月12日 18:08"，来源不带年份
_TIMESTAMP_RE = re.compile(r"(\d+)月(\d+)日\s*(\d+):(\d+)")

# 扁平记录中由规范字段消费的键，其余进入 extra
_SCORED_RECORD_KEYS = frozenset({
    "id", "_id", "text", "content", "message", "title", "sentiment", "score",
    "confidence", "timestamp", "created_at", "category", "keywords", "entities",
})

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_document_id() -> str:
    """Short random id for records that arrive without one."""
    return uuid.uuid4().hex[:9]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso_timestamp(value: datetime) -> str:
    """``2025-10-10T10:00:00.000Z`` style UTC timestamp."""
    return _as_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _find_entity(entities: Any, entity_type: str) -> Optional[Mapping[str, Any]]:
    if not isinstance(entities, list):
        return None
    for entity in entities:
        if isinstance(entity, Mapping) and entity.get("type") == entity_type:
            return entity
    return None


def _mention_text(entities: Any, entity_type: str) -> Optional[str]:
    entity = _find_entity(entities, entity_type)
    if entity is None:
        return None
    mention = entity.get("mentionText")
    if isinstance(mention, str) and mention:
        return mention
    return None


def extract_timestamp(entities: Any, now: Optional[Clock] = None) -> str:
    """
    解析 timestamp 实体（"<月>月<日>日 <时>:<分>"），年份取当前处理时间的年份。

    解析失败或日期不存在时回退为当前时间。跨年附近会得到错误年份，保持与原数据口径一致。
    """
    current = _as_utc((now or utc_now)())
    mention = _mention_text(entities, "timestamp")
    if mention:
        match = _TIMESTAMP_RE.search(mention)
        if match:
            month, day, hour, minute = (int(g) for g in match.groups())
            try:
                parsed = datetime(current.year, month, day, hour, minute, tzinfo=timezone.utc)
            except ValueError:
                logger.debug(f"无效的时间实体，回退为当前时间: {mention}")
            else:
                return to_iso_timestamp(parsed)
    return to_iso_timestamp(current)


def extract_category(entities: Any) -> str:
    """topic 实体文本，缺省为 general。"""
    return _mention_text(entities, "topic") or DEFAULT_CATEGORY


def extract_title(entities: Any, text: str) -> str:
    """title 实体文本，缺省为正文前 50 字加省略号。"""
    title = _mention_text(entities, "title")
    if title is not None:
        return title
    return text[:TITLE_PREVIEW] + "..."


def normalize_document(
    raw: Any,
    *,
    now: Optional[Clock] = None,
    lexicon: SentimentLexicon = DEFAULT_LEXICON,
    keyword_limit: int = 20,
    text_limit: int = TEXT_LIMIT,
    id_factory: Optional[IdFactory] = None,
) -> Optional[Dict[str, Any]]:
    """
    将一条原始 Dcard 记录标准化为规范文档。

    Args:
        raw: 原始记录，需包含 ``document.text``
        now: 当前时间来源（测试中可固定）
        lexicon: 情感词典
        keyword_limit: 关键词上限
        text_limit: 保存正文的最大长度
        id_factory: 原始记录无 id 时使用的 id 生成器

    Returns:
        规范文档字典；记录缺少正文容器时返回 None
    """
    if not isinstance(raw, Mapping):
        return None
    document = raw.get("document")
    if not isinstance(document, Mapping):
        return None
    text = document.get("text")
    if not isinstance(text, str):
        return None

    entities = document.get("entities")
    if not isinstance(entities, list):
        entities = []

    sentiment = score_sentiment(text, lexicon)
    raw_id = raw.get("id")
    doc_id = str(raw_id) if raw_id not in (None, "") else (id_factory or new_document_id)()

    return {
        "id": doc_id,
        "text": text[:text_limit],
        "title": extract_title(entities, text),
        "sentiment": sentiment["sentiment"],
        "score": sentiment["score"],
        "confidence": sentiment["confidence"],
        "timestamp": extract_timestamp(entities, now),
        "category": extract_category(entities),
        "keywords": extract_keywords(text, limit=keyword_limit),
        "entities": entities,
        "raw": raw,
    }


def _first_text(raw: Mapping[str, Any]) -> Optional[str]:
    for key in ("text", "content", "message"):
        value = raw.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def _bounded_number(value: Any, low: float, high: float) -> float:
    """非数值、NaN 与无穷按缺失处理（0），其余截断到 [low, high]。"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if not math.isfinite(value):
        return 0
    return min(max(value, low), high)


def coerce_scored_record(
    raw: Any,
    *,
    now: Optional[Clock] = None,
    keyword_limit: int = 20,
    text_limit: int = TEXT_LIMIT,
    id_factory: Optional[IdFactory] = None,
) -> Optional[Dict[str, Any]]:
    """
    白名单合并已打分的扁平记录：规范字段优先，其余键放入 ``extra``。

    记录没有 text/content/message 文本时返回 None。
    """
    if not isinstance(raw, Mapping):
        return None
    text = _first_text(raw)
    if text is None:
        return None

    raw_id = raw.get("id") or raw.get("_id")
    doc_id = str(raw_id) if raw_id not in (None, "") else (id_factory or new_document_id)()

    sentiment = sentiment_label(raw.get("sentiment")) or "neutral"
    score = _bounded_number(raw.get("score"), -1, 1)
    confidence = _bounded_number(raw.get("confidence"), 0, 1)

    timestamp = raw.get("timestamp") or raw.get("created_at")
    if not isinstance(timestamp, str) or not timestamp:
        timestamp = to_iso_timestamp((now or utc_now)())

    title = raw.get("title")
    if not isinstance(title, str) or not title:
        title = text[:TITLE_PREVIEW] + "..."

    category = raw.get("category")
    if not isinstance(category, str) or not category:
        category = DEFAULT_CATEGORY

    keywords = raw.get("keywords")
    if isinstance(keywords, list):
        keywords = list(dict.fromkeys(k for k in keywords if isinstance(k, str) and k))
    else:
        keywords = extract_keywords(text, limit=keyword_limit)

    entities = raw.get("entities")
    if not isinstance(entities, list):
        entities = []

    return {
        "id": doc_id,
        "text": text[:text_limit],
        "title": title,
        "sentiment": sentiment,
        "score": score,
        "confidence": confidence,
        "timestamp": timestamp,
        "category": category,
        "keywords": keywords,
        "entities": entities,
        "raw": raw,
        "extra": {k: v for k, v in raw.items() if k not in _SCORED_RECORD_KEYS},
    }


def normalize_documents(
    raws: Iterable[Any],
    *,
    accept_scored_records: bool = True,
    now: Optional[Clock] = None,
    lexicon: SentimentLexicon = DEFAULT_LEXICON,
    keyword_limit: int = 20,
    text_limit: int = TEXT_LIMIT,
    id_factory: Optional[IdFactory] = None,
) -> Tuple[List[Dict[str, Any]], int]:
    """
    批量标准化。无法处理的记录跳过并计数，不中断整批。

    Returns:
        (规范文档列表, 跳过的记录数)
    """
    factory = id_factory or new_document_id
    used_ids = set()

    def unique_id() -> str:
        for _ in range(100):
            candidate = factory()
            if candidate not in used_ids:
                return candidate
        raise RuntimeError("id_factory keeps returning ids already used in this batch")

    documents: List[Dict[str, Any]] = []
    skipped = 0
    for raw in raws:
        if isinstance(raw, Mapping) and "document" in raw:
            doc = normalize_document(
                raw,
                now=now,
                lexicon=lexicon,
                keyword_limit=keyword_limit,
                text_limit=text_limit,
                id_factory=unique_id,
            )
        elif accept_scored_records:
            doc = coerce_scored_record(
                raw,
                now=now,
                keyword_limit=keyword_limit,
                text_limit=text_limit,
                id_factory=unique_id,
            )
        else:
            doc = None

        if doc is None:
            skipped += 1
            continue
        used_ids.add(doc["id"])
        documents.append(doc)

    if skipped:
        logger.warning(f"跳过 {skipped} 条无法标准化的记录")
    logger.info(f"标准化完成，共 {len(documents)} 条文档")
    return documents, skipped
