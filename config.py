"""
Configuration loader and shared-store builder.

Uses a YAML file as the single source of truth for runtime settings.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
import os

import yaml

from utils.query import parse_date, parse_sentiment_type, parse_threshold


@dataclass
class DataConfig:
    input_dir: str = "data"
    prefix: str = "rawdata"
    output_dir: str = "output"
    status_path: str = ""
    documents_path: str = ""


@dataclass
class NormalizeConfig:
    keyword_limit: int = 20
    text_limit: int = 500
    accept_scored_records: bool = True


@dataclass
class FilterConfig:
    sentiment: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


@dataclass
class AnalyticsConfig:
    timeline_days: int = 30
    word_cloud_top_n: int = 50


@dataclass
class NetworkConfig:
    term: str = "暈船"
    threshold: int = 5
    max_related: int = 50
    export_graphml: bool = True


@dataclass
class AppConfig:
    data: DataConfig = field(default_factory=DataConfig)
    normalize: NormalizeConfig = field(default_factory=NormalizeConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)


def load_config(path: str) -> AppConfig:
    """Load YAML configuration into AppConfig."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return AppConfig(
        data=DataConfig(**(raw.get("data", {}) or {})),
        normalize=NormalizeConfig(**(raw.get("normalize", {}) or {})),
        filter=FilterConfig(**(raw.get("filter", {}) or {})),
        analytics=AnalyticsConfig(**(raw.get("analytics", {}) or {})),
        network=NetworkConfig(**(raw.get("network", {}) or {})),
    )


def validate_config(config: AppConfig) -> None:
    """Validate configuration constraints and prerequisites."""
    if config.data.documents_path:
        if not os.path.isfile(config.data.documents_path):
            raise FileNotFoundError(f"Documents file not found: {config.data.documents_path}")
        output_documents = os.path.join(config.data.output_dir, "documents.json")
        if os.path.abspath(config.data.documents_path) == os.path.abspath(output_documents):
            raise ValueError("data.documents_path must differ from the documents.json written to output_dir")
    elif not os.path.isdir(config.data.input_dir):
        raise FileNotFoundError(f"Input directory not found: {config.data.input_dir}")

    if int(config.normalize.keyword_limit) <= 0:
        raise ValueError("normalize.keyword_limit must be >= 1")
    if int(config.normalize.text_limit) <= 0:
        raise ValueError("normalize.text_limit must be >= 1")
    if int(config.analytics.timeline_days) <= 0:
        raise ValueError("analytics.timeline_days must be >= 1")
    if int(config.analytics.word_cloud_top_n) <= 0:
        raise ValueError("analytics.word_cloud_top_n must be >= 1")
    if int(config.network.max_related) <= 0:
        raise ValueError("network.max_related must be >= 1")
    if not str(config.network.term or "").strip():
        raise ValueError("network.term must not be empty")

    # InvalidThresholdError / InvalidQueryError are ValueError subclasses
    parse_threshold(config.network.threshold)
    parse_sentiment_type(config.filter.sentiment)
    start = parse_date(config.filter.start_date)
    end = parse_date(config.filter.end_date)
    if start and end and start > end:
        raise ValueError(f"filter.start_date {start} is after filter.end_date {end}")


def config_to_shared(config: AppConfig) -> dict:
    """Convert AppConfig into the shared store structure used by nodes."""
    output_dir = config.data.output_dir
    return {
        "data": {
            "raw_documents": [],
            "documents": [],
            "filtered_documents": [],
        },
        "config": {
            "data_source": {
                "input_dir": config.data.input_dir,
                "prefix": config.data.prefix,
                "documents_path": config.data.documents_path,
            },
            "normalize": {
                "keyword_limit": int(config.normalize.keyword_limit),
                "text_limit": int(config.normalize.text_limit),
                "accept_scored_records": bool(config.normalize.accept_scored_records),
            },
            "filter": {
                "sentiment": config.filter.sentiment,
                "start_date": config.filter.start_date,
                "end_date": config.filter.end_date,
            },
            "analytics": {
                "timeline_days": int(config.analytics.timeline_days),
                "word_cloud_top_n": int(config.analytics.word_cloud_top_n),
            },
            "network": {
                "term": config.network.term,
                "threshold": parse_threshold(config.network.threshold),
                "max_related": int(config.network.max_related),
                "export_graphml": bool(config.network.export_graphml),
            },
            "output": {
                "documents_path": os.path.join(output_dir, "documents.json"),
                "analytics_path": os.path.join(output_dir, "analytics.json"),
                "network_path": os.path.join(output_dir, "cooccurrence.json"),
                "graphml_path": os.path.join(output_dir, "cooccurrence.graphml"),
            },
        },
        "results": {
            "load": {"files": 0, "records": 0},
            "normalize": {"documents": 0, "skipped": 0},
            "filter": {"selected": 0},
            "analytics": {},
            "network": {},
            "save": {"saved": False, "files": []},
        },
        "monitor": {
            "start_time": "",
            "current_node": "",
            "execution_log": [],
            "error_log": [],
            "status_path": config.data.status_path,
        },
        "final_summary": {},
    }
