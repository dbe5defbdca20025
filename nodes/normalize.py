"""
文档标准化与筛选节点
"""
from nodes.base import MonitoredNode

from utils.analysis_tools.sentiment_tools import filter_documents
from utils.documents import normalize_documents


class NormalizeDocumentsNode(MonitoredNode):
    """
    文档标准化节点

    对每条原始记录计算词典情感、抽取关键词与元数据。
    无法处理的记录被跳过并计数，不会中断整批处理。
    """

    def __init__(self, now=None, id_factory=None, **kwargs):
        """
        Args:
            now: 当前时间来源（可注入固定时钟）
            id_factory: 缺少 id 时的生成器
        """
        super().__init__(**kwargs)
        self.now = now
        self.id_factory = id_factory

    def prep(self, shared):
        cfg = shared.get("config", {}).get("normalize", {})
        return {
            "raw_documents": shared.get("data", {}).get("raw_documents", []),
            "keyword_limit": cfg.get("keyword_limit", 20),
            "text_limit": cfg.get("text_limit", 500),
            "accept_scored_records": cfg.get("accept_scored_records", True),
        }

    def exec(self, prep_res):
        documents, skipped = normalize_documents(
            prep_res["raw_documents"],
            accept_scored_records=prep_res["accept_scored_records"],
            now=self.now,
            keyword_limit=prep_res["keyword_limit"],
            text_limit=prep_res["text_limit"],
            id_factory=self.id_factory,
        )
        return {"documents": documents, "skipped": skipped}

    def post(self, shared, prep_res, exec_res):
        shared.setdefault("data", {})["documents"] = exec_res["documents"]
        shared.setdefault("results", {})["normalize"] = {
            "documents": len(exec_res["documents"]),
            "skipped": exec_res["skipped"],
        }
        print(
            f"[NormalizeDocuments] 标准化 {len(exec_res['documents'])} 条，"
            f"跳过 {exec_res['skipped']} 条"
        )
        return "default"


class FilterDocumentsNode(MonitoredNode):
    """
    文档筛选节点

    按配置的情感类型与日期闭区间筛选，未配置条件时原样通过。
    """

    def prep(self, shared):
        cfg = shared.get("config", {}).get("filter", {}) or {}
        return {
            "documents": shared.get("data", {}).get("documents", []),
            "sentiment": cfg.get("sentiment"),
            "start_date": cfg.get("start_date"),
            "end_date": cfg.get("end_date"),
        }

    def exec(self, prep_res):
        return filter_documents(
            prep_res["documents"],
            sentiment=prep_res["sentiment"],
            start_date=prep_res["start_date"],
            end_date=prep_res["end_date"],
        )

    def post(self, shared, prep_res, exec_res):
        shared.setdefault("data", {})["filtered_documents"] = exec_res
        shared.setdefault("results", {})["filter"] = {"selected": len(exec_res)}
        if len(exec_res) != len(prep_res["documents"]):
            print(f"[FilterDocuments] 筛选后保留 {len(exec_res)}/{len(prep_res['documents'])} 条")
        return "default"
