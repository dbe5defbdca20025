"""
情感统计与共现网络节点
"""
from nodes.base import MonitoredNode

from utils.analysis_tools.cooccurrence_tools import build_cooccurrence_network
from utils.analysis_tools.sentiment_tools import sentiment_overview
from utils.query import parse_threshold


class AggregateAnalyticsNode(MonitoredNode):
    """
    情感统计节点

    输出：分布/平均分/日期范围/每日数量，以及时间线、分类汇总与词云数据
    """

    def prep(self, shared):
        cfg = shared.get("config", {}).get("analytics", {})
        return {
            "documents": shared.get("data", {}).get("filtered_documents", []),
            "timeline_days": cfg.get("timeline_days", 30),
            "word_cloud_top_n": cfg.get("word_cloud_top_n", 50),
        }

    def exec(self, prep_res):
        return sentiment_overview(
            prep_res["documents"],
            timeline_days=prep_res["timeline_days"],
            word_cloud_top_n=prep_res["word_cloud_top_n"],
        )

    def post(self, shared, prep_res, exec_res):
        shared.setdefault("results", {})["analytics"] = exec_res
        print(f"[AggregateAnalytics] {exec_res['summary']}")
        return "default"


class BuildCooccurrenceNetworkNode(MonitoredNode):
    """
    共现网络节点

    阈值在进入构建函数前校验（非正整数抛出 InvalidThresholdError）。
    结果状态：
    - empty_corpus: 没有任何文档
    - no_match: 有文档但目标词未出现
    - ok: 正常构建
    """

    def prep(self, shared):
        cfg = shared.get("config", {}).get("network", {})
        return {
            "documents": shared.get("data", {}).get("filtered_documents", []),
            "term": cfg.get("term", "暈船"),
            "threshold": parse_threshold(cfg.get("threshold", 5)),
            "max_related": cfg.get("max_related", 50),
        }

    def exec(self, prep_res):
        return build_cooccurrence_network(
            prep_res["documents"],
            prep_res["term"],
            prep_res["threshold"],
            max_related=prep_res["max_related"],
        )

    def post(self, shared, prep_res, exec_res):
        metadata = exec_res["metadata"]
        if not prep_res["documents"]:
            status = "empty_corpus"
        elif metadata["targetFrequency"] == 0:
            status = "no_match"
        else:
            status = "ok"

        shared.setdefault("results", {})["network"] = {
            "status": status,
            "targetTerm": prep_res["term"],
            "threshold": prep_res["threshold"],
            "nodeCount": len(exec_res["nodes"]),
            "edgeCount": len(exec_res["edges"]),
            "metadata": metadata,
            "data": {
                "nodes": exec_res["nodes"],
                "edges": exec_res["edges"],
            },
        }
        print(
            f"[BuildCooccurrenceNetwork] 「{prep_res['term']}」出现于 {metadata['targetFrequency']} 篇文档，"
            f"关联词 {metadata['relatedWordsCount']} 个（阈值≥{prep_res['threshold']}）"
        )
        return "default"
