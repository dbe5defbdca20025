"""
结果保存节点
"""
from nodes.base import MonitoredNode

from utils.analysis_tools.cooccurrence_tools import network_to_graph
from utils.data_loader import save_graphml, save_json


class SaveResultsNode(MonitoredNode):
    """
    结果保存节点

    写出筛选后的规范文档、情感统计与共现网络 JSON，可选导出 GraphML。
    """

    def prep(self, shared):
        config = shared.get("config", {})
        results = shared.get("results", {})
        return {
            "documents": shared.get("data", {}).get("filtered_documents", []),
            "analytics": results.get("analytics", {}),
            "network": results.get("network", {}),
            "output": config.get("output", {}),
            "export_graphml": config.get("network", {}).get("export_graphml", False),
        }

    def exec(self, prep_res):
        output = prep_res["output"]
        targets = [
            (output.get("documents_path"), prep_res["documents"]),
            (output.get("analytics_path"), prep_res["analytics"]),
            (output.get("network_path"), prep_res["network"]),
        ]

        saved, failed = [], []
        for path, payload in targets:
            if not path:
                continue
            (saved if save_json(payload, path) else failed).append(path)

        graphml_path = output.get("graphml_path")
        if prep_res["export_graphml"] and graphml_path and prep_res["network"]:
            network = {
                "nodes": prep_res["network"].get("data", {}).get("nodes", []),
                "edges": prep_res["network"].get("data", {}).get("edges", []),
                "metadata": prep_res["network"].get("metadata", {}),
            }
            ok = save_graphml(network_to_graph(network), graphml_path)
            (saved if ok else failed).append(graphml_path)

        return {"saved": saved, "failed": failed}

    def post(self, shared, prep_res, exec_res):
        shared.setdefault("results", {})["save"] = {
            "saved": not exec_res["failed"],
            "files": exec_res["saved"],
            "failed": exec_res["failed"],
        }
        for path in exec_res["saved"]:
            print(f"[SaveResults] 已保存: {path}")
        for path in exec_res["failed"]:
            print(f"[SaveResults] 保存失败: {path}")
        return "default"
