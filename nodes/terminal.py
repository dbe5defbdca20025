"""
终止节点
"""
from nodes.base import MonitoredNode


class TerminalNode(MonitoredNode):
    """
    终止节点 - 宣布流程结束

    功能：
    1. 作为整个Flow的终点
    2. 汇总执行结果（空语料时状态为 empty_corpus）
    """

    def prep(self, shared):
        """读取执行结果摘要"""
        results = shared.get("results", {})
        return {
            "load": results.get("load", {}),
            "normalize": results.get("normalize", {}),
            "filter": results.get("filter", {}),
            "network": results.get("network", {}),
            "save": results.get("save", {}),
        }

    def exec(self, prep_res):
        """生成执行摘要"""
        if not prep_res["load"].get("records"):
            status = "empty_corpus"
        else:
            status = "completed"

        network = prep_res["network"]
        return {
            "status": status,
            "raw_records": prep_res["load"].get("records", 0),
            "documents": prep_res["normalize"].get("documents", 0),
            "skipped": prep_res["normalize"].get("skipped", 0),
            "selected": prep_res["filter"].get("selected", 0),
            "network_status": network.get("status", ""),
            "related_terms": network.get("edgeCount", 0),
            "saved_files": prep_res["save"].get("files", []),
        }

    def post(self, shared, prep_res, exec_res):
        """输出执行摘要，结束流程"""
        print("\n" + "=" * 60)
        print("Dcard 情感分析 - 执行完成")
        print("=" * 60)
        print(f"状态: {exec_res['status']}")
        print(f"原始记录: {exec_res['raw_records']}")
        print(f"标准化文档: {exec_res['documents']}（跳过 {exec_res['skipped']}）")
        print(f"筛选后文档: {exec_res['selected']}")
        if exec_res["network_status"]:
            print(f"共现网络: {exec_res['network_status']}，关联词 {exec_res['related_terms']} 个")
        print("=" * 60 + "\n")

        shared["final_summary"] = exec_res
        return "default"
