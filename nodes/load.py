"""
原始数据 / 规范文档加载节点
"""
from collections.abc import Mapping

from nodes.base import MonitoredNode

from utils.data_loader import load_documents
from utils.data_sources.json_source import JsonDirectoryDataSource


class LoadRawDocumentsNode(MonitoredNode):
    """
    原始数据加载节点

    功能：从本地 JSON 目录读取全部原始记录（单对象或数组）
    类型：Regular Node
    返回：没有任何记录时返回 "empty"，否则 "default"
    """

    def prep(self, shared):
        """读取数据目录配置"""
        source_cfg = shared.get("config", {}).get("data_source", {})
        return {
            "input_dir": source_cfg.get("input_dir", "data"),
            "prefix": source_cfg.get("prefix", "rawdata"),
        }

    def exec(self, prep_res):
        source = JsonDirectoryDataSource(prep_res["input_dir"], prefix=prep_res["prefix"])
        files = source.list_files()
        records = source.load_documents() if files else []
        return {"files": len(files), "records": records}

    def post(self, shared, prep_res, exec_res):
        shared.setdefault("data", {})["raw_documents"] = exec_res["records"]
        shared.setdefault("results", {})["load"] = {
            "files": exec_res["files"],
            "records": len(exec_res["records"]),
        }

        if not exec_res["records"]:
            print(f"[LoadRawDocuments] 未找到任何原始记录: {prep_res['input_dir']}/{prep_res['prefix']}")
            return "empty"

        print(f"[LoadRawDocuments] 读取 {exec_res['files']} 个文件，共 {len(exec_res['records'])} 条记录")
        return "default"


class LoadDocumentsNode(MonitoredNode):
    """
    规范文档加载节点

    功能：读取已标准化的文档 JSON（例如上次运行输出的 documents.json），
          跳过标准化直接进入筛选与统计
    返回：没有任何文档时返回 "empty"，否则 "default"
    """

    def prep(self, shared):
        source_cfg = shared.get("config", {}).get("data_source", {})
        return source_cfg.get("documents_path", "")

    def exec(self, prep_res):
        records = load_documents(prep_res)
        documents = [r for r in records if isinstance(r, Mapping)]
        return {"documents": documents, "skipped": len(records) - len(documents)}

    def post(self, shared, prep_res, exec_res):
        documents = exec_res["documents"]
        shared.setdefault("data", {})["documents"] = documents
        results = shared.setdefault("results", {})
        results["load"] = {"files": 1, "records": len(documents) + exec_res["skipped"]}
        results["normalize"] = {"documents": len(documents), "skipped": exec_res["skipped"]}

        if not documents:
            print(f"[LoadDocuments] 文档文件为空: {prep_res}")
            return "empty"

        print(f"[LoadDocuments] 读取 {len(documents)} 条规范文档，跳过 {exec_res['skipped']} 条")
        return "default"
