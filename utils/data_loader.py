import json
import os
from typing import Any, Dict, List
import logging

import networkx as nx

logger = logging.getLogger(__name__)


def load_raw_documents(data_file_path: str) -> List[Dict[str, Any]]:
    """
    加载一个原始 JSON 文件

    文件内容可以是单个对象，也可以是对象数组。

    Args:
        data_file_path: JSON 文件路径

    Returns:
        List[Dict[str, Any]]: 原始记录列表
    """
    try:
        with open(data_file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except Exception as e:
        logger.error(f"加载原始数据失败 {data_file_path}: {e}")
        raise

    records = data if isinstance(data, list) else [data]
    logger.info(f"成功加载原始数据 {data_file_path}，共 {len(records)} 条记录")
    return records


def load_documents(documents_path: str) -> List[Dict[str, Any]]:
    """
    加载已标准化的文档列表（单个对象视为一条文档）

    Args:
        documents_path: 文档 JSON 文件路径

    Returns:
        List[Dict[str, Any]]: 规范文档列表
    """
    try:
        with open(documents_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        documents = data if isinstance(data, list) else [data]
        logger.info(f"成功加载文档数据，共 {len(documents)} 条记录")
        return documents

    except Exception as e:
        logger.error(f"加载文档数据失败: {e}")
        raise


def _ensure_parent_dir(output_path: str) -> None:
    output_dir = os.path.dirname(output_path)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir, exist_ok=True)


def save_json(data: Any, output_path: str) -> bool:
    """
    保存 JSON 结果（UTF-8，不转义中文）

    Args:
        data: 可序列化的数据
        output_path: 输出文件路径

    Returns:
        bool: 保存是否成功
    """
    try:
        _ensure_parent_dir(output_path)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        logger.info(f"成功保存结果到 {output_path}")
        return True

    except (OSError, TypeError, ValueError) as e:
        logger.error(f"保存结果失败 {output_path}: {e}")
        return False


def save_graphml(graph: nx.Graph, output_path: str) -> bool:
    """
    保存共现图为 GraphML

    Args:
        graph: networkx 图
        output_path: 输出文件路径

    Returns:
        bool: 保存是否成功
    """
    try:
        _ensure_parent_dir(output_path)
        nx.write_graphml(graph, output_path, encoding='utf-8')

        logger.info(f"成功保存共现图到 {output_path}")
        return True

    except (OSError, nx.NetworkXError) as e:
        logger.error(f"保存共现图失败 {output_path}: {e}")
        return False
