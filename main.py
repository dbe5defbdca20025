"""
Dcard 情感分析 - 主入口文件

================================================================================
使用说明
================================================================================

1. 按需修改 config.yaml（数据目录、筛选条件、目标词与阈值）
2. 运行 python main.py --config config.yaml
3. 可用 --term / --threshold / --type / --start-date / --end-date 覆盖配置
4. --documents output/documents.json 对已标准化的文档重新统计（输出目录需不同）

================================================================================
"""

import argparse
import logging
import os
import sys
import time
from typing import Any, Dict, List, Optional

from config import AppConfig, config_to_shared, load_config, validate_config
from flow import create_analysis_flow, create_main_flow
from utils.errors import AnalysisError
from utils.query import parse_date, parse_sentiment_type, parse_threshold


def print_banner():
    """打印程序启动横幅"""
    print("\n" + "=" * 60)
    print("Dcard 情感分析与共现网络".center(52))
    print("=" * 60)
    print("基于PocketFlow框架 | 词典情感 + 关键词共现")
    print("=" * 60 + "\n")


def print_config(shared: Dict[str, Any]):
    """打印配置信息"""
    cfg = shared["config"]
    print("配置信息:")
    source = cfg["data_source"]
    if source.get("documents_path"):
        print(f"  ├─ 文档文件: {source['documents_path']}")
    else:
        print(f"  ├─ 数据目录: {source['input_dir']}/{source['prefix']}")
    print(f"  ├─ 情感筛选: {cfg['filter']['sentiment'] or '全部'}")
    print(f"  ├─ 日期范围: {cfg['filter']['start_date'] or '-'} ~ {cfg['filter']['end_date'] or '-'}")
    print(f"  ├─ 目标词: {cfg['network']['term']}")
    print(f"  ├─ 共现阈值: {cfg['network']['threshold']}")
    print(f"  └─ 输出目录: {os.path.dirname(cfg['output']['analytics_path']) or '.'}")
    print()


def print_results(shared: Dict[str, Any], elapsed_time: float):
    """打印最终执行摘要"""
    summary = shared.get("final_summary", {})
    analytics = shared.get("results", {}).get("analytics", {}).get("data", {}).get("summary", {})

    print("\n" + "=" * 60)
    print("执行摘要".center(56))
    print("=" * 60)
    print(f"\n[OK] 状态: {summary.get('status', 'unknown')}")
    if analytics:
        print(f"[DATA] 情感分布: {analytics.get('distribution')}")
        print(f"[DATA] 平均情感分: {analytics.get('averageScore')}")
        print(f"[DATA] 日期范围: {analytics.get('dateRange')}")
    for path in summary.get("saved_files", []):
        print(f"[FILE] {path}")
    print(f"\n[TIME] 总耗时: {elapsed_time:.2f} 秒")
    print("\n" + "=" * 60 + "\n")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Dcard 情感分析与关键词共现网络")
    parser.add_argument("--config", default="config.yaml", help="YAML 配置文件路径")
    parser.add_argument("--term", help="共现网络目标词")
    parser.add_argument("--threshold", help="最小共现次数（正整数）")
    parser.add_argument("--type", dest="sentiment", help="positive | negative | neutral")
    parser.add_argument("--start-date", help="起始日期 YYYY-MM-DD（含）")
    parser.add_argument("--end-date", help="结束日期 YYYY-MM-DD（含）")
    parser.add_argument("--documents", help="已标准化的文档 JSON，跳过原始数据加载与标准化")
    parser.add_argument("--log-level", default="INFO", help="日志级别")
    return parser


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """命令行参数覆盖 YAML 配置；非法参数抛出 InvalidThresholdError / InvalidQueryError。"""
    if args.documents:
        config.data.documents_path = args.documents
    if args.term:
        config.network.term = args.term
    if args.threshold is not None:
        config.network.threshold = parse_threshold(args.threshold)
    if args.sentiment is not None:
        config.filter.sentiment = parse_sentiment_type(args.sentiment)
    if args.start_date is not None:
        config.filter.start_date = parse_date(args.start_date)
    if args.end_date is not None:
        config.filter.end_date = parse_date(args.end_date)
    return config


def run(shared: Dict[str, Any]) -> Dict[str, Any]:
    """
    运行主Flow

    Args:
        shared: config_to_shared 生成的 shared 字典

    Returns:
        运行后的 shared 字典
    """
    print_banner()
    print_config(shared)

    start_time = time.time()
    print(f"开始时间: {time.strftime('%Y-%m-%d %H:%M:%S', time.localtime(start_time))}\n")

    if shared["config"]["data_source"].get("documents_path"):
        create_analysis_flow().run(shared)
    else:
        create_main_flow().run(shared)

    print_results(shared, time.time() - start_time)
    return shared


def main(argv: Optional[List[str]] = None) -> int:
    """命令行入口，返回进程退出码"""
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = apply_overrides(load_config(args.config), args)
        validate_config(config)
    except (FileNotFoundError, ValueError) as e:
        # AnalysisError subclasses are ValueErrors too
        kind = "参数错误" if isinstance(e, AnalysisError) else "配置错误"
        print(f"[X] {kind}: {e}")
        return 2

    shared = run(config_to_shared(config))
    return 0 if shared.get("final_summary", {}).get("status") == "completed" else 1


if __name__ == "__main__":
    sys.exit(main())
