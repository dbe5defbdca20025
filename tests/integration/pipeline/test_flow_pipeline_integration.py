"""
Integration tests for the full load → normalize → analyze → save pipeline.
"""
import json
from pathlib import Path

import networkx as nx
import pytest

from config import AppConfig, DataConfig, config_to_shared
from flow import create_analysis_flow, create_main_flow

pytestmark = pytest.mark.integration


class TestMainFlow:
    def test_full_pipeline(self, pipeline_shared, fixed_now, sequential_ids):
        create_main_flow(now=fixed_now, id_factory=sequential_ids).run(pipeline_shared)

        results = pipeline_shared["results"]
        assert results["load"] == {"files": 3, "records": 4}
        assert results["normalize"] == {"documents": 3, "skipped": 1}
        assert results["filter"] == {"selected": 3}

        summary = results["analytics"]["data"]["summary"]
        assert summary["distribution"] == {"positive": 1, "negative": 1, "neutral": 1}
        assert summary["dateRange"] == {"start": "2025-10-10", "end": "2025-10-12"}

        network = results["network"]
        assert network["status"] == "ok"
        assert network["metadata"] == {"totalEntries": 3, "targetFrequency": 3, "relatedWordsCount": 1}
        assert network["data"]["edges"] == [
            {"source": "暈船", "target": "曖昧", "weight": 2, "sentiment": "positive"}
        ]

        assert pipeline_shared["final_summary"]["status"] == "completed"
        nodes_run = [e["node"] for e in pipeline_shared["monitor"]["execution_log"] if e["status"] == "completed"]
        assert nodes_run == [
            "LoadRawDocumentsNode",
            "NormalizeDocumentsNode",
            "FilterDocumentsNode",
            "AggregateAnalyticsNode",
            "BuildCooccurrenceNetworkNode",
            "SaveResultsNode",
            "TerminalNode",
        ]

    def test_outputs_written(self, pipeline_shared, fixed_now):
        create_main_flow(now=fixed_now).run(pipeline_shared)
        output = pipeline_shared["config"]["output"]

        with open(output["documents_path"], "r", encoding="utf-8") as f:
            documents = json.load(f)
        assert [d["id"] for d in documents] == ["d1", "d2", "d3"]
        assert documents[2]["title"].endswith("...")

        graph = nx.read_graphml(output["graphml_path"])
        assert set(graph.nodes) == {"暈船", "曖昧"}

    def test_date_filter_narrows_corpus(self, pipeline_shared, fixed_now):
        pipeline_shared["config"]["filter"]["start_date"] = "2025-10-11"
        create_main_flow(now=fixed_now).run(pipeline_shared)

        assert pipeline_shared["results"]["filter"] == {"selected": 2}
        network = pipeline_shared["results"]["network"]
        assert network["metadata"]["targetFrequency"] == 2
        # 曖昧 now co-occurs once, below the threshold of 2
        assert network["edgeCount"] == 0

    def test_empty_corpus_skips_analysis(self, pipeline_shared, tmp_path):
        pipeline_shared["config"]["data_source"]["input_dir"] = str(tmp_path / "empty")
        create_main_flow().run(pipeline_shared)

        assert pipeline_shared["final_summary"]["status"] == "empty_corpus"
        assert pipeline_shared["results"]["analytics"] == {}
        assert not Path(pipeline_shared["config"]["output"]["analytics_path"]).exists()

    def test_status_file_persisted(self, pipeline_shared, fixed_now, tmp_path):
        status_path = tmp_path / "status.json"
        pipeline_shared["monitor"]["status_path"] = str(status_path)
        create_main_flow(now=fixed_now).run(pipeline_shared)

        payload = json.loads(status_path.read_text(encoding="utf-8"))
        assert payload["current_node"] == "TerminalNode"
        assert payload["error_log"] == []


class TestAnalysisFlow:
    def test_rerun_on_saved_documents(self, pipeline_shared, fixed_now, tmp_path):
        create_main_flow(now=fixed_now).run(pipeline_shared)
        first = pipeline_shared["results"]

        config = AppConfig(data=DataConfig(
            output_dir=str(tmp_path / "rerun"),
            documents_path=pipeline_shared["config"]["output"]["documents_path"],
        ))
        config.network.threshold = 2
        shared = config_to_shared(config)
        create_analysis_flow().run(shared)

        assert shared["results"]["normalize"] == {"documents": 3, "skipped": 0}
        assert shared["results"]["analytics"]["data"]["summary"] == first["analytics"]["data"]["summary"]
        assert shared["results"]["network"]["data"] == first["network"]["data"]
        assert shared["final_summary"]["status"] == "completed"
        assert Path(shared["config"]["output"]["analytics_path"]).exists()
