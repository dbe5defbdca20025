"""
Tests for the target-term co-occurrence network.
"""
import copy

import networkx as nx
import pytest

from utils.analysis_tools.cooccurrence_tools import (
    build_cooccurrence_network,
    document_keywords,
    dominant_sentiment,
    network_to_graph,
    related_node_size,
    tally_sentiment_score,
)
from utils.analysis_tools.sentiment_tools import sentiment_timeline


@pytest.fixture
def crush_docs():
    return [
        {"sentiment": "positive", "keywords": ["暈船", "曖昧"]},
        {"sentiment": "positive", "keywords": ["暈船", "曖昧", "朋友"]},
        {"sentiment": "negative", "keywords": ["暈船", "曖昧"]},
        {"sentiment": "neutral", "keywords": ["朋友", "曖昧"]},
    ]


class TestBuildCooccurrenceNetwork:
    def test_related_term_counts_and_sentiment(self, crush_docs):
        network = build_cooccurrence_network(crush_docs, "暈船", 2)
        related = [n for n in network["nodes"] if n["group"] == "related"]
        assert related == [{
            "id": "曖昧",
            "label": "曖昧",
            "size": 26,
            "sentiment": "positive",
            "group": "related",
            "frequency": 3,
            "sentimentScore": 0.33,
        }]
        assert network["edges"] == [
            {"source": "暈船", "target": "曖昧", "weight": 3, "sentiment": "positive"}
        ]
        assert network["metadata"] == {
            "totalEntries": 4,
            "targetFrequency": 3,
            "relatedWordsCount": 1,
        }

    def test_single_center_node(self, crush_docs):
        network = build_cooccurrence_network(crush_docs, "暈船", 1)
        centers = [n for n in network["nodes"] if n["group"] == "center"]
        assert centers == [{
            "id": "暈船",
            "label": "暈船",
            "size": 100,
            "sentiment": "neutral",
            "group": "center",
            "frequency": 3,
        }]
        assert network["nodes"][0] is centers[0]

    def test_edges_match_related_nodes(self, crush_docs):
        network = build_cooccurrence_network(crush_docs, "暈船", 1)
        related_ids = [n["id"] for n in network["nodes"][1:]]
        assert [e["target"] for e in network["edges"]] == related_ids
        assert network["metadata"]["relatedWordsCount"] == len(network["edges"])
        assert all(e["weight"] >= 1 for e in network["edges"])

    def test_ordering_by_weight_then_first_seen(self):
        docs = [
            {"sentiment": "neutral", "keywords": ["暈船", "學校", "朋友"]},
            {"sentiment": "neutral", "keywords": ["暈船", "朋友", "學校"]},
            {"sentiment": "neutral", "keywords": ["暈船", "朋友"]},
        ]
        network = build_cooccurrence_network(docs, "暈船", 1)
        assert [e["target"] for e in network["edges"]] == ["朋友", "學校"]

        tied = build_cooccurrence_network(docs[:2], "暈船", 1)
        assert [e["target"] for e in tied["edges"]] == ["學校", "朋友"]

    def test_threshold_filters_related_terms(self, crush_docs):
        network = build_cooccurrence_network(crush_docs, "暈船", 4)
        assert network["edges"] == []
        assert len(network["nodes"]) == 1
        assert network["metadata"]["targetFrequency"] == 3

    def test_target_absent(self, crush_docs):
        network = build_cooccurrence_network(crush_docs, "分手", 1)
        assert len(network["nodes"]) == 1
        assert network["nodes"][0]["frequency"] == 0
        assert network["edges"] == []

    def test_empty_corpus(self):
        network = build_cooccurrence_network([], "暈船", 1)
        assert network["metadata"] == {"totalEntries": 0, "targetFrequency": 0, "relatedWordsCount": 0}

    def test_max_related_caps_before_threshold(self):
        docs = [{"sentiment": "neutral", "keywords": ["暈船", "甲乙", "丙丁", "戊己"]}]
        network = build_cooccurrence_network(docs, "暈船", 1, max_related=2)
        assert [e["target"] for e in network["edges"]] == ["甲乙", "丙丁"]

    def test_single_character_keywords_are_ignored(self):
        docs = [{"sentiment": "neutral", "keywords": ["暈船", "愛", "曖昧"]}]
        network = build_cooccurrence_network(docs, "暈船", 1)
        assert [e["target"] for e in network["edges"]] == ["曖昧"]

    def test_falls_back_to_text_when_keywords_missing(self):
        docs = [
            {"sentiment": "negative", "text": "暈船 曖昧 的 了"},
            {"sentiment": "negative", "text": "暈船，曖昧"},
        ]
        network = build_cooccurrence_network(docs, "暈船", 2)
        assert network["edges"] == [
            {"source": "暈船", "target": "曖昧", "weight": 2, "sentiment": "negative"}
        ]
        assert network["nodes"][1]["sentimentScore"] == -1

    def test_unknown_sentiment_counts_as_neutral(self):
        docs = [{"sentiment": "mixed", "keywords": ["暈船", "曖昧"]}]
        network = build_cooccurrence_network(docs, "暈船", 1)
        assert network["nodes"][1]["sentiment"] == "neutral"
        assert network["nodes"][1]["sentimentScore"] == 0

    def test_sentiment_labels_match_timeline_counting(self):
        docs = [
            {"sentiment": "Positive", "timestamp": "2025-10-10T10:00:00Z", "keywords": ["暈船", "曖昧"]},
            {"sentiment": "POSITIVE", "timestamp": "2025-10-10T11:00:00Z", "keywords": ["暈船", "曖昧"]},
        ]
        network = build_cooccurrence_network(docs, "暈船", 1)
        assert network["nodes"][1]["sentiment"] == "positive"
        assert network["nodes"][1]["sentimentScore"] == 1
        assert sentiment_timeline(docs)[0]["positive"] == 2

    def test_pure_and_does_not_mutate_input(self, crush_docs):
        snapshot = copy.deepcopy(crush_docs)
        first = build_cooccurrence_network(crush_docs, "暈船", 1)
        second = build_cooccurrence_network(crush_docs, "暈船", 1)
        assert first == second
        assert crush_docs == snapshot


class TestHelpers:
    def test_dominant_sentiment_tie_breaks(self):
        assert dominant_sentiment({"positive": 1, "negative": 1, "neutral": 1}) == "positive"
        assert dominant_sentiment({"positive": 0, "negative": 2, "neutral": 2}) == "negative"
        assert dominant_sentiment({"positive": 0, "negative": 1, "neutral": 2}) == "neutral"
        assert dominant_sentiment({"positive": 0, "negative": 0, "neutral": 0}) == "positive"

    def test_tally_sentiment_score(self):
        assert tally_sentiment_score({"positive": 2, "negative": 1, "total": 3}) == 0.33
        assert tally_sentiment_score({"positive": 0, "negative": 0, "total": 0}) == 0

    def test_related_node_size_is_capped(self):
        assert related_node_size(1) == 22
        assert related_node_size(30) == 80
        assert related_node_size(100) == 80

    def test_document_keywords_prefers_stored_list(self):
        assert document_keywords({"keywords": [], "text": "暈船 曖昧"}) == []
        assert document_keywords({"text": "暈船 曖昧"}) == ["暈船", "曖昧"]


def test_network_to_graph(crush_docs):
    network = build_cooccurrence_network(crush_docs, "暈船", 1)
    graph = network_to_graph(network)
    assert isinstance(graph, nx.Graph)
    assert graph.number_of_nodes() == len(network["nodes"])
    assert graph.number_of_edges() == len(network["edges"])
    assert graph["暈船"]["曖昧"]["weight"] == 3
    assert graph.nodes["暈船"]["group"] == "center"
    assert isinstance(graph.nodes["曖昧"]["sentimentScore"], float)
    assert graph.graph["targetFrequency"] == 3
