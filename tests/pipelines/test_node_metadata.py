"""
Tests for pipeline node metadata introspection.
"""

from buyside.pipelines.campaign_creation import PIPELINE_NODES
from buyside.pipelines.campaign_creation.nodes import UploadAssetNode
from buyside.pipelines.metadata import (
    NodeMetadata,
    describe_graph,
    fatal_steps,
    get_node_metadata,
)


def test_every_node_declares_metadata():
    for node_class in PIPELINE_NODES:
        assert isinstance(get_node_metadata(node_class), NodeMetadata), node_class.__name__


def test_only_enrichment_nodes_use_llm():
    described = describe_graph(PIPELINE_NODES)

    llm_nodes = {name for name, meta in described.items() if meta["uses_llm"]}
    assert llm_nodes == {
        "ExtractKeywordsNode",
        "ReviewPolicyNode",
        "DescribeSemanticsNode",
        "ConcurrentEnrichmentNode",
    }


def test_persistence_is_the_only_fatal_step():
    assert fatal_steps(PIPELINE_NODES) == ["PersistCampaignNode"]


def test_non_fatal_service_nodes_declare_a_fallback():
    for name, meta in describe_graph(PIPELINE_NODES).items():
        if meta["services"] and not meta["fatal"]:
            assert meta["fallback"], name


def test_describe_graph_skips_plain_classes():
    class Plain:
        pass

    assert describe_graph([Plain, UploadAssetNode]) == {
        "UploadAssetNode": UploadAssetNode.metadata.to_dict(),
    }
