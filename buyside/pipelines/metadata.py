"""
Node metadata for the campaign pipelines.

Each node declares which state fields it reads and writes, which service
methods it calls, whether it uses Gemini, and what happens when it fails:
either the run aborts (``fatal``) or the node degrades to a ``fallback``.

Usage:
    from buyside.pipelines.metadata import NodeMetadata

    @dataclass
    class MyNode(BaseNode[MyState]):
        metadata: ClassVar[NodeMetadata] = NodeMetadata(
            inputs=["draft.ad_text_content"],
            outputs=["keywords"],
            services=["enrichment.extract_keywords"],
            llm="Gemini 2.5 Flash",
            fallback="error keywords",
        )
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Optional


@dataclass(frozen=True)
class NodeMetadata:
    """
    Attributes:
        inputs: State fields read by this node
        outputs: State fields written by this node
        services: Service methods called (e.g., "assets.upload_image")
        llm: Model used, if any
        llm_purpose: What the model does in this node
        fatal: A failure here aborts the run and no campaign is created
        fallback: What the node writes instead when its call fails
    """

    inputs: List[str] = field(default_factory=list)
    outputs: List[str] = field(default_factory=list)
    services: List[str] = field(default_factory=list)
    llm: Optional[str] = None
    llm_purpose: Optional[str] = None
    fatal: bool = False
    fallback: Optional[str] = None

    @property
    def uses_llm(self) -> bool:
        return self.llm is not None

    def to_dict(self) -> dict:
        return {**asdict(self), "uses_llm": self.uses_llm}


def get_node_metadata(node_class) -> Optional[NodeMetadata]:
    return getattr(node_class, "metadata", None)


def describe_graph(node_classes: Iterable[type]) -> Dict[str, dict]:
    """Metadata of every annotated node, keyed by node class name."""
    described = {}
    for node_class in node_classes:
        meta = get_node_metadata(node_class)
        if meta is not None:
            described[node_class.__name__] = meta.to_dict()
    return described


def fatal_steps(node_classes: Iterable[type]) -> List[str]:
    """Names of the nodes whose failure aborts the pipeline."""
    return [
        name for name, meta in describe_graph(node_classes).items()
        if meta["fatal"]
    ]
