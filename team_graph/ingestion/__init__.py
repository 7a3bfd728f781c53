from team_graph.ingestion.assembler import GraphAssembler
from team_graph.ingestion.graph import KnowledgeGraph
from team_graph.ingestion.loaders.json_loader import JSONEmployeeLoader
from team_graph.ingestion.models import (
    AttributeNode,
    Edge,
    EmployeeRecord,
    GraphDocument,
    GraphMetadata,
    PersonNode,
    SharedAttributes,
)
from team_graph.ingestion.normalizer import LabelNormalizer
from team_graph.ingestion.schema import AttributeCategory, NodeType, RelationType
from team_graph.ingestion.serializer import GraphSerializer

__all__ = [
    "NodeType",
    "RelationType",
    "AttributeCategory",
    "EmployeeRecord",
    "PersonNode",
    "AttributeNode",
    "Edge",
    "SharedAttributes",
    "GraphMetadata",
    "GraphDocument",
    "KnowledgeGraph",
    "LabelNormalizer",
    "GraphAssembler",
    "GraphSerializer",
    "JSONEmployeeLoader",
]
