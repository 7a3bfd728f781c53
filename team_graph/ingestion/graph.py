"""
In-memory knowledge graph container.

Nodes are indexed by id for O(1) upsert while keeping insertion order
for stable output. A single owner mutates the graph during a run.
"""

from team_graph.ingestion.models import AttributeNode, Edge, PersonNode
from team_graph.ingestion.schema import AI_RELATION_TYPES, RelationType


class KnowledgeGraph:
    """Mutable node/edge collections for one build run."""

    def __init__(self) -> None:
        self._nodes: dict[str, PersonNode | AttributeNode] = {}
        self._edges: list[Edge] = []
        # (source, target) keys of person -> attribute edges
        self._dimension_edge_keys: set[tuple[str, str]] = set()

    @property
    def nodes(self) -> list[PersonNode | AttributeNode]:
        return list(self._nodes.values())

    @property
    def edges(self) -> list[Edge]:
        return list(self._edges)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def get_node(self, node_id: str) -> PersonNode | AttributeNode | None:
        return self._nodes.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def add_person(self, node: PersonNode) -> bool:
        """Add a person node. Returns False if the id already exists."""
        if node.id in self._nodes:
            return False
        self._nodes[node.id] = node
        return True

    def get_or_create_attribute(
        self, node_id: str, label: str, color: str
    ) -> tuple[AttributeNode, bool]:
        """Return the attribute node for ``node_id``, creating it on first reference."""
        existing = self._nodes.get(node_id)
        if isinstance(existing, AttributeNode):
            return existing, False

        node = AttributeNode(id=node_id, label=label, color=color)
        self._nodes[node_id] = node
        return node, True

    def add_dimension_edge(self, edge: Edge) -> bool:
        """
        Add a person -> attribute edge.

        Keyed on (source, target) only: the first edge written for a pair is
        kept even if a later dimension uses a different edge type.
        """
        key = (edge.source, edge.target)
        if key in self._dimension_edge_keys:
            return False
        self._dimension_edge_keys.add(key)
        self._edges.append(edge)
        return True

    def add_edge(self, edge: Edge) -> None:
        self._edges.append(edge)

    def extend_edges(self, edges: list[Edge]) -> None:
        self._edges.extend(edges)

    def edges_of_type(self, *types: RelationType) -> list[Edge]:
        wanted = set(types)
        return [edge for edge in self._edges if edge.type in wanted]

    def ai_edges(self) -> list[Edge]:
        return [edge for edge in self._edges if edge.type in AI_RELATION_TYPES]
