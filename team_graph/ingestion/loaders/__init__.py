from team_graph.ingestion.loaders.base import BaseLoader
from team_graph.ingestion.loaders.json_loader import JSONEmployeeLoader

__all__ = ["BaseLoader", "JSONEmployeeLoader"]
