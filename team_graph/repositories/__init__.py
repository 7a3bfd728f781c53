from team_graph.repositories.llm_repository import LLMRepository, ModelTier

__all__ = ["LLMRepository", "ModelTier"]
