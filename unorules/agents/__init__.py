"""Built-in agents."""

from unorules.agents.human_agent import HumanAgent
from unorules.agents.llm_agent import LLMAgent
from unorules.agents.random_agent import RandomAgent

__all__ = ["LLMAgent", "HumanAgent", "RandomAgent"]
