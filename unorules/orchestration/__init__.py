"""Match orchestration."""

from unorules.orchestration.match_runner import MatchResult, MatchRunner
from unorules.orchestration.tournament import run_tournament

__all__ = ["MatchResult", "MatchRunner", "run_tournament"]
