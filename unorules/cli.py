"""CLI entry point."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="UNO matches between random, human and LLM agents")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_agents(
    agent_specs: str,
    llm_provider: str,
    llm_model: str,
) -> dict[str, "AgentProtocol"]:
    from unorules.agent.protocol import AgentProtocol
    from unorules.agents.human_agent import HumanAgent
    from unorules.agents.random_agent import RandomAgent

    parts = [s.strip().lower() for s in agent_specs.split(",") if s.strip()]
    agents: dict[str, AgentProtocol] = {}
    for i, part in enumerate(parts):
        pid = f"player_{i}"
        if ":" in part:
            kind, model = part.split(":", 1)
        else:
            kind, model = part, llm_model

        if kind == "llm":
            from unorules.agents.llm_agent import LLMAgent

            agents[pid] = LLMAgent(provider=llm_provider, model=model)
        elif kind == "human":
            agents[pid] = HumanAgent(name=f"Human_{i}")
        elif kind == "random":
            agents[pid] = RandomAgent(name=f"Random_{i}")
        else:
            raise typer.BadParameter(f"Unknown agent type: {kind}. Use 'random', 'human' or 'llm'.")
    if len(agents) < 2:
        raise typer.BadParameter("UNO requires at least 2 agents.")
    return agents


AGENTS_HELP = "Comma-separated: random, human, llm, or llm:model_name (e.g. llm:gpt-4o,human,random)"


@app.command()
def play(
    agents: str = typer.Option("random,random,random,random", "--agents", "-a", help=AGENTS_HELP),
    target_score: int = typer.Option(
        500, "--target-score", "-t", envvar="UNO_TARGET_SCORE", help="Score that wins the match"
    ),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        help="Model name (e.g. openai/gpt-4o-mini, meta-llama/llama-3-8b-instruct)",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", envvar="UNO_SEED", help="Random seed"),
    log_level: str = typer.Option("WARNING", "--log-level", envvar="UNO_LOG_LEVEL", help="Logging level"),
) -> None:
    """Run a single UNO match."""
    from unorules.orchestration.match_runner import MatchRunner

    _configure_logging(log_level)
    agent_map = _parse_agents(agents, llm_provider, llm_model)
    result = MatchRunner(agent_map, target_score=target_score, seed=seed).run()
    typer.echo(f"Winner: {result.winner or 'None (stopped)'}")
    typer.echo(f"Hands: {result.num_hands}  Steps: {result.num_steps}")
    for pid, points in sorted(result.scores.items(), key=lambda x: -x[1]):
        typer.echo(f"  {pid} ({agent_map[pid].name}): {points}")


@app.command()
def tournament(
    agents: str = typer.Option("random,random", "--agents", "-a", help=AGENTS_HELP),
    matches: int = typer.Option(10, "--matches", "-n", help="Number of matches"),
    target_score: int = typer.Option(
        500, "--target-score", "-t", envvar="UNO_TARGET_SCORE", help="Score that wins a match"
    ),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option("openai/gpt-4o-mini", "--llm-model", "-m", help="Model name"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", envvar="UNO_SEED", help="Random seed"),
    log_level: str = typer.Option("WARNING", "--log-level", envvar="UNO_LOG_LEVEL", help="Logging level"),
) -> None:
    """Run a tournament of matches."""
    from unorules.orchestration.tournament import run_tournament

    _configure_logging(log_level)
    agent_map = _parse_agents(agents, llm_provider, llm_model)
    wins = run_tournament(agent_map, num_matches=matches, target_score=target_score, seed=seed)
    typer.echo("Tournament results:")
    for pid in agent_map:
        typer.echo(f"  {pid}: {wins.get(pid, 0)} wins")


if __name__ == "__main__":
    app()
