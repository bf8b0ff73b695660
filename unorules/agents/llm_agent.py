"""LLM agent using OpenAI library with OpenRouter, Groq, Ollama or Hugging Face."""

import json
import logging
import os
import re
import time
from typing import Optional

from openai import OpenAI

from unorules.agents.human_agent import describe_action
from unorules.engine import Action, PlayerView
from unorules.engine.rules import DrawCard, PassTurn, SayUno

logger = logging.getLogger(__name__)

OPENROUTER_BASE = "https://openrouter.ai/api/v1"
GROQ_BASE = "https://api.groq.com/openai/v1"
OLLAMA_BASE = "http://localhost:11434/v1"
HUGGINGFACE_BASE = "https://router.huggingface.co/v1"

MAX_ATTEMPTS = 3


def _format_player_view(pv: PlayerView) -> str:
    """Format player view as text for the LLM."""
    lines = [
        "=== Your hand ===",
        " ".join(str(c) for c in pv.my_hand),
        "",
        "=== Top card on discard ===",
        str(pv.top_discard) if pv.top_discard else "None",
        "",
        "=== Current color to match ===",
        pv.current_color.value.upper() if pv.current_color else "any",
        "",
        "=== Other players' card counts ===",
    ]
    for pid, count in pv.num_cards_per_player.items():
        if pid != pv.player_id:
            called = " (called UNO)" if pv.uno_called.get(pid) else ""
            lines.append(f"  {pid}: {count} cards{called}")
    in_turn = pv.players[pv.player_in_turn] if pv.player_in_turn is not None else "nobody"
    lines.extend([
        "",
        "=== Direction ===",
        "clockwise" if pv.direction == 1 else "counter-clockwise",
        "",
        "=== Current player ===",
        in_turn,
        "",
        "=== Hand history (last 10 events) ===",
    ])
    if pv.history:
        lines.extend(f"- {h}" for h in pv.history)
    else:
        lines.append("No history yet.")
    return "\n".join(lines)


def _format_legal_actions(actions: list[Action], pv: PlayerView) -> str:
    """Format legal actions as a numbered menu."""
    return "\n".join(f"{i}: {describe_action(a, pv)}" for i, a in enumerate(actions))


def _index_action(idx: int, actions: list[Action]) -> Action | None:
    if 0 <= idx < len(actions):
        return actions[idx]
    logger.debug("Index %d out of range (0-%d)", idx, len(actions) - 1)
    return None


def _parse_action_response(response: str, actions: list[Action]) -> Action | None:
    """Parse LLM response into an Action."""
    # 1. A JSON object, strict first, then with single quotes swapped
    json_match = re.search(r'(\{.*?\})', response, re.DOTALL)
    if json_match:
        json_str = json_match.group(1)
        for candidate in (json_str, json_str.replace("'", '"')):
            try:
                data = json.loads(candidate)
            except ValueError:
                continue
            if isinstance(data, dict) and isinstance(data.get("action_index"), int):
                action = _index_action(data["action_index"], actions)
                if action is not None:
                    return action
            break

    # 2. "action_index": N with any quoting
    match = re.search(r'["\']?action_index["\']?\s*:\s*(\d+)', response, re.IGNORECASE)
    if match:
        action = _index_action(int(match.group(1)), actions)
        if action is not None:
            return action

    # 3. Keywords
    upper = response.upper()
    keywords = (("UNO", SayUno), ("DRAW", DrawCard), ("PASS", PassTurn))
    for word, kind in keywords:
        if word in upper:
            for a in actions:
                if isinstance(a, kind):
                    return a

    # 4. A standalone number
    cleaned_response = re.sub(r'[{}\[\]"\'.,:]', ' ', response)
    for word in cleaned_response.split():
        if word.isdigit():
            action = _index_action(int(word), actions)
            if action is not None:
                return action

    return None


class LLMAgent:
    """Agent that uses an LLM to choose actions."""

    def __init__(
        self,
        provider: str = "openrouter",
        model: str = "openai/gpt-4o-mini",
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        rate_limit: Optional[float] = None,
        client: Optional[OpenAI] = None,
    ):
        if provider == "openrouter":
            base_url = OPENROUTER_BASE
            key = api_key or os.environ.get("OPENROUTER_API_KEY")
        elif provider == "groq":
            base_url = GROQ_BASE
            key = api_key or os.environ.get("GROQ_API_KEY")
        elif provider == "ollama":
            base_url = os.environ.get("OLLAMA_BASE_URL", OLLAMA_BASE)
            key = "ollama"
        elif provider == "huggingface":
            base_url = HUGGINGFACE_BASE
            key = api_key or os.environ.get("HUGGINGFACE_API_KEY")
        else:
            raise ValueError(f"Unknown provider: {provider}")

        if not key and client is None:
            raise ValueError(f"API key required for {provider}. Set {provider.upper()}_API_KEY or pass api_key.")

        self._client = client or OpenAI(api_key=key, base_url=base_url)
        self._model = model
        self._timeout = timeout
        self._provider = provider
        self._rate_limit = rate_limit  # requests per minute
        self._request_history: list[float] = []

        logger.info(
            "[%s] provider=%s base_url=%s timeout=%ss rate_limit=%s rpm",
            self.name, provider, base_url, timeout, rate_limit or "None",
        )

    @property
    def name(self) -> str:
        return f"llm-{self._model}"

    def _wait_for_rate_limit(self) -> None:
        """Block if rate limit is exceeded."""
        if not self._rate_limit:
            return

        now = time.time()
        self._request_history = [t for t in self._request_history if now - t < 60.0]

        if len(self._request_history) >= self._rate_limit:
            wait_time = 60.0 - (now - self._request_history[0])
            if wait_time > 0:
                logger.info("[%s] Rate limit reached; waiting %.2fs", self.name, wait_time)
                time.sleep(wait_time)

        self._request_history.append(time.time())

    def _build_prompt(self, player_view: PlayerView, legal_actions: list[Action]) -> str:
        return f"""You are playing UNO.
Objective: be the first to play all your cards. Match the top discard by color (Red, Blue, Green, Yellow) or by number (0-9). Wild cards can be played on anything and let you choose the next color. Skip, Reverse and Draw Two only match by color.
When you are down to one card, say UNO or an opponent can catch you for a 4-card penalty. Catch opponents who forget.

{_format_player_view(player_view)}

=== Legal actions ===
{_format_legal_actions(legal_actions, player_view)}

INSTRUCTIONS:
Select the best action to win the hand.
Respond with a JSON object containing the index of your chosen action.
Example: {{"action_index": 2}}
"""

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_id: str,
    ) -> Action | None:
        if not legal_actions:
            return None

        prompt = self._build_prompt(player_view, legal_actions)

        for attempt in range(1, MAX_ATTEMPTS + 1):
            start_time = time.time()
            try:
                self._wait_for_rate_limit()

                kwargs = {
                    "model": self._model,
                    "messages": [{"role": "user", "content": prompt}],
                    "timeout": self._timeout,
                }
                # JSON mode only where the provider is known to support it
                if "gpt-4" in self._model or "gpt-3.5" in self._model or self._provider == "groq":
                    kwargs["response_format"] = {"type": "json_object"}

                logger.debug("[%s] Attempt %d: sending request to %s", self.name, attempt, self._provider)
                resp = self._client.chat.completions.create(**kwargs)
                content = resp.choices[0].message.content or ""
                logger.debug("[%s] Response in %.2fs", self.name, time.time() - start_time)

                action = _parse_action_response(content, legal_actions)
                if action is not None:
                    return action
                logger.warning("[%s] Could not parse an action from response: %r", self.name, content)
            except Exception as e:
                logger.warning(
                    "[%s] Error on attempt %d after %.2fs: %s: %s",
                    self.name, attempt, time.time() - start_time, type(e).__name__, e,
                )

        logger.warning("[%s] All retries failed for %s; falling back", self.name, player_id)
        for a in legal_actions:
            if isinstance(a, (DrawCard, PassTurn)):
                return a
        return legal_actions[0]
