from __future__ import annotations

import json
import logging
from typing import Any

from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You help people recover lost property. "
    "Given what a user searched for and a list of lost or found item reports, "
    "write a short, friendly one-sentence note for each report saying why it "
    "may (or may not) be the item the user is looking for. Mention concrete "
    "details such as colour, brand, location or date.\n\n"
    "Return ONLY valid JSON in this exact format:\n"
    '{"explanations": [{"id": "<item_id>", "reason": "<one sentence>"}]}\n'
    "Include only items from the provided list."
)


def _build_user_message(query: str, candidates: list[dict[str, Any]]) -> str:
    lines = ["## Search", f"- Query: {query}"]

    lines.append("\n## Item Reports")
    lines.append("| ID | Status | Title | Category | Location | Date | Description |")
    lines.append("|---|---|---|---|---|---|---|")
    for c in candidates:
        description = " ".join(str(c.get("description", "")).split())
        lines.append(
            f"| {c['id']} | {c.get('status', '?')} | {c.get('title', '')} "
            f"| {c.get('category', '')} | {c.get('location', '')} "
            f"| {c.get('date_lost_found', '')} | {description} |"
        )

    return "\n".join(lines)


def explain_matches(
    query: str,
    candidates: list[dict[str, Any]],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> dict[str, str]:
    """
    Call Groq LLM to explain why each candidate matches *query*.

    Returns a dict mapping item id -> reason string.
    Returns empty dict on any failure (timeout, bad JSON, API error).
    """
    if not config.enabled or not config.api_key:
        return {}

    if not candidates or not query:
        return {}

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": _build_user_message(query, candidates)},
            ],
            max_tokens=config.max_tokens,
            temperature=0.3,
            response_format={"type": "json_object"},
        )

        content = response.choices[0].message.content or ""
        parsed = json.loads(content)

        known_ids = {str(c["id"]) for c in candidates}
        results: dict[str, str] = {}
        for item in parsed.get("explanations", []):
            iid = str(item.get("id", ""))
            reason = item.get("reason", "")
            if iid in known_ids and reason:
                results[iid] = reason

        return results

    except Exception:
        logger.warning("Groq LLM call failed, returning matches without explanations", exc_info=True)
        return {}
