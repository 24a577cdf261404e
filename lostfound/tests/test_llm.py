import json
from unittest.mock import MagicMock, patch

from lostfound.llm.config import LLMConfig
from lostfound.llm.groq_client import _build_user_message, explain_matches

SAMPLE_CANDIDATES = [
    {"id": "item-2", "status": "found", "title": "Black Leather Wallet", "category": "Bags & Wallets",
     "location": "Times Square, NYC", "date_lost_found": "2024-01-14",
     "description": "Found a black leather wallet with credit cards."},
    {"id": "item-4", "status": "found", "title": "Blue Backpack", "category": "Bags & Wallets",
     "location": "5th Avenue Coffee Shop, New York", "date_lost_found": "2024-01-12",
     "description": "Found a blue Jansport backpack."},
]

ENABLED_CONFIG = LLMConfig(api_key="test-key", enabled=True)
DISABLED_CONFIG = LLMConfig(api_key="test-key", enabled=False)


def _mock_groq_response(content: str) -> MagicMock:
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


@patch("lostfound.llm.groq_client.Groq")
def test_explain_matches_returns_reasons(mock_groq_cls):
    llm_response = json.dumps({
        "explanations": [
            {"id": "item-2", "reason": "A black leather wallet found near Times Square."},
            {"id": "item-4", "reason": "Bags category, but it is a backpack rather than a wallet."},
        ]
    })
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response(llm_response)

    result = explain_matches("black wallet", SAMPLE_CANDIDATES, config=ENABLED_CONFIG)

    assert result["item-2"] == "A black leather wallet found near Times Square."
    assert result["item-4"].startswith("Bags category")


@patch("lostfound.llm.groq_client.Groq")
def test_explain_matches_ignores_unknown_ids(mock_groq_cls):
    llm_response = json.dumps({"explanations": [{"id": "item-99", "reason": "Invented."}]})
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response(llm_response)

    assert explain_matches("wallet", SAMPLE_CANDIDATES, config=ENABLED_CONFIG) == {}


@patch("lostfound.llm.groq_client.Groq")
def test_explain_matches_fallback_on_api_error(mock_groq_cls):
    mock_groq_cls.return_value.chat.completions.create.side_effect = Exception("API timeout")

    result = explain_matches("wallet", SAMPLE_CANDIDATES, config=ENABLED_CONFIG)

    assert result == {}


@patch("lostfound.llm.groq_client.Groq")
def test_explain_matches_fallback_on_bad_json(mock_groq_cls):
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response("not valid json{{{")

    result = explain_matches("wallet", SAMPLE_CANDIDATES, config=ENABLED_CONFIG)

    assert result == {}


def test_explain_matches_disabled():
    assert explain_matches("wallet", SAMPLE_CANDIDATES, config=DISABLED_CONFIG) == {}


def test_explain_matches_without_key():
    assert explain_matches("wallet", SAMPLE_CANDIDATES, config=LLMConfig(api_key="")) == {}


def test_explain_matches_empty_candidates():
    assert explain_matches("wallet", [], config=ENABLED_CONFIG) == {}


def test_user_message_lists_every_candidate():
    text = _build_user_message("wallet", SAMPLE_CANDIDATES)
    assert "- Query: wallet" in text
    assert "| item-2 | found | Black Leather Wallet |" in text
    assert "| item-4 | found | Blue Backpack |" in text
