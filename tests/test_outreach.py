"""Outreach Drafting Tests

The Anthropic client is mocked; every failure path must still return a
message.
"""

import random
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from church_crm.services import outreach_service
from church_crm.services.outreach_service import (
    CLOSINGS,
    GREETINGS,
    build_prompt,
    fallback_message,
    generate_outreach_message,
)


def _reply(*texts):
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=t) for t in texts])


class TestFallbackMessage:

    def test_uses_name_and_template_parts(self):
        message = fallback_message("Diana", rng=random.Random(7))

        assert "Diana" in message
        assert message.split(" ")[0] in " ".join(GREETINGS)
        assert any(closing in message for closing in CLOSINGS)

    def test_prompt_mentions_name_and_days(self):
        prompt = build_prompt("Diana", 21)

        assert "Diana" in prompt
        assert "21" in prompt
        assert "Kiswahili" in prompt


class TestGenerateOutreachMessage:

    def test_no_api_key_uses_fallback(self):
        with patch.object(outreach_service.anthropic, "Anthropic") as mock_cls:
            message = generate_outreach_message("Diana", api_key="")

        mock_cls.assert_not_called()
        assert "Diana" in message

    def test_model_reply_is_returned(self):
        mock_client = MagicMock()
        mock_client.messages.create.return_value = _reply("Habari Diana, ", "tumekukosa.")

        with patch.object(outreach_service.anthropic, "Anthropic", return_value=mock_client):
            message = generate_outreach_message("Diana", 21, api_key="sk-test")

        assert message == "Habari Diana, tumekukosa."
        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["max_tokens"] == 250
        assert "Diana" in kwargs["messages"][0]["content"]

    def test_api_error_uses_fallback(self):
        mock_client = MagicMock()
        mock_client.messages.create.side_effect = RuntimeError("overloaded")

        with patch.object(outreach_service.anthropic, "Anthropic", return_value=mock_client):
            message = generate_outreach_message("Diana", api_key="sk-test")

        assert message
        assert "Diana" in message

    def test_empty_reply_uses_fallback(self):
        mock_client = MagicMock()
        mock_client.messages.create.return_value = _reply("   ")

        with patch.object(outreach_service.anthropic, "Anthropic", return_value=mock_client):
            message = generate_outreach_message("Diana", api_key="sk-test")

        assert "Diana" in message
        assert message.strip()
