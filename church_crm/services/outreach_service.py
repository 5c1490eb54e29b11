"""Outreach message drafting for members who have been missing services.

A single request to the Anthropic Messages API; any failure (no key, network
error, API error, empty reply) falls back to a template assembled from random
parts. No retries.
"""

import logging
import random
from typing import Optional

import anthropic

from church_crm.config import settings

logger = logging.getLogger(__name__)

DEFAULT_DAYS_ABSENT = 21

GREETINGS = ["Mpendwa", "Habari", "Bwana asifiwe"]
OPENERS = [
    "tumekukosa katika ibada zetu za hivi karibuni.",
    "tumeona hukuhudhuria ibada kwa Jumapili chache zilizopita.",
    "uwepo wako umekosekana katika mikutano yetu.",
]
CLOSINGS = [
    "Tunatumai kukuona hivi karibuni!",
    "Tunakuombea.",
    "Tujulishe ikiwa kuna chochote tunaweza kukusaidia.",
]


def build_prompt(member_name: str, days_absent: int) -> str:
    return (
        f"Andika barua pepe fupi, yenye upendo na kutia moyo kwa mshiriki wa kanisa anayeitwa "
        f"{member_name} ambaye amekosa ibada kwa takriban siku {days_absent}. "
        "Lenga kumjulia hali na kumjulisha kuwa kanisa linamkumbuka. "
        "Weka lugha ya kichungaji na ya heshima. Ujumbe uwe kwa Kiswahili."
    )


def fallback_message(name: str, rng: Optional[random.Random] = None) -> str:
    """Template message with a random greeting, opener and closing"""
    rng = rng or random
    greeting = rng.choice(GREETINGS)
    opener = rng.choice(OPENERS)
    closing = rng.choice(CLOSINGS)

    return (
        f"{greeting} {name},\n\n"
        f"Tunatumai barua hii inakukuta ukiwa mzima. {opener} "
        "Tulitaka tu kukujulia hali na kuhakikisha kuwa uko salama.\n\n"
        "Wewe ni sehemu muhimu ya jamii yetu, na tungependa kukuona tena utakapoweza.\n\n"
        f"{closing}\n\n"
        "Baraka,\nTimu yawachungaji"
    )


def generate_outreach_message(
    member_name: str,
    days_absent: int = DEFAULT_DAYS_ABSENT,
    api_key: Optional[str] = None,
) -> str:
    """Draft a short pastoral check-in message. Always returns a non-empty string."""
    api_key = api_key if api_key is not None else settings.anthropic_api_key

    try:
        if not api_key:
            raise ValueError("No API key configured")

        client = anthropic.Anthropic(api_key=api_key)
        response = client.messages.create(
            model=settings.outreach_model,
            max_tokens=250,
            temperature=0.7,
            messages=[
                {"role": "user", "content": build_prompt(member_name, days_absent)}
            ]
        )

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        ).strip()
        if text:
            return text
        logger.warning("Outreach generation returned no text, using template fallback")

    except Exception as e:
        logger.warning(f"AI generation failed, using template fallback: {e}")

    return fallback_message(member_name)
