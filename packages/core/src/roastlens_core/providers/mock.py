"""Offline provider for local development and UI testing.

Makes no network call. It sleeps for 1.5–2.5 s to feel like a real model,
then emits a JSON reply that goes through the same normalizer as the real
providers. The random source and sleep function are injectable so tests
can run instantly and deterministically.
"""

from __future__ import annotations

import json
import random
import time
from collections.abc import Callable

from roastlens_core.models import ModelDescriptor, ReviewRequest
from roastlens_core.providers.base import BaseProvider

MIN_DELAY_SECONDS = 1.5
MAX_DELAY_SECONDS = 2.5
MIN_SCORE = 20
MAX_SCORE = 80
MAX_ISSUES = 4
ROAST_COUNT = 4

MOCK_ROASTS = (
    "I've seen better code written by a mass of caffeinated monkeys.",
    "This code is like a horror movie - I'm afraid to scroll down.",
    "Did you write this with your eyes closed? Because it looks like it.",
    "This function is so long, it needs its own zip code.",
    "I'm not saying this code is bad, but even Stack Overflow would reject it.",
    "Your variable names are so cryptic, even the NSA gave up decoding them.",
    "This code has more red flags than a communist parade.",
    "I've seen spaghetti more organized than this codebase.",
)

MOCK_VERDICTS = (
    "I sentence this code to mass refactoring.",
    "This code is guilty of crimes against readability.",
    "The only thing this code is good for is a 'what not to do' tutorial.",
    "I'm calling the code police. This is a felony.",
    "This code needs therapy, not a code review.",
)

MOCK_ISSUES = (
    {
        "type": "error",
        "title": "This function is committing war crimes",
        "description": "I don't even know where to start. This function does 47 things and none of them well.",
        "lineStart": 1,
        "lineEnd": 5,
        "suggestion": "Try breaking this into smaller functions. You know, like a normal person would.",
    },
    {
        "type": "warning",
        "title": "Variable naming from the shadow realm",
        "description": "What is 'x'? What is 'temp2'? Are you writing code or playing Scrabble with leftover tiles?",
        "lineStart": 3,
        "lineEnd": 3,
        "suggestion": "Use descriptive names. 'user_email' is better than 'e'. Revolutionary, I know.",
    },
    {
        "type": "suggestion",
        "title": "Copy-paste detected (poorly)",
        "description": "I see you've discovered Ctrl+C and Ctrl+V. Unfortunately, you forgot about functions.",
        "lineStart": 10,
        "lineEnd": 20,
        "suggestion": "Ever heard of DRY? Don't Repeat Yourself. Google it.",
    },
    {
        "type": "info",
        "title": "Missing error handling",
        "description": "What happens when this fails? Oh right, nothing. It just crashes. Magnificent.",
        "lineStart": 7,
        "lineEnd": 7,
        "suggestion": "Add a try/except. Your users will thank you. Your future self will thank you.",
    },
)

MOCK_IMPROVEMENTS = (
    "Maybe try using a linter? It's like spell-check but for your code crimes.",
    "Consider adding comments. Future you will hate present you otherwise.",
    "Have you considered reading the documentation? Revolutionary concept, I know.",
    "Perhaps run your code before committing? Just a thought.",
)


class MockProvider(BaseProvider):
    provider_id = "mock"
    name = "Mock (Development)"
    supported_models = (ModelDescriptor("mock-roaster", "Mock Roaster", "Fake responses for testing"),)

    def __init__(self, rng: random.Random | None = None, sleep: Callable[[float], None] = time.sleep):
        self._rng = rng or random.Random()
        self._sleep = sleep

    def _complete(self, request: ReviewRequest, model_id: str) -> str:
        self._sleep(self._rng.uniform(MIN_DELAY_SECONDS, MAX_DELAY_SECONDS))

        score = self._rng.randint(MIN_SCORE, MAX_SCORE)
        issue_count = min(len(request.code.splitlines()) or 1, MAX_ISSUES)
        if score > 50:
            positives = ["At least the syntax is valid. The bar was on the floor and you barely cleared it."]
        else:
            positives = ["Well... the file extension is correct. That's something."]

        return json.dumps(
            {
                "summary": (
                    f"Oh boy, where do I even begin? This {request.language or 'code'} looks like it was written "
                    "during an earthquake while blindfolded. I've seen better structure in a bowl of alphabet soup. "
                    "But hey, at least it... exists? That's about the nicest thing I can say."
                ),
                "issues": self._rng.sample(MOCK_ISSUES, issue_count),
                "roasts": self._rng.sample(MOCK_ROASTS, ROAST_COUNT),
                "improvements": list(MOCK_IMPROVEMENTS),
                "positives": positives,
                "score": score,
                "verdict": self._rng.choice(MOCK_VERDICTS),
            }
        )
