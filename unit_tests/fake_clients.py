# unit_tests/fake_clients.py
"""
In-process stand-ins for the Gemini and OpenAI SDK clients.
They answer from a script of canned texts (or raise) and record every call.
"""

import json
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Union


def gemini_response(text: Optional[str]) -> SimpleNamespace:
    """Response shaped like genai's: candidates[0].content.parts[0].text."""
    return SimpleNamespace(
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=[SimpleNamespace(text=text)]))]
    )


def nutrition_answer(calories=250, protein=8, carbs=30, fat=10, fiber=3, sugar=4, confidence=0.85,
                     prose: str = "Here is the estimate:") -> str:
    body = {
        "nutrition": {
            "calories": calories,
            "protein": protein,
            "carbs": carbs,
            "fat": fat,
            "fiber": fiber,
            "sugar": sugar,
        },
        "confidence": confidence,
    }
    return f"{prose}\n```json\n{json.dumps(body)}\n```"


class _Models:
    def __init__(self, owner: "FakeGeminiClient"):
        self.owner = owner

    def generate_content(self, model: str, contents: List[Any], config: Any = None):
        self.owner.calls.append({"model": model, "contents": contents, "config": config})
        if self.owner.error is not None:
            raise self.owner.error
        answer = self.owner.answers[min(len(self.owner.calls), len(self.owner.answers)) - 1]
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, SimpleNamespace):
            return answer
        return gemini_response(answer)


class FakeGeminiClient:
    """`client.models.generate_content(...)` returning scripted answers in order."""

    def __init__(self, answers: Union[str, List[Any], None] = None, error: Optional[Exception] = None):
        if answers is None:
            answers = [nutrition_answer()]
        self.answers = answers if isinstance(answers, list) else [answers]
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.models = _Models(self)


class _Completions:
    def __init__(self, owner: "FakeOpenAIClient"):
        self.owner = owner

    def create(self, **kwargs):
        self.owner.calls.append(kwargs)
        if self.owner.error is not None:
            raise self.owner.error
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=self.owner.content))]
        )


class FakeOpenAIClient:
    """`client.chat.completions.create(...)` returning one scripted content string."""

    def __init__(self, content: Union[str, Dict[str, Any], None] = None, error: Optional[Exception] = None):
        self.content = json.dumps(content) if isinstance(content, dict) else content
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.chat = SimpleNamespace(completions=_Completions(self))
