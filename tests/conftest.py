"""
Shared fixtures for DiagramScholar tests.

A FakeClient stands in for google.genai.Client: it records every
generate_content call and replays queued responses (text or exceptions).
"""

import io
import json
from types import SimpleNamespace

import pytest
from PIL import Image

from diagramscholar.image_input import ImagePayload
from diagramscholar.pipeline import DiagramAnalysisPipeline
from diagramscholar.schemas import QuizQuestion


class FakeModels:
    def __init__(self):
        self.responses = []
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def generate_content(self, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return SimpleNamespace(text=response)


class FakeClient:
    def __init__(self):
        self.models = FakeModels()


def make_question(text="What does the pump do?", correct=1, explanation="It moves fluid."):
    return QuizQuestion(
        question=text,
        options=["Stores heat", "Moves fluid", "Filters air", "Measures flow"],
        correctAnswerIndex=correct,
        explanation=explanation,
    )


def image_bytes(fmt="PNG", size=(8, 6)):
    buf = io.BytesIO()
    Image.new("RGB", size, color=(30, 60, 90)).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def png_bytes():
    return image_bytes("PNG")


@pytest.fixture
def png_image(png_bytes):
    return ImagePayload(data=png_bytes, mime_type="image/png")


@pytest.fixture
def questions():
    return [
        make_question("Q1?", correct=1),
        make_question("Q2?", correct=0),
        make_question("Q3?", correct=3),
    ]


@pytest.fixture
def analysis_payload(questions):
    return {
        "title": "The Water Cycle Machine",
        "explanation": "### Main Purpose\nShows how **water** moves.\n- Evaporation\n- Condensation",
        "relationshipDescription": "Heat from the sun drives evaporation from the ocean.",
        "quiz": [q.model_dump() for q in questions],
    }


@pytest.fixture
def analysis_json(analysis_payload):
    return json.dumps(analysis_payload)


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def pipeline(fake_client):
    return DiagramAnalysisPipeline(api_key="test-key", model="test-model", quiz_size=3, client=fake_client)
