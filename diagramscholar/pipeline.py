"""
DiagramScholar Analysis Pipeline Module

This module wraps the three Gemini calls the application makes. Every call
sends the uploaded diagram as an inline-data part followed by a text prompt.

Operations:
    1. Analyze Image (analyze_image)
       - Input: ImagePayload
       - Output: AnalysisResult (title, explanation, relationshipDescription, quiz)
       - Structured JSON output enforced with response_schema

    2. Generate More Questions (generate_more_questions)
       - Input: ImagePayload
       - Output: List[QuizQuestion] (fresh questions on different aspects)

    3. Ask Tutor (ask_tutor)
       - Input: ImagePayload, question text
       - Output: Short plain-text answer grounded in the diagram

Failures (network, API, empty or malformed responses) are logged and
re-raised as DiagramScholarError subclasses carrying a user-facing message.

Usage:
    from diagramscholar import DiagramAnalysisPipeline, load_image

    pipeline = DiagramAnalysisPipeline(api_key="your_key")
    image = load_image(open("diagram.png", "rb").read(), "diagram.png")
    result = pipeline.analyze_image(image)
    answer = pipeline.ask_tutor(image, "What does the arrow between A and B mean?")
"""

import logging
from typing import List, Optional
from google import genai
from google.genai import types

from . import prompts
from .config import get_settings
from .errors import ConfigurationError, AnalysisError, QuizGenerationError, TutorError
from .image_input import ImagePayload
from .schemas import AnalysisResult, QuizList, QuizQuestion

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "API Key is missing. Please check your environment configuration."
ANALYSIS_FAILED_MESSAGE = "Failed to analyze the diagram. Please try again."
QUIZ_FAILED_MESSAGE = "Failed to generate new questions."
TUTOR_FAILED_MESSAGE = "Failed to get an answer."
EMPTY_TUTOR_ANSWER = "I couldn't generate a response. Please try again."


class EmptyResponseError(RuntimeError):
    """The model returned no text."""


class DiagramAnalysisPipeline:
    """
    Orchestrates the Gemini requests behind the study aid.

    Attributes:
        api_key (str): Google Gemini API key
        model (str): Model name used for every request
        quiz_size (int): Number of questions requested per quiz
        client (genai.Client): Initialized Gemini API client

    Example:
        >>> pipeline = DiagramAnalysisPipeline()
        >>> result = pipeline.analyze_image(image)
        >>> print(result.title)
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 quiz_size: Optional[int] = None, client: Optional[genai.Client] = None):
        settings = get_settings()
        self.api_key = api_key or settings.api_key
        if not self.api_key and client is None:
            raise ConfigurationError(MISSING_KEY_MESSAGE)
        self.model = model or settings.model
        self.quiz_size = quiz_size or settings.quiz_size
        self.client = client or genai.Client(api_key=self.api_key)

    def _contents(self, image: ImagePayload, text: str) -> List[types.Content]:
        return [
            types.Content(role="user", parts=[
                types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
                types.Part.from_text(text=text),
            ])
        ]

    def _generate(self, image: ImagePayload, text: str, config: types.GenerateContentConfig) -> str:
        response = self.client.models.generate_content(
            model=self.model,
            contents=self._contents(image, text),
            config=config,
        )
        if not response.text:
            raise EmptyResponseError("No response received from the model.")
        return response.text

    def analyze_image(self, image: ImagePayload) -> AnalysisResult:
        logger.info("Analyzing %s diagram (%d bytes) with %s", image.mime_type, image.size, self.model)
        config = types.GenerateContentConfig(
            system_instruction=prompts.get_analysis_system_instruction(self.quiz_size),
            response_mime_type="application/json",
            response_schema=AnalysisResult,
        )
        try:
            text = self._generate(image, prompts.get_analysis_prompt(self.quiz_size), config)
            result = AnalysisResult.model_validate_json(text)
        except Exception as exc:
            logger.exception("Gemini analysis error: %s", exc)
            raise AnalysisError(ANALYSIS_FAILED_MESSAGE) from exc
        logger.info("Analysis complete: %r with %d quiz questions", result.title, len(result.quiz))
        return result

    def generate_more_questions(self, image: ImagePayload) -> List[QuizQuestion]:
        config = types.GenerateContentConfig(
            system_instruction=prompts.get_more_questions_system_instruction(self.quiz_size),
            response_mime_type="application/json",
            response_schema=QuizList,
        )
        try:
            text = self._generate(image, prompts.get_more_questions_prompt(self.quiz_size), config)
            quiz = QuizList.model_validate_json(text).quiz
        except Exception as exc:
            logger.exception("Gemini quiz generation error: %s", exc)
            raise QuizGenerationError(QUIZ_FAILED_MESSAGE) from exc
        logger.info("Generated %d new quiz questions", len(quiz))
        return quiz

    def ask_tutor(self, image: ImagePayload, question: str) -> str:
        config = types.GenerateContentConfig(system_instruction=prompts.TUTOR_SYSTEM_INSTRUCTION)
        try:
            return self._generate(image, question, config)
        except EmptyResponseError:
            return EMPTY_TUTOR_ANSWER
        except Exception as exc:
            logger.exception("Gemini tutor error: %s", exc)
            raise TutorError(TUTOR_FAILED_MESSAGE) from exc
