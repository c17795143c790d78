"""
DiagramScholar - AI-Powered Diagram Study Aid

This package provides the core functionality for explaining technical diagrams
using Google's Gemini AI. It includes:

- Pipeline: Gemini requests (explanation + quiz, more questions, tutor answers)
- Image Input: Upload validation and the inline-data wire format
- Formatter: Markdown-subset explanation -> typed blocks -> HTML / text
- Session: Processing status, quiz state machine and chat transcript
- Schemas: Pydantic models for the structured model output

Main exports:
    - DiagramAnalysisPipeline: Gemini request orchestrator
    - StudySession: Per-user state behind the Streamlit UI
    - AnalysisResult, QuizQuestion, QuizList, ChatMessage: Data models
    - load_image, ImagePayload: Upload handling
    - format_text: Explanation formatter

Usage:
    from diagramscholar import DiagramAnalysisPipeline, load_image

    pipeline = DiagramAnalysisPipeline()
    image = load_image(image_bytes, "diagram.png", "image/png")
    result = pipeline.analyze_image(image)
"""

from .errors import (
    DiagramScholarError,
    ConfigurationError,
    InvalidImageError,
    AnalysisError,
    QuizGenerationError,
    TutorError,
)
from .schemas import AnalysisResult, QuizQuestion, QuizList, ChatMessage
from .image_input import ImagePayload, load_image
from .formatter import format_text, render_html, render_text
from .pipeline import DiagramAnalysisPipeline
from .session import StudySession, QuizSession, ChatSession, ProcessingState

__all__ = [
    "DiagramAnalysisPipeline",
    "StudySession",
    "QuizSession",
    "ChatSession",
    "ProcessingState",
    "AnalysisResult",
    "QuizQuestion",
    "QuizList",
    "ChatMessage",
    "ImagePayload",
    "load_image",
    "format_text",
    "render_html",
    "render_text",
    "DiagramScholarError",
    "ConfigurationError",
    "InvalidImageError",
    "AnalysisError",
    "QuizGenerationError",
    "TutorError",
]

__version__ = "0.1.0"
