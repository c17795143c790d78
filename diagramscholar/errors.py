"""Exceptions raised by DiagramScholar.

Every exception carries the message that should be shown to the user, so the
UI can display ``str(exc)`` directly.
"""


class DiagramScholarError(Exception):
    """Base class for all DiagramScholar errors."""


class ConfigurationError(DiagramScholarError, ValueError):
    pass


class InvalidImageError(DiagramScholarError, ValueError):
    pass


class AnalysisError(DiagramScholarError):
    pass


class QuizGenerationError(DiagramScholarError):
    pass


class TutorError(DiagramScholarError):
    pass
