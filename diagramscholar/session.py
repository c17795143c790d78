"""
DiagramScholar Session State Module

Plain-Python state kept per browser session (Streamlit stores a StudySession
in st.session_state). Nothing here talks to Streamlit, so the flows can be
exercised without a UI.

Classes:
    - ProcessingState: idle -> analyzing -> complete | error
    - QuizSession: one-question-at-a-time quiz with final answers and a results view
    - ChatSession: question/answer transcript about the current diagram
    - StudySession: image + analysis result + quiz + chat for one upload
"""

import logging
from itertools import count
from typing import Callable, List, Optional

from .errors import DiagramScholarError
from .image_input import ImagePayload, load_image
from .schemas import AnalysisResult, ChatMessage, QuizQuestion

logger = logging.getLogger(__name__)

IDLE = "idle"
ANALYZING = "analyzing"
COMPLETE = "complete"
ERROR = "error"

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred while processing the image."
CHAT_ERROR_MESSAGE = "Sorry, I couldn't answer that right now."


class ProcessingState:
    def __init__(self):
        self.status = IDLE
        self.error: Optional[str] = None

    def start(self) -> None:
        self.status = ANALYZING
        self.error = None

    def complete(self) -> None:
        self.status = COMPLETE
        self.error = None

    def fail(self, message: Optional[str]) -> None:
        self.status = ERROR
        self.error = message or UNEXPECTED_ERROR_MESSAGE

    def reset(self) -> None:
        self.status = IDLE
        self.error = None


def feedback_message(percentage: int) -> str:
    if percentage == 100:
        return "Excellent work!"
    if percentage >= 60:
        return "Good job, keep studying!"
    return "Keep studying!"


def option_label(index: int) -> str:
    """0 -> 'A', 1 -> 'B', ..."""
    return chr(ord("A") + index)


class QuizSession:
    """
    Linear quiz state machine.

    Answers are final: once an option is picked for a question it cannot be
    changed until the quiz is restarted. next() on the last question switches
    to the results view.
    """

    def __init__(self, questions: Optional[List[QuizQuestion]] = None):
        self.load(questions or [])

    def load(self, questions: List[QuizQuestion]) -> None:
        self.questions = list(questions)
        self.restart()

    def restart(self) -> None:
        self.current_index = 0
        self.answers: List[Optional[int]] = [None] * len(self.questions)
        self.show_results = False

    @property
    def is_empty(self) -> bool:
        return not self.questions

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        if self.is_empty:
            return None
        return self.questions[self.current_index]

    @property
    def current_answer(self) -> Optional[int]:
        if self.is_empty:
            return None
        return self.answers[self.current_index]

    @property
    def is_answered(self) -> bool:
        return self.current_answer is not None

    @property
    def is_first(self) -> bool:
        return self.current_index == 0

    @property
    def is_last(self) -> bool:
        return self.current_index >= len(self.questions) - 1

    def select(self, option: int) -> bool:
        """Records an answer for the current question. Returns False if it was already answered."""
        question = self.current_question
        if question is None or self.show_results:
            return False
        if not 0 <= option < len(question.options):
            raise ValueError(f"option {option} is out of range for {len(question.options)} options")
        if self.is_answered:
            return False
        self.answers[self.current_index] = option
        return True

    def is_correct(self, index: Optional[int] = None) -> bool:
        if self.is_empty:
            return False
        if index is None:
            index = self.current_index
        answer = self.answers[index]
        return answer is not None and answer == self.questions[index].correctAnswerIndex

    def next(self) -> None:
        if self.is_empty:
            return
        if not self.is_last:
            self.current_index += 1
        else:
            self.show_results = True

    def previous(self) -> None:
        if self.current_index > 0:
            self.current_index -= 1

    @property
    def score(self) -> int:
        return sum(1 for i in range(len(self.questions)) if self.is_correct(i))

    @property
    def percentage(self) -> int:
        if self.is_empty:
            return 0
        # Halves round up
        total = len(self.questions)
        return (self.score * 200 + total) // (2 * total)

    @property
    def feedback(self) -> str:
        return feedback_message(self.percentage)


class ChatSession:
    def __init__(self):
        self.messages: List[ChatMessage] = []
        self.is_loading = False
        self._ids = count(1)

    def _append(self, sender: str, text: str) -> ChatMessage:
        message = ChatMessage(id=str(next(self._ids)), sender=sender, text=text)
        self.messages.append(message)
        return message

    def submit(self, question: str, answer_fn: Callable[[str], str]) -> Optional[ChatMessage]:
        """
        Appends the user's question and the tutor's answer to the transcript.

        Blank questions and submissions made while a previous request is still
        running are ignored (returns None). A failed answer is replaced by an
        apology message.
        """
        if not question or not question.strip() or self.is_loading:
            return None
        self._append("user", question)
        self.is_loading = True
        try:
            text = answer_fn(question)
        except DiagramScholarError as exc:
            logger.warning("Tutor request failed: %s", exc)
            text = CHAT_ERROR_MESSAGE
        finally:
            self.is_loading = False
        return self._append("ai", text)

    def clear(self) -> None:
        self.messages = []
        self.is_loading = False


class StudySession:
    """Everything the UI shows for the current upload."""

    def __init__(self, max_upload_bytes: Optional[int] = None):
        self.max_upload_bytes = max_upload_bytes
        self.state = ProcessingState()
        self.image: Optional[ImagePayload] = None
        self.result: Optional[AnalysisResult] = None
        self.quiz = QuizSession()
        self.chat = ChatSession()
        self.is_generating_more = False
        self.notice: Optional[str] = None

    def reset(self) -> None:
        self.state.reset()
        self.image = None
        self.result = None
        self.quiz.load([])
        self.chat.clear()
        self.is_generating_more = False
        self.notice = None

    def process_upload(self, pipeline, data: bytes, filename: Optional[str] = None,
                       mime_type: Optional[str] = None) -> bool:
        """Validates and analyzes an uploaded file. Returns True when the analysis completed."""
        self.reset()
        self.state.start()
        try:
            self.image = load_image(data, filename, mime_type, max_bytes=self.max_upload_bytes)
            self.result = pipeline.analyze_image(self.image)
        except DiagramScholarError as exc:
            self.state.fail(str(exc))
            return False
        self.quiz.load(self.result.quiz)
        self.state.complete()
        return True

    def generate_more_questions(self, pipeline) -> bool:
        """Replaces the quiz with fresh questions; the current quiz is kept if generation fails."""
        if self.image is None or self.result is None or self.is_generating_more:
            return False
        self.is_generating_more = True
        self.notice = None
        try:
            questions = pipeline.generate_more_questions(self.image)
        except DiagramScholarError as exc:
            logger.warning("Failed to generate more questions: %s", exc)
            self.notice = str(exc)
            return False
        finally:
            self.is_generating_more = False
        self.result = self.result.model_copy(update={"quiz": questions})
        self.quiz.load(questions)
        return True

    def ask(self, pipeline, question: str) -> Optional[ChatMessage]:
        if self.image is None:
            return None
        image = self.image
        return self.chat.submit(question, lambda q: pipeline.ask_tutor(image, q))
