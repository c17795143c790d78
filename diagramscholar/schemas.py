from typing import List, Literal
from pydantic import BaseModel, Field, model_validator

# --- Pydantic Models for Schema Enforcement ---
# Field names are camelCase because they are the JSON contract with the model.

class QuizQuestion(BaseModel):
    question: str
    options: List[str] = Field(description="An array of exactly 4 possible answers.")
    correctAnswerIndex: int = Field(description="The index (0-3) of the correct answer.")
    explanation: str = Field(description="Briefly explain why the answer is correct.")

    @model_validator(mode="after")
    def check_answer_index(self):
        if not self.options:
            raise ValueError("question has no options")
        if not 0 <= self.correctAnswerIndex < len(self.options):
            raise ValueError(
                f"correctAnswerIndex {self.correctAnswerIndex} is outside "
                f"the {len(self.options)} options"
            )
        return self


class AnalysisResult(BaseModel):
    title: str = Field(description="A short, engaging title for the diagram.")
    explanation: str = Field(
        description="The structured explanation in Markdown format. "
        "Use '###' for section headers and '**' for bold text."
    )
    relationshipDescription: str = Field(
        description="A detailed description of one specific relationship, "
        "process flow, or connection line identified in the diagram."
    )
    quiz: List[QuizQuestion]


class QuizList(BaseModel):
    quiz: List[QuizQuestion]


class ChatMessage(BaseModel):
    id: str
    sender: Literal["user", "ai"]
    text: str
