"""
Lesson content schemas for BhashaPath.

A lesson is an ordered list of questions. Each question kind is a tagged
variant on its `type` field so lesson JSON can be validated in one pass.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, Literal, Union, Annotated


class QuestionBase(BaseModel):
    type: str
    question: str
    correct_answer: str
    explanation: Optional[str] = None
    audio_text: Optional[str] = None  # spoken instead of correct_answer when set

    @property
    def spoken_text(self) -> str:
        return self.audio_text or self.correct_answer


class ChoiceQuestionBase(QuestionBase):
    options: list[str] = Field(..., min_length=2)

    @model_validator(mode="after")
    def answer_in_options(self):
        if self.correct_answer not in self.options:
            raise ValueError(
                f"correct_answer {self.correct_answer!r} is not one of the options"
            )
        return self


class VocabularyQuestion(ChoiceQuestionBase):
    type: Literal["vocabulary"] = "vocabulary"


class TranslationQuestion(ChoiceQuestionBase):
    type: Literal["translation"] = "translation"


class ListeningQuestion(ChoiceQuestionBase):
    """Learner plays the audio, then picks what was said."""
    type: Literal["listening"] = "listening"


class PronunciationQuestion(QuestionBase):
    """Learner says correct_answer aloud; graded by the speech recognizer."""
    type: Literal["pronunciation"] = "pronunciation"


Question = Annotated[
    Union[
        VocabularyQuestion,
        TranslationQuestion,
        ListeningQuestion,
        PronunciationQuestion,
    ],
    Field(discriminator="type"),
]


class LessonContent(BaseModel):
    lesson_id: str
    title: str
    language: str = "marathi"
    questions: list[Question] = Field(..., min_length=1)
