"""
Questionnaire Engine - Guided question/answer sequence.

States: IDLE -> ACTIVE(0) -> ... -> ACTIVE(last) -> COMPLETED, with
skip() returning an ACTIVE run to IDLE and discarding its answers.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..models.questions import (
    QuestionSpec,
    QuestionnaireState,
    QuestionnaireStatus,
    TRAVEL_QUESTIONS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnswerOutcome:
    """Result of answering one question.

    Exactly one of `next_question` and `answers` is set: the next question
    while the run continues, the full answers map once it completes.
    """
    next_question: Optional[QuestionSpec] = None
    answers: Optional[dict[str, str]] = None

    @property
    def completed(self) -> bool:
        return self.answers is not None


class QuestionnaireEngine:
    """Asks every catalog question once, in order, and collects the answers."""

    def __init__(self, questions: Sequence[QuestionSpec] = TRAVEL_QUESTIONS):
        if not questions:
            raise ValueError("Questionnaire needs at least one question")
        self._questions = tuple(questions)
        self._status = QuestionnaireStatus.IDLE
        self._index = 0
        self._answers: dict[str, str] = {}

    @property
    def questions(self) -> tuple[QuestionSpec, ...]:
        return self._questions

    @property
    def status(self) -> QuestionnaireStatus:
        return self._status

    @property
    def active(self) -> bool:
        return self._status == QuestionnaireStatus.ACTIVE

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_question(self) -> Optional[QuestionSpec]:
        """The question awaiting an answer, None unless active."""
        if not self.active:
            return None
        return self._questions[self._index]

    @property
    def progress(self) -> tuple[int, int]:
        """(1-based question number, total questions)."""
        return self._index + 1, len(self._questions)

    @property
    def answers(self) -> dict[str, str]:
        return dict(self._answers)

    @property
    def state(self) -> QuestionnaireState:
        return QuestionnaireState(
            status=self._status,
            current_question_index=self._index,
            answers=dict(self._answers),
            questions=self._questions,
        )

    def start(self) -> QuestionSpec:
        """Begin a new run and return the first question."""
        if self.active:
            return self._questions[self._index]

        self._status = QuestionnaireStatus.ACTIVE
        self._index = 0
        self._answers = {}
        logger.info(f"Questionnaire started ({len(self._questions)} questions)")
        return self._questions[0]

    def answer(self, text: str) -> AnswerOutcome:
        """Record an answer to the current question and advance."""
        if not self.active:
            raise RuntimeError("Questionnaire is not active")

        question = self._questions[self._index]
        self._answers[question.id] = text

        if self._index < len(self._questions) - 1:
            self._index += 1
            return AnswerOutcome(next_question=self._questions[self._index])

        self._status = QuestionnaireStatus.COMPLETED
        logger.info("Questionnaire completed")
        return AnswerOutcome(answers=dict(self._answers))

    def skip(self) -> bool:
        """Cancel an active run. Returns False if nothing was running."""
        if not self.active:
            return False

        logger.info(f"Questionnaire skipped at question {self._index + 1}")
        self._status = QuestionnaireStatus.IDLE
        self._index = 0
        self._answers = {}
        return True
