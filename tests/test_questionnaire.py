"""Tests for the guided questionnaire."""
import pytest

from plan_assistant.models.questions import QuestionSpec, QuestionnaireStatus, TRAVEL_QUESTIONS
from plan_assistant.services.questionnaire import QuestionnaireEngine


class TestQuestionnaireEngine:
    """Test the questionnaire state machine."""

    def test_starts_idle(self):
        engine = QuestionnaireEngine()

        assert engine.status == QuestionnaireStatus.IDLE
        assert not engine.active
        assert engine.current_question is None

    def test_asks_every_question_once_in_order(self):
        """A full run visits the catalog in order and returns every answer."""
        engine = QuestionnaireEngine()
        asked = [engine.start()]

        outcome = None
        for i in range(len(TRAVEL_QUESTIONS)):
            outcome = engine.answer(f"answer {i}")
            if not outcome.completed:
                asked.append(outcome.next_question)

        assert [q.id for q in asked] == [q.id for q in TRAVEL_QUESTIONS]
        assert outcome.completed
        assert set(outcome.answers) == {q.id for q in TRAVEL_QUESTIONS}
        assert outcome.answers["destination"] == "answer 0"
        assert engine.status == QuestionnaireStatus.COMPLETED

    def test_answers_recorded_under_current_question(self):
        engine = QuestionnaireEngine()
        engine.start()

        outcome = engine.answer("Hunza Valley")

        assert engine.answers == {"destination": "Hunza Valley"}
        assert outcome.next_question.id == "startLocation"
        assert engine.current_index == 1
        assert engine.progress == (2, len(TRAVEL_QUESTIONS))

    def test_skip_discards_answers(self):
        engine = QuestionnaireEngine()
        engine.start()
        engine.answer("Hunza")
        engine.answer("Karachi")

        assert engine.skip() is True
        assert engine.status == QuestionnaireStatus.IDLE
        assert engine.answers == {}
        assert engine.skip() is False

    def test_answer_when_inactive_raises(self):
        engine = QuestionnaireEngine()

        with pytest.raises(RuntimeError):
            engine.answer("anything")

    def test_completed_run_emits_result_once(self):
        engine = QuestionnaireEngine([QuestionSpec(id="only", question="Only question?")])
        engine.start()

        outcome = engine.answer("yes")

        assert outcome.answers == {"only": "yes"}
        with pytest.raises(RuntimeError):
            engine.answer("again")

    def test_start_while_active_does_not_repeat_question(self):
        engine = QuestionnaireEngine()
        engine.start()
        engine.answer("Hunza")

        question = engine.start()

        assert question.id == "startLocation"
        assert engine.answers == {"destination": "Hunza"}

    def test_restart_after_completion(self):
        engine = QuestionnaireEngine([QuestionSpec(id="only", question="Only question?")])
        engine.start()
        engine.answer("yes")

        question = engine.start()

        assert question.id == "only"
        assert engine.active
        assert engine.answers == {}

    def test_state_snapshot(self):
        engine = QuestionnaireEngine()
        engine.start()
        engine.answer("Hunza")

        state = engine.state

        assert state.active
        assert state.current_question_index == 1
        assert state.answers == {"destination": "Hunza"}
        assert len(state.questions) == len(TRAVEL_QUESTIONS)

    def test_empty_catalog_rejected(self):
        with pytest.raises(ValueError):
            QuestionnaireEngine([])
