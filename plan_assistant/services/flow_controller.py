"""
Flow Controller - Backend conversation flow management.
Decides when to run the questionnaire, call Gemini and extract plans.
"""
import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from .errors import ApiKeyValidationError, TransportError
from .key_store import ApiKeyStore, get_key_store
from .llm_client import GeminiClient, get_llm_client
from .plan_extractor import PlanExtractor
from .prompt_composer import PromptComposer
from .trigger import should_start_questionnaire
from ..models.message import Message, Role
from ..models.questions import QuestionSpec
from ..models.session import Session

logger = logging.getLogger(__name__)


class ResponseType(str, Enum):
    """Type of response from flow controller."""
    QUESTION = "question"  # Questionnaire question
    PLAN = "plan"  # Reply that produced a plan
    ANSWER = "answer"  # Reply without actionable items
    SKIPPED = "skipped"  # Questionnaire cancelled
    BUSY = "busy"  # A model call is still outstanding
    ERROR = "error"  # Validation or transport failure


class Notice(BaseModel):
    """User-facing toast."""
    title: str
    description: Optional[str] = None
    destructive: bool = False


class ChatReply(BaseModel):
    """Outcome of one chat turn."""
    response_type: ResponseType
    message: Optional[str] = None
    notice: Optional[Notice] = None
    plan: Optional[dict] = None


KEY_REQUIRED = "Gemini API key required"


class FlowController:
    """
    Controls the conversation flow.

    One call to process_message is one user turn:
    - Start the questionnaire when a travel intent is detected
    - Feed answers to an active questionnaire
    - Otherwise send the transcript to Gemini and extract a plan
    """

    def __init__(
        self,
        llm: Optional[GeminiClient] = None,
        keys: Optional[ApiKeyStore] = None,
        composer: Optional[PromptComposer] = None,
        extractor: Optional[PlanExtractor] = None
    ):
        self.llm = llm or get_llm_client()
        self.keys = keys or get_key_store()
        self.composer = composer or PromptComposer()
        self._extractor = extractor

    async def process_message(self, session: Session, user_message: str) -> ChatReply:
        """
        Process a user message and return the reply.

        Args:
            session: Current user session
            user_message: The user's message

        Returns:
            ChatReply describing what happened
        """
        text = user_message.strip()
        if not text:
            return ChatReply(response_type=ResponseType.ERROR, message="Message is empty")

        if session.busy:
            return ChatReply(
                response_type=ResponseType.BUSY,
                message="Still working on your previous request.",
            )

        if not session.questionnaire.active and should_start_questionnaire(text):
            session.add_message(Role.USER, text)
            return self._start_questionnaire(session)

        if session.questionnaire.active:
            return await self._handle_answer(session, text)

        return await self._handle_chat(session, text)

    def skip_questionnaire(self, session: Session) -> ChatReply:
        """Cancel the questionnaire; partial answers are dropped."""
        if not session.questionnaire.skip():
            return ChatReply(response_type=ResponseType.ERROR, message="No questionnaire in progress")

        response = (
            "No problem! You can still ask me to plan your trip, and I'll create a plan "
            "based on the information you provide in your message."
        )
        session.add_message(Role.ASSISTANT, response)
        return ChatReply(response_type=ResponseType.SKIPPED, message=response)

    def select_todo(self, session: Session, plan_id: str, todo_id: str) -> Optional[str]:
        """Focus a task for a follow-up question and return the prefill text."""
        todo = session.plans.find_todo(plan_id, todo_id)
        if todo is None:
            return None
        session.plans.select_todo_for_discussion(todo)
        return self.composer.follow_up_prompt(todo)

    def _start_questionnaire(self, session: Session) -> ChatReply:
        first = session.questionnaire.start()
        response = (
            "🗺️ **Travel Planning Questionnaire**\n\n"
            "I'd like to ask you a few questions to create the perfect travel plan for you. "
            "This will help me provide personalized recommendations for routes, "
            "accommodations, and safety considerations.\n\n"
            + self._format_question(session, first)
        )
        session.add_message(Role.ASSISTANT, response)
        return ChatReply(response_type=ResponseType.QUESTION, message=response)

    async def _handle_answer(self, session: Session, answer: str) -> ChatReply:
        session.add_message(Role.USER, answer)
        outcome = session.questionnaire.answer(answer)

        if not outcome.completed:
            response = self._format_question(session, outcome.next_question)
            session.add_message(Role.ASSISTANT, response)
            return ChatReply(response_type=ResponseType.QUESTION, message=response)

        answers = outcome.answers
        summary = "\n".join(
            f"• {key[:1].upper() + key[1:]}: {value}" for key, value in answers.items()
        )
        session.add_message(
            Role.ASSISTANT,
            "Perfect! I have all the information I need. Let me create a comprehensive "
            f"travel plan based on your preferences:\n\n{summary}\n\n"
            "Generating your personalized travel itinerary..."
        )

        try:
            api_key = self.keys.require()
        except ApiKeyValidationError as e:
            return self._key_error(e)

        planning_request = Message(
            id=session.id_factory(),
            role=Role.USER,
            content=self.composer.planning_prompt(answers),
        )
        return await self._request_plan(
            session,
            api_key,
            [planning_request],
            answers=answers,
            error_title="Error generating travel plan",
            created_label="personalized tasks",
        )

    async def _handle_chat(self, session: Session, text: str) -> ChatReply:
        try:
            api_key = self.keys.require()
        except ApiKeyValidationError as e:
            return self._key_error(e)

        session.add_message(Role.USER, text)
        return await self._request_plan(
            session,
            api_key,
            list(session.messages),
            error_title="Error contacting Gemini API",
            created_label="tasks",
        )

    async def _request_plan(
        self,
        session: Session,
        api_key: str,
        messages: list[Message],
        answers: Optional[dict[str, str]] = None,
        error_title: str = "Error contacting Gemini API",
        created_label: str = "tasks"
    ) -> ChatReply:
        """Call Gemini with the given transcript and store any extracted plan."""
        payload = self.composer.compose(messages, answers)

        session.busy = True
        try:
            response_text = await self.llm.generate(payload, api_key)
        except TransportError as e:
            logger.error(f"{error_title}: {e}")
            return ChatReply(
                response_type=ResponseType.ERROR,
                notice=Notice(title=error_title, description=str(e), destructive=True),
            )
        finally:
            session.busy = False

        session.add_message(Role.ASSISTANT, response_text)

        extracted = self._extractor_for(session).extract(response_text)
        if extracted is None:
            return ChatReply(response_type=ResponseType.ANSWER, message=response_text)

        plan = session.plans.add_plan(extracted.title, extracted.todos, extracted.metadata)
        return ChatReply(
            response_type=ResponseType.PLAN,
            message=response_text,
            notice=Notice(
                title="Travel plan created!",
                description=f"Added {len(plan.todos)} {created_label} to your itinerary.",
            ),
            plan=plan.to_display_dict(),
        )

    def _extractor_for(self, session: Session) -> PlanExtractor:
        if self._extractor is not None:
            return self._extractor
        return PlanExtractor(id_factory=session.id_factory)

    def _key_error(self, error: ApiKeyValidationError) -> ChatReply:
        logger.warning(f"API key rejected: {error}")
        return ChatReply(
            response_type=ResponseType.ERROR,
            notice=Notice(
                title=KEY_REQUIRED,
                description=f"{error} Please enter your Gemini API key.",
                destructive=True,
            ),
        )

    def _format_question(self, session: Session, question: QuestionSpec) -> str:
        number, total = session.questionnaire.progress
        return f"**Question {number} of {total}**\n\n{question.question}"


# Global flow controller
flow_controller: Optional[FlowController] = None


def get_flow_controller() -> FlowController:
    """Get or create the global flow controller."""
    global flow_controller
    if flow_controller is None:
        flow_controller = FlowController()
    return flow_controller
