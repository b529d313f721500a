"""
Session management - Conversation transcript, questionnaire and plans.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from .ids import IdFactory, random_id
from .message import Message, Role
from ..services.questionnaire import QuestionnaireEngine
from ..services.plan_store import PlanStore


class Session(BaseModel):
    """One user's conversation. Everything here lives only in memory."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    session_id: str = Field(
        default_factory=random_id,
        description="Unique session identifier"
    )
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="Session creation time"
    )
    updated_at: datetime = Field(
        default_factory=datetime.now,
        description="Last update time"
    )
    id_factory: IdFactory = Field(default=random_id, exclude=True)

    # Conversation History
    messages: list[Message] = Field(
        default_factory=list,
        description="Chat history, append-only"
    )

    questionnaire: QuestionnaireEngine = Field(default_factory=QuestionnaireEngine)
    plans: Optional[PlanStore] = None

    # Advisory guard while a model call is outstanding
    busy: bool = False

    def model_post_init(self, __context) -> None:
        if self.plans is None:
            self.plans = PlanStore(id_factory=self.id_factory)

    def add_message(self, role: Role, content: str) -> Message:
        """Add a message to the conversation."""
        msg = Message(id=self.id_factory(), role=role, content=content)
        self.messages.append(msg)
        self.updated_at = datetime.now()
        return msg


# In-memory session storage
class SessionStore:
    """Simple in-memory session store."""

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create(self) -> Session:
        """Create a new session."""
        session = Session()
        self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> Optional[Session]:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def update(self, session: Session):
        """Update a session."""
        self._sessions[session.session_id] = session

    def delete(self, session_id: str):
        """Delete a session."""
        self._sessions.pop(session_id, None)


# Global session store
session_store = SessionStore()
