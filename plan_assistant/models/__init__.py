"""Data models for the plan assistant."""
from .ids import IdFactory, random_id
from .message import Message, Role
from .questions import QuestionSpec, QuestionnaireState, QuestionnaireStatus, TRAVEL_QUESTIONS
from .plan import (
    Plan,
    PlanMetadata,
    PlanStats,
    PlanType,
    RiskLevel,
    TodoItem,
    TodoType,
    TransportMode,
    TravelDates,
    TravelRoute,
)

__all__ = [
    "IdFactory",
    "random_id",
    "Message",
    "Role",
    "QuestionSpec",
    "QuestionnaireState",
    "QuestionnaireStatus",
    "TRAVEL_QUESTIONS",
    "Plan",
    "PlanMetadata",
    "PlanStats",
    "PlanType",
    "RiskLevel",
    "TodoItem",
    "TodoType",
    "TransportMode",
    "TravelDates",
    "TravelRoute",
]
