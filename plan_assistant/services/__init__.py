"""Services for the plan assistant.

FlowController lives in .flow_controller and is imported from there; it
depends on models.session, which in turn builds on the services below.
"""
from .errors import ApiKeyValidationError, PlanAssistantError, TransportError
from .key_store import ApiKeyStore
from .llm_client import GeminiClient
from .plan_extractor import ExtractedPlan, PlanExtractor
from .plan_store import PlanStore
from .prompt_composer import PromptComposer
from .questionnaire import AnswerOutcome, QuestionnaireEngine
from .trigger import should_start_questionnaire

__all__ = [
    "ApiKeyValidationError",
    "PlanAssistantError",
    "TransportError",
    "ApiKeyStore",
    "GeminiClient",
    "ExtractedPlan",
    "PlanExtractor",
    "PlanStore",
    "PromptComposer",
    "AnswerOutcome",
    "QuestionnaireEngine",
    "should_start_questionnaire",
]
