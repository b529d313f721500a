"""
Questionnaire catalog - the fixed, ordered onboarding questions.
Answers are keyed by question id and handed to the planning request.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from enum import Enum


class QuestionSpec(BaseModel):
    """A single guided question."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Key the answer is stored under")
    question: str = Field(..., description="Prompt shown to the user")
    placeholder: Optional[str] = Field(
        None,
        description="Input hint for the answer box"
    )


TRAVEL_QUESTIONS: tuple[QuestionSpec, ...] = (
    QuestionSpec(
        id="destination",
        question="Where would you like to travel to? (e.g., Hunza Valley, Khunjerab Pass)",
        placeholder="Enter your destination...",
    ),
    QuestionSpec(
        id="startLocation",
        question="Where will you be starting your journey from?",
        placeholder="e.g., Karachi, Islamabad...",
    ),
    QuestionSpec(
        id="travelMethod",
        question="How do you prefer to travel? (flight, road trip, train, or combination)",
        placeholder="e.g., Flight to Gilgit then road to Hunza...",
    ),
    QuestionSpec(
        id="accommodation",
        question="What type of accommodation do you prefer? (hotel, guesthouse, camping, etc.)",
        placeholder="e.g., Budget hotels, luxury resorts...",
    ),
    QuestionSpec(
        id="duration",
        question="How long is your trip? (number of days/weeks)",
        placeholder="e.g., 7 days, 2 weeks...",
    ),
    QuestionSpec(
        id="budget",
        question="What's your approximate budget range?",
        placeholder="e.g., Budget-friendly, mid-range, luxury...",
    ),
    QuestionSpec(
        id="experience",
        question="What's your experience with high-altitude travel? (beginner, experienced, expert)",
        placeholder="This helps with health and safety planning...",
    ),
    QuestionSpec(
        id="interests",
        question="What activities interest you most? (sightseeing, adventure, culture, photography, etc.)",
        placeholder="e.g., Mountain climbing, cultural tours...",
    ),
)


class QuestionnaireStatus(str, Enum):
    """Lifecycle of one questionnaire run."""
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETED = "completed"


class QuestionnaireState(BaseModel):
    """Snapshot of the guided questionnaire."""
    status: QuestionnaireStatus = QuestionnaireStatus.IDLE
    current_question_index: int = Field(default=0, ge=0)
    answers: dict[str, str] = Field(default_factory=dict)
    questions: tuple[QuestionSpec, ...] = TRAVEL_QUESTIONS

    @property
    def active(self) -> bool:
        return self.status == QuestionnaireStatus.ACTIVE
