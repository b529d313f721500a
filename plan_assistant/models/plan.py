"""
Plan models - Structured tasks extracted from assistant replies.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime, date
from enum import Enum

from .ids import random_id


class TodoType(str, Enum):
    """Category of a todo item."""
    GENERAL = "general"
    ACCOMMODATION = "accommodation"
    TRANSPORT = "transport"
    HEALTH = "health"
    EMERGENCY = "emergency"
    WEATHER = "weather"


class RiskLevel(str, Enum):
    """Three-tier severity tag."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]


_RISK_RANK = {RiskLevel.LOW: 0, RiskLevel.MEDIUM: 1, RiskLevel.HIGH: 2}


class PlanType(str, Enum):
    """Kind of plan."""
    GENERAL = "general"
    TRAVEL = "travel"
    BUSINESS = "business"
    PERSONAL = "personal"


class TransportMode(str, Enum):
    """Mode of a travel route leg."""
    FLIGHT = "flight"
    ROAD = "road"
    TRAIN = "train"


class TodoItem(BaseModel):
    """A single actionable task. Only `completed` changes, via toggled()."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=random_id)
    title: str = Field(..., description="Task text")
    description: Optional[str] = None
    completed: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    type: TodoType = TodoType.GENERAL
    location: Optional[str] = Field(None, description="Known place mentioned by the task")
    altitude: Optional[int] = Field(None, ge=0, description="Altitude in meters")
    risk_level: RiskLevel = RiskLevel.LOW
    health_alert: bool = False

    def toggled(self) -> "TodoItem":
        """Return a copy with the completion flag flipped."""
        return self.model_copy(update={"completed": not self.completed})


class TravelRoute(BaseModel):
    """One leg of a travel plan."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=random_id)
    from_location: str = Field(..., alias="from")
    to_location: str = Field(..., alias="to")
    distance: Optional[str] = None
    estimated_time: Optional[str] = None
    transport_mode: TransportMode
    altitude: Optional[int] = Field(None, ge=0)
    risk_level: Optional[RiskLevel] = None
    weather_dependent: Optional[bool] = None


class TravelDates(BaseModel):
    """Trip date range."""
    start: date
    end: date


class PlanMetadata(BaseModel):
    """Optional plan fields supplied on creation."""
    type: PlanType = PlanType.GENERAL
    routes: list[TravelRoute] = Field(default_factory=list)
    start_location: Optional[str] = None
    end_location: Optional[str] = None
    travel_dates: Optional[TravelDates] = None


class PlanStats(BaseModel):
    """Counters shown under a travel plan."""
    tasks: int
    completed: int
    high_risk: int
    health_alerts: int


class Plan(BaseModel):
    """A titled collection of todos, optionally a travel plan."""
    id: str = Field(default_factory=random_id)
    title: str
    todos: list[TodoItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    type: PlanType = PlanType.GENERAL
    routes: list[TravelRoute] = Field(default_factory=list)
    start_location: Optional[str] = None
    end_location: Optional[str] = None
    travel_dates: Optional[TravelDates] = None

    def stats(self) -> PlanStats:
        return PlanStats(
            tasks=len(self.todos),
            completed=sum(1 for t in self.todos if t.completed),
            high_risk=sum(1 for t in self.todos if t.risk_level == RiskLevel.HIGH),
            health_alerts=sum(1 for t in self.todos if t.health_alert),
        )

    def route_label(self) -> Optional[str]:
        """'Start → End', or whichever end is known."""
        if self.start_location and self.end_location:
            return f"{self.start_location} → {self.end_location}"
        return self.start_location or self.end_location

    def to_display_dict(self) -> dict:
        """Convert to display-friendly dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type.value,
            "created_at": self.created_at.isoformat(),
            "route": self.route_label(),
            "stats": self.stats().model_dump(),
            "todos": [
                {
                    "id": todo.id,
                    "title": todo.title,
                    "description": todo.description,
                    "completed": todo.completed,
                    "type": todo.type.value,
                    "location": todo.location,
                    "altitude": todo.altitude,
                    "risk_level": todo.risk_level.value,
                    "health_alert": todo.health_alert,
                }
                for todo in self.todos
            ],
            "routes": [
                route.model_dump(mode="json", by_alias=True)
                for route in self.routes
            ],
        }
