"""
API Routes for the plan assistant.
"""
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Optional

from ..models.message import Role
from ..models.plan import RiskLevel, TransportMode, TravelRoute
from ..models.session import Session, session_store
from ..services.errors import ApiKeyValidationError
from ..services.flow_controller import ChatReply, get_flow_controller
from ..services.key_store import get_key_store


router = APIRouter(prefix="/api", tags=["plan-assistant"])


WELCOME = """🧭 Welcome to your comprehensive AI Travel & Planning Assistant! I'm specialized in:

🗺️ **Travel Planning**: Route optimization, accommodation booking, transport coordination
⛰️ **Safety & Health**: Altitude monitoring, risk assessment, emergency planning
🌤️ **Weather Intelligence**: Real-time alerts, seasonal planning, backup routes
📋 **General Planning**: Daily schedules, project management, goal setting

I can help you plan everything from a Karachi to Khunjerab Pass adventure to your daily work schedule. What would you like to plan today?"""


# Request/Response Models
class CreateSessionResponse(BaseModel):
    session_id: str
    message: str


class ChatRequest(BaseModel):
    session_id: str
    message: str


class QuestionnaireStatusResponse(BaseModel):
    status: str
    active: bool
    question_number: Optional[int] = None
    total_questions: int
    question: Optional[str] = None
    placeholder: Optional[str] = None


class RouteRequest(BaseModel):
    from_location: str
    to_location: str
    transport_mode: TransportMode
    distance: Optional[str] = None
    estimated_time: Optional[str] = None
    altitude: Optional[int] = None
    risk_level: Optional[RiskLevel] = None
    weather_dependent: Optional[bool] = None


class ApiKeyRequest(BaseModel):
    api_key: str


def _get_session(session_id: str) -> Session:
    session = session_store.get(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


# Endpoints

@router.post("/session", response_model=CreateSessionResponse)
async def create_session():
    """Create a new chat session."""
    session = session_store.create()
    session.add_message(Role.ASSISTANT, WELCOME)
    session_store.update(session)

    return CreateSessionResponse(session_id=session.session_id, message=WELCOME)


@router.post("/chat", response_model=ChatReply)
async def chat(request: ChatRequest):
    """Send a chat message and get response."""
    session = _get_session(request.session_id)
    flow = get_flow_controller()

    reply = await flow.process_message(session, request.message)
    session_store.update(session)
    return reply


@router.get("/questionnaire/{session_id}", response_model=QuestionnaireStatusResponse)
async def get_questionnaire(session_id: str):
    """Current questionnaire progress."""
    engine = _get_session(session_id).questionnaire
    question = engine.current_question
    number, total = engine.progress

    return QuestionnaireStatusResponse(
        status=engine.status.value,
        active=engine.active,
        question_number=number if engine.active else None,
        total_questions=total,
        question=question.question if question else None,
        placeholder=question.placeholder if question else None,
    )


@router.post("/questionnaire/{session_id}/skip", response_model=ChatReply)
async def skip_questionnaire(session_id: str):
    """Cancel the questionnaire."""
    session = _get_session(session_id)
    return get_flow_controller().skip_questionnaire(session)


@router.get("/plans/{session_id}")
async def get_plans(session_id: str):
    """All plans, newest first."""
    store = _get_session(session_id).plans
    selected = store.selected_todo

    return {
        "plans": [plan.to_display_dict() for plan in store.plans],
        "selected_todo_id": selected.id if selected else None,
    }


@router.get("/plans/{session_id}/history")
async def get_plan_history(session_id: str):
    """Plans grouped by creation day."""
    store = _get_session(session_id).plans

    return {
        "days": [
            {
                "date": entry.day.isoformat(),
                "travel": [
                    {"id": p.id, "title": p.title, "route": p.route_label(), **p.stats().model_dump()}
                    for p in entry.travel
                ],
                "general": [
                    {"id": p.id, "title": p.title, **p.stats().model_dump()}
                    for p in entry.general
                ],
            }
            for entry in store.history()
        ]
    }


@router.post("/plans/{session_id}/{plan_id}/todos/{todo_id}/toggle")
async def toggle_todo(session_id: str, plan_id: str, todo_id: str):
    """Flip a task's completion flag."""
    store = _get_session(session_id).plans
    todo = store.toggle_todo(plan_id, todo_id)
    if todo is None:
        raise HTTPException(status_code=404, detail="Todo not found")

    return {"id": todo.id, "completed": todo.completed}


@router.post("/plans/{session_id}/{plan_id}/routes")
async def add_route(session_id: str, plan_id: str, request: RouteRequest):
    """Append a route leg to a plan."""
    store = _get_session(session_id).plans
    route = TravelRoute(id=store.id_factory(), **request.model_dump())
    if not store.add_route(plan_id, route):
        raise HTTPException(status_code=404, detail="Plan not found")

    return route.model_dump(mode="json", by_alias=True)


@router.post("/plans/{session_id}/{plan_id}/todos/{todo_id}/discuss")
async def discuss_todo(session_id: str, plan_id: str, todo_id: str):
    """Focus a task and get a follow-up question to prefill the input."""
    session = _get_session(session_id)
    prompt = get_flow_controller().select_todo(session, plan_id, todo_id)
    if prompt is None:
        raise HTTPException(status_code=404, detail="Todo not found")

    return {"todo_id": todo_id, "prompt": prompt}


@router.get("/messages/{session_id}")
async def get_messages(session_id: str):
    """Get all chat messages for a session."""
    session = _get_session(session_id)

    return {
        "messages": [
            {
                "id": msg.id,
                "role": msg.role.value,
                "content": msg.content,
                "timestamp": msg.created_at.isoformat()
            }
            for msg in session.messages
        ]
    }


@router.put("/api-key")
async def save_api_key(request: ApiKeyRequest):
    """Validate and store the Gemini API key."""
    try:
        get_key_store().save(request.api_key)
    except ApiKeyValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid Gemini API key: {e}")

    return {"success": True}
