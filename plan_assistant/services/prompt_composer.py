"""
Prompt Composer - Builds the Gemini request payload.
Pure functions of the transcript and the optional questionnaire answers.
"""
from typing import Optional, Sequence

from ..models.message import Message, Role
from ..models.plan import TodoItem


SYSTEM_PROMPT = """You are an advanced AI travel and planning assistant specialized in comprehensive planning including travel itineraries, route planning, health & safety considerations, emergency preparedness, and general life planning.
{questionnaire}
TRAVEL PLANNING EXPERTISE:
- Route optimization with altitude, weather, and safety considerations
- Transportation planning (flights, road trips, train travel)
- Accommodation recommendations with safety ratings
- Health advisories for altitude changes and medical conditions
- Emergency planning and risk assessment
- Cultural and local insights
- Weather-dependent activities and alternatives

SAFETY & HEALTH FOCUS:
- Altitude sickness prevention and monitoring
- Risk assessment for different routes and locations
- Emergency contact planning
- Medical preparation for travel
- Weather-related safety alerts
- Political/security situation awareness

GENERAL PLANNING:
- Daily schedules and time management
- Event planning and organization
- Project planning and goal setting
- Task prioritization and breakdown

When creating travel plans, always include:
1. Detailed route breakdown with stopovers
2. Risk levels and safety considerations
3. Health advisories (especially for altitude changes)
4. Weather dependencies and alternatives
5. Emergency contacts and backup plans
6. Accommodation and transport booking details

Format your responses with clear, actionable items that can be tracked as todos. Include specific locations, altitudes, risk levels, and health considerations where relevant."""


QUESTIONNAIRE_SECTION = """
QUESTIONNAIRE DATA PROVIDED:
{answers}

Use this information to create a highly personalized and detailed travel plan.
"""

# Gemini names the assistant side "model"
ROLE_MAP = {
    Role.USER: "user",
    Role.ASSISTANT: "model",
}


class PromptComposer:
    """Assembles generateContent payloads."""

    def instruction(self, answers: Optional[dict[str, str]] = None) -> str:
        """The persona preamble, with the questionnaire dump when given."""
        section = ""
        if answers:
            lines = "\n".join(f"{key}: {value}" for key, value in answers.items())
            section = QUESTIONNAIRE_SECTION.format(answers=lines)
        return SYSTEM_PROMPT.format(questionnaire=section)

    def compose(
        self,
        messages: Sequence[Message],
        answers: Optional[dict[str, str]] = None
    ) -> dict:
        """
        Build the request body.

        Args:
            messages: Full transcript, oldest first
            answers: Questionnaire answers to fold into the instruction block

        Returns:
            {"contents": [instruction, *transcript]}
        """
        contents = [{"role": "user", "parts": [{"text": self.instruction(answers)}]}]
        for msg in messages:
            contents.append({
                "role": ROLE_MAP[msg.role],
                "parts": [{"text": msg.content}],
            })
        return {"contents": contents}

    def planning_prompt(self, answers: dict[str, str]) -> str:
        """Request text sent once the questionnaire is complete."""
        def get(key: str) -> str:
            return answers.get(key, "not specified")

        return (
            f"Based on the questionnaire responses, create a detailed travel plan for a trip "
            f"from {get('startLocation')} to {get('destination')}. Include specific tasks for "
            f"booking {get('travelMethod')} transportation, finding {get('accommodation')} "
            f"accommodation, and safety considerations for {get('experience')} level travelers. "
            f"Duration: {get('duration')}, Budget: {get('budget')}, Interests: {get('interests')}."
        )

    def follow_up_prompt(self, todo: TodoItem) -> str:
        """Prefill for a follow-up question about one task."""
        text = f'I have a specific question about this {todo.type.value}: "{todo.title}"'
        if todo.description:
            text += f" ({todo.description})"
        if todo.location:
            text += f" in {todo.location}"
        if todo.altitude:
            text += f" at {todo.altitude}m altitude"
        return text + ". "
