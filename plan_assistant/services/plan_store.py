"""
Plan Store - Owns a session's plans, their todos and the focused task.
Every operation is total: unknown plan or todo ids are silent no-ops.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from ..models.ids import IdFactory, random_id
from ..models.plan import Plan, PlanMetadata, PlanType, TodoItem, TravelRoute

logger = logging.getLogger(__name__)


@dataclass
class PlanHistoryDay:
    """Plans created on one day, split the way the history sidebar shows them."""
    day: date
    travel: list[Plan] = field(default_factory=list)
    general: list[Plan] = field(default_factory=list)


class PlanStore:
    """In-memory plan repository. Newest plan first."""

    def __init__(self, id_factory: IdFactory = random_id):
        self.id_factory = id_factory
        self._plans: list[Plan] = []
        self._selected_todo: Optional[TodoItem] = None

    @property
    def plans(self) -> list[Plan]:
        return list(self._plans)

    @property
    def selected_todo(self) -> Optional[TodoItem]:
        return self._selected_todo

    def add_plan(
        self,
        title: str,
        todos: Sequence[TodoItem],
        metadata: Optional[PlanMetadata] = None
    ) -> Plan:
        """Create a plan and put it at the front of the collection."""
        metadata = metadata or PlanMetadata()
        plan = Plan(
            id=self.id_factory(),
            title=title,
            todos=list(todos),
            type=metadata.type,
            routes=list(metadata.routes),
            start_location=metadata.start_location,
            end_location=metadata.end_location,
            travel_dates=metadata.travel_dates,
        )
        self._plans.insert(0, plan)
        logger.info(f"Plan '{title}' added with {len(plan.todos)} todos")
        return plan

    def get_plan(self, plan_id: str) -> Optional[Plan]:
        return next((p for p in self._plans if p.id == plan_id), None)

    def find_todo(self, plan_id: str, todo_id: str) -> Optional[TodoItem]:
        plan = self.get_plan(plan_id)
        if plan is None:
            return None
        return next((t for t in plan.todos if t.id == todo_id), None)

    def toggle_todo(self, plan_id: str, todo_id: str) -> Optional[TodoItem]:
        """Flip one task's completion flag. Returns the updated task if found."""
        plan = self.get_plan(plan_id)
        if plan is None:
            return None

        for i, todo in enumerate(plan.todos):
            if todo.id == todo_id:
                plan.todos[i] = todo.toggled()
                return plan.todos[i]
        return None

    def add_route(self, plan_id: str, route: TravelRoute) -> bool:
        """Append a route leg to a plan. Returns False for an unknown plan."""
        plan = self.get_plan(plan_id)
        if plan is None:
            return False
        plan.routes.append(route)
        return True

    def select_todo_for_discussion(self, todo: TodoItem) -> None:
        """Record the task the user wants to ask a follow-up about."""
        self._selected_todo = todo

    def clear_selection(self) -> None:
        self._selected_todo = None

    def history(self) -> list[PlanHistoryDay]:
        """Plans grouped by creation day, most recent day first."""
        days: dict[date, PlanHistoryDay] = {}
        for plan in self._plans:
            day = plan.created_at.date()
            entry = days.setdefault(day, PlanHistoryDay(day=day))
            if plan.type == PlanType.TRAVEL:
                entry.travel.append(plan)
            else:
                entry.general.append(plan)
        return sorted(days.values(), key=lambda d: d.day, reverse=True)
