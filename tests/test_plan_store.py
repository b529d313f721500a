"""Tests for the plan store."""
from datetime import datetime, timedelta
from itertools import count

from plan_assistant.models.plan import (
    PlanMetadata,
    PlanType,
    RiskLevel,
    TodoItem,
    TodoType,
    TransportMode,
    TravelRoute,
)
from plan_assistant.services.plan_store import PlanStore


def make_store() -> PlanStore:
    ids = count(1)
    return PlanStore(id_factory=lambda: f"plan-{next(ids)}")


def make_todos() -> list[TodoItem]:
    return [
        TodoItem(id="t1", title="Book a flight", type=TodoType.TRANSPORT),
        TodoItem(id="t2", title="Carry oxygen", type=TodoType.HEALTH,
                 health_alert=True, risk_level=RiskLevel.HIGH),
    ]


class TestPlanStore:
    """Test plan lifecycle operations."""

    def test_add_plan_prepends(self):
        store = make_store()

        first = store.add_plan("First", make_todos())
        second = store.add_plan("Second", [])

        assert [p.id for p in store.plans] == [second.id, first.id]
        assert first.type == PlanType.GENERAL

    def test_add_plan_with_metadata(self):
        store = make_store()

        plan = store.add_plan("Trip", make_todos(), PlanMetadata(
            type=PlanType.TRAVEL,
            start_location="Karachi",
            end_location="Khunjerab Pass",
        ))

        assert plan.type == PlanType.TRAVEL
        assert plan.route_label() == "Karachi → Khunjerab Pass"
        assert plan.routes == []

    def test_toggle_twice_restores(self):
        store = make_store()
        plan = store.add_plan("Trip", make_todos())

        toggled = store.toggle_todo(plan.id, "t1")
        assert toggled.completed is True
        assert store.get_plan(plan.id).todos[0].completed is True

        store.toggle_todo(plan.id, "t1")
        assert store.get_plan(plan.id).todos[0].completed is False

    def test_toggle_keeps_other_fields(self):
        store = make_store()
        plan = store.add_plan("Trip", make_todos())

        store.toggle_todo(plan.id, "t2")
        todo = store.find_todo(plan.id, "t2")

        assert todo.completed is True
        assert todo.title == "Carry oxygen"
        assert todo.risk_level == RiskLevel.HIGH
        assert todo.health_alert is True

    def test_unknown_ids_are_no_ops(self):
        store = make_store()
        plan = store.add_plan("Trip", make_todos())
        route = TravelRoute(id="r1", from_location="Karachi", to_location="Gilgit",
                            transport_mode=TransportMode.FLIGHT)

        assert store.toggle_todo("missing", "t1") is None
        assert store.toggle_todo(plan.id, "missing") is None
        assert store.add_route("missing", route) is False
        assert all(not t.completed for t in store.get_plan(plan.id).todos)

    def test_add_route_appends(self):
        store = make_store()
        plan = store.add_plan("Trip", [])
        first = TravelRoute(id="r1", from_location="Karachi", to_location="Gilgit",
                            transport_mode=TransportMode.FLIGHT)
        second = TravelRoute(id="r2", **{"from": "Gilgit", "to": "Hunza"},
                             transport_mode=TransportMode.ROAD, weather_dependent=True)

        assert store.add_route(plan.id, first)
        assert store.add_route(plan.id, second)

        assert [r.id for r in store.get_plan(plan.id).routes] == ["r1", "r2"]

    def test_select_todo_for_discussion(self):
        store = make_store()
        plan = store.add_plan("Trip", make_todos())
        todo = store.find_todo(plan.id, "t2")

        store.select_todo_for_discussion(todo)
        assert store.selected_todo == todo

        store.clear_selection()
        assert store.selected_todo is None

    def test_stats(self):
        store = make_store()
        plan = store.add_plan("Trip", make_todos())
        store.toggle_todo(plan.id, "t1")

        stats = store.get_plan(plan.id).stats()

        assert stats.tasks == 2
        assert stats.completed == 1
        assert stats.high_risk == 1
        assert stats.health_alerts == 1

    def test_history_groups_by_day(self):
        store = make_store()
        older = store.add_plan("Old trip", [], PlanMetadata(type=PlanType.TRAVEL))
        older.created_at = datetime.now() - timedelta(days=2)
        store.add_plan("Errands", [])
        store.add_plan("New trip", [], PlanMetadata(type=PlanType.TRAVEL))

        history = store.history()

        assert len(history) == 2
        assert history[0].day > history[1].day
        assert [p.title for p in history[0].travel] == ["New trip"]
        assert [p.title for p in history[0].general] == ["Errands"]
        assert [p.title for p in history[1].travel] == ["Old trip"]
