"""
Plan Extractor - Turns a free-text assistant reply into todo items.

Line-oriented keyword heuristics only. Nothing here understands the text;
lists that use other markers, or places outside the gazetteer, are missed.
"""
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..models.ids import IdFactory, random_id
from ..models.plan import PlanMetadata, PlanType, RiskLevel, TodoItem, TodoType

logger = logging.getLogger(__name__)


DEFAULT_TITLE = "New Travel Plan"
TITLE_KEYWORDS = ("route", "travel", "plan")
MIN_TITLE_LENGTH = 5
MIN_ITEM_LENGTH = 3

# "1. text", "- text", "* text", "• text"; "**bold**" lines are not bullets
LIST_ITEM_RE = re.compile(r"^(?:\d+\.|[-•]|\*(?!\*))\s*(.+)")
LIST_MARKER_RE = re.compile(r"^(?:\d+\.|[-*•])")
HEADING_RE = re.compile(r"^#+\s*")
EMPHASIS_RE = re.compile(r"\*\*|__")

GAZETTEER = ("karachi", "islamabad", "gilgit", "hunza", "naran", "kaghan", "chilas", "khunjerab")
START_LOCATION = ("karachi", "Karachi")
END_LOCATION = ("khunjerab", "Khunjerab Pass")

# Only these literals are recognized; no general number parsing
ALTITUDE_LITERALS = (
    (("15000", "15,000"), 15000),
    (("4700", "4,700"), 4700),
)


@dataclass(frozen=True)
class CategoryRule:
    """Keywords that put an item in a category. First matching rule wins."""
    keywords: tuple[str, ...]
    todo_type: TodoType
    risk_level: RiskLevel = RiskLevel.LOW
    health_alert: bool = False

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


@dataclass(frozen=True)
class RiskRule:
    keywords: tuple[str, ...]
    risk_level: RiskLevel

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        ("hotel", "accommodation", "guesthouse", "guest house", "hostel", "resort", "lodging", "camping"),
        TodoType.ACCOMMODATION,
    ),
    CategoryRule(
        ("flight", "transport", "ticket", "bus", "drive", "jeep"),
        TodoType.TRANSPORT,
    ),
    CategoryRule(
        ("health", "altitude", "medical", "oxygen"),
        TodoType.HEALTH,
        health_alert=True,
    ),
    CategoryRule(
        ("emergency", "contact", "sos", "safety"),
        TodoType.EMERGENCY,
        risk_level=RiskLevel.HIGH,
    ),
    CategoryRule(
        ("weather", "alert", "forecast"),
        TodoType.WEATHER,
    ),
)

RISK_RULES: tuple[RiskRule, ...] = (
    RiskRule(("high risk", "dangerous", "extreme"), RiskLevel.HIGH),
    RiskRule(("medium risk", "caution", "careful"), RiskLevel.MEDIUM),
)


@dataclass(frozen=True)
class ExtractedPlan:
    """Title, items and plan fields recovered from one reply."""
    title: str
    todos: list[TodoItem]
    metadata: PlanMetadata


def categorize(text: str, rules: Sequence[CategoryRule] = CATEGORY_RULES) -> CategoryRule:
    """Return the first rule matching lowercased text, or the general fallback."""
    for rule in rules:
        if rule.matches(text):
            return rule
    return CategoryRule((), TodoType.GENERAL)


def assess_risk(text: str, baseline: RiskLevel = RiskLevel.LOW) -> RiskLevel:
    """Highest of the baseline and any risk language found in lowercased text."""
    for rule in RISK_RULES:
        if rule.matches(text):
            return rule.risk_level if rule.risk_level.rank > baseline.rank else baseline
    return baseline


class PlanExtractor:
    """Extracts a plan from an assistant reply."""

    def __init__(
        self,
        id_factory: IdFactory = random_id,
        clock: Callable[[], datetime] = datetime.now,
        gazetteer: Sequence[str] = GAZETTEER,
        category_rules: Sequence[CategoryRule] = CATEGORY_RULES,
    ):
        self.id_factory = id_factory
        self.clock = clock
        self.gazetteer = tuple(gazetteer)
        self.category_rules = tuple(category_rules)

    def extract(self, content: str) -> Optional[ExtractedPlan]:
        """
        Parse a reply into a plan.

        Args:
            content: Assistant response text

        Returns:
            ExtractedPlan, or None when no list item survives filtering
        """
        lines = [line.strip() for line in content.split("\n") if line.strip()]

        todos = []
        for line in lines:
            todo = self._parse_item(line)
            if todo is not None:
                todos.append(todo)

        if not todos:
            return None

        title = self._find_title(lines)
        metadata = self._plan_metadata(content)
        logger.info(f"Extracted {len(todos)} todos for plan '{title}'")
        return ExtractedPlan(title=title, todos=todos, metadata=metadata)

    def _find_title(self, lines: list[str]) -> str:
        for line in lines:
            if LIST_MARKER_RE.match(line):
                continue
            if len(line) <= MIN_TITLE_LENGTH or "**" in line:
                continue
            lowered = line.lower()
            if any(keyword in lowered for keyword in TITLE_KEYWORDS):
                return HEADING_RE.sub("", line)
        return DEFAULT_TITLE

    def _plan_metadata(self, content: str) -> PlanMetadata:
        lowered = content.lower()
        metadata = PlanMetadata(type=PlanType.TRAVEL)
        if START_LOCATION[0] in lowered:
            metadata.start_location = START_LOCATION[1]
        if END_LOCATION[0] in lowered:
            metadata.end_location = END_LOCATION[1]
        return metadata

    def _parse_item(self, line: str) -> Optional[TodoItem]:
        match = LIST_ITEM_RE.match(line)
        if not match:
            return None

        text = EMPHASIS_RE.sub("", match.group(1)).strip()
        if len(text) <= MIN_ITEM_LENGTH:
            return None

        lowered = text.lower()
        rule = categorize(lowered, self.category_rules)

        return TodoItem(
            id=self.id_factory(),
            title=text,
            completed=False,
            created_at=self.clock(),
            type=rule.todo_type,
            location=self._find_location(lowered),
            altitude=self._find_altitude(lowered),
            risk_level=assess_risk(lowered, rule.risk_level),
            health_alert=rule.health_alert,
        )

    def _find_location(self, text: str) -> Optional[str]:
        """Gazetteer name that appears earliest in the text."""
        found = [(text.find(name), name) for name in self.gazetteer if name in text]
        if not found:
            return None
        return min(found)[1].capitalize()

    def _find_altitude(self, text: str) -> Optional[int]:
        altitude = None
        for literals, meters in ALTITUDE_LITERALS:
            if any(literal in text for literal in literals):
                altitude = meters
        return altitude
