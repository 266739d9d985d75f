"""Canned task suggestions for a free-text goal.

A keyword lookup stands in for real inference: the first known keyword
contained in the goal picks a fixed template list, otherwise a generic
plan is built around the goal text.
"""

from dataclasses import dataclass

MAX_SUGGESTIONS = 5


@dataclass(frozen=True)
class SuggestedTask:
    """A suggested task. Not persisted until explicitly saved."""

    title: str
    notes: str

    def to_dict(self) -> dict:
        return {"title": self.title, "notes": self.notes}


# Checked in declared order; first keyword contained in the goal wins.
KEYWORD_TEMPLATES: tuple[tuple[str, tuple[SuggestedTask, ...]], ...] = (
    (
        "fit",
        (
            SuggestedTask("Create a workout schedule", "Plan out 3-4 days of exercise per week with specific activities"),
            SuggestedTask("Set up meal prep routine", "Prepare healthy meals in advance for the week"),
            SuggestedTask("Track daily water intake", "Aim for 8 glasses of water per day"),
            SuggestedTask("Find a workout buddy", "Partner with someone for accountability and motivation"),
        ),
    ),
    (
        "wedding",
        (
            SuggestedTask("Set wedding budget", "Determine overall budget and allocate to different categories"),
            SuggestedTask("Create guest list", "Draft initial list of guests to invite"),
            SuggestedTask("Book wedding venue", "Research and visit potential venues, make reservation"),
            SuggestedTask("Hire wedding photographer", "Review portfolios and book a professional photographer"),
            SuggestedTask("Choose wedding theme", "Decide on color scheme and overall aesthetic"),
        ),
    ),
    (
        "study",
        (
            SuggestedTask("Create study schedule", "Block out dedicated study time each day"),
            SuggestedTask("Organize study materials", "Gather and organize all textbooks, notes, and resources"),
            SuggestedTask("Join study group", "Find or create a group for collaborative learning"),
            SuggestedTask("Set up distraction-free zone", "Create a dedicated study space with minimal interruptions"),
        ),
    ),
    (
        "travel",
        (
            SuggestedTask("Research destinations", "Compare potential travel locations and activities"),
            SuggestedTask("Set travel budget", "Calculate costs for flights, accommodation, and activities"),
            SuggestedTask("Book flights and hotels", "Reserve transportation and accommodation"),
            SuggestedTask("Create packing list", "List all essential items to bring on the trip"),
            SuggestedTask("Plan daily itinerary", "Outline activities and sights for each day"),
        ),
    ),
)

GENERIC_TEMPLATE: tuple[tuple[str, str], ...] = (
    ("Research about {goal}", "Gather information and resources to get started"),
    ("Create action plan for {goal}", "Break down the goal into smaller, manageable steps"),
    ("Set milestones for {goal}", "Define key checkpoints to track progress"),
    ("Identify resources needed", "List tools, materials, or help required"),
)


def match_keyword(goal: str) -> str | None:
    """First known keyword contained in the goal, case-insensitively."""
    goal_lower = goal.lower()
    for keyword, _ in KEYWORD_TEMPLATES:
        if keyword in goal_lower:
            return keyword
    return None


def generate_suggestions(goal: str) -> list[SuggestedTask]:
    """
    Suggest tasks for a goal.

    Never empty and never fails, including for an empty goal. Callers are
    responsible for rejecting blank goals before calling this.
    Pure function - no I/O.
    """
    keyword = match_keyword(goal)
    if keyword is not None:
        templates = dict(KEYWORD_TEMPLATES)[keyword]
        return list(templates[:MAX_SUGGESTIONS])

    # Generic plan keeps the goal exactly as typed
    return [
        SuggestedTask(title=title.format(goal=goal), notes=notes)
        for title, notes in GENERIC_TEMPLATE
    ]
