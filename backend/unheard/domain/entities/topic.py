"""Topic statistics entity and the fixed topic catalog."""

from dataclasses import dataclass

DEFAULT_TOPIC_ICON = "📝"

# Submission choices and the icons shown next to their statistics.
TOPIC_ICONS: dict[str, str] = {
    "Mental Health": "🧠",
    "Relationships": "❤️",
    "Career Struggles": "💼",
    "Academic Pressure": "📚",
    "Family Issues": "👨‍👩‍👧‍👦",
    "Identity & Self": "🪞",
    "Life Goals": "🎯",
    "Social Anxiety": "😰",
    "Personal Growth": "🌱",
    "Dreams & Aspirations": "💭",
    "Health & Wellness": "🏋️‍♂️",
    "Travel & Adventure": "✈️",
    "Hobbies & Interests": "🎨",
    "Other": DEFAULT_TOPIC_ICON,
}


def icon_for_topic(name: str) -> str:
    return TOPIC_ICONS.get(name, DEFAULT_TOPIC_ICON)


@dataclass
class Topic:
    """Derived entity — never persisted, recomputed from the confession set."""

    name: str
    icon: str
    count: int = 0
