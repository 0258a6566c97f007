"""Keyword classification of story text into placeholder slide styles."""

DEFAULT_CATEGORY = "default"

# Evaluated top to bottom; the first category with a keyword found as a
# lower-cased substring wins. "war" is listed under history before the war
# category, so history takes it.
CATEGORY_KEYWORDS = [
    ("person", ("man", "woman", "people", "king")),
    ("history", ("year", "century", "war", "ancient")),
    ("money", ("money", "gold", "rich", "dollar")),
    ("food", ("food", "eat", "cook")),
    ("animal", ("animal", "dog", "cat", "bird")),
    ("war", ("war", "soldier", "army", "battle")),
    ("crime", ("crime", "police", "prison")),
    ("science", ("science", "invent", "discovery")),
    ("love", ("love", "marriage", "romance")),
    ("death", ("death", "die", "kill")),
    ("lego", ("lego", "toy", "brick")),
]

# category → (background color, icon)
CATEGORY_STYLES = {
    "person": ("#2C3E50", "👤"),
    "history": ("#3D2817", "📜"),
    "money": ("#0D3D0D", "💰"),
    "food": ("#4A1C1C", "🍽️"),
    "animal": ("#0D3320", "🐾"),
    "war": ("#3D0D0D", "⚔️"),
    "crime": ("#1a1a1a", "🔍"),
    "science": ("#0D1F3C", "🔬"),
    "love": ("#3D1C2C", "❤️"),
    "death": ("#1a1a1a", "💀"),
    "lego": ("#FFE66D", "🧱"),
    DEFAULT_CATEGORY: ("#1a1a2e", "⭐"),
}

PLACEHOLDER_TEXT_CHARS = 30


def detect_category(text: str) -> str:
    """Return the first category whose keywords occur in text, else "default"."""
    lower = (text or "").lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(word in lower for word in keywords):
            return category
    return DEFAULT_CATEGORY


def placeholder(text: str) -> dict:
    """Deterministic stand-in slide descriptor for a piece of narration."""
    category = detect_category(text)
    color, icon = CATEGORY_STYLES[category]
    return {
        "type": "placeholder",
        "category": category,
        "color": color,
        "icon": icon,
        "text": (text or "")[:PLACEHOLDER_TEXT_CHARS],
    }
