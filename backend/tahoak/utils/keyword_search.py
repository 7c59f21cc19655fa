"""Search keyword expansion: maps free-text queries onto category synonym groups."""

from typing import Dict, List

CATEGORY_SYNONYMS: Dict[str, List[str]] = {
    "restaurants": [
        "food", "restaurant", "dining", "cafe", "eatery", "bistro",
        "diner", "grill", "pizza", "burger", "sushi", "italian",
        "mexican", "chinese", "breakfast", "lunch", "dinner", "eat",
        "place to eat", "where to eat", "food place",
    ],
    "retail": [
        "shop", "store", "retail", "buy", "shopping", "market",
        "boutique", "gift", "merchandise",
    ],
    "services": [
        "service", "professional", "consulting", "help", "support",
        "repair", "maintenance", "cleaning", "legal", "accounting",
    ],
    "entertainment": [
        "entertainment", "fun", "activity", "event", "venue",
        "theater", "music", "nightlife", "bar", "club",
    ],
    "healthcare": [
        "health", "medical", "doctor", "clinic", "hospital",
        "dentist", "therapy", "wellness", "care",
    ],
    "education": [
        "school", "education", "learn", "training", "class",
        "tutoring", "academic", "student",
    ],
    "automotive": [
        "car", "auto", "vehicle", "automotive", "mechanic",
        "repair", "dealership", "tire", "oil",
    ],
    "home-garden": [
        "home", "garden", "hardware", "improvement", "furniture",
        "decor", "landscaping", "tools",
    ],
}


def normalize_query(query: str) -> str:
    return str(query or "").lower().strip()


def _group_matches(normalized_query: str, synonyms: List[str]) -> bool:
    # Substring match in both directions favors recall.
    return any(
        normalized_query == syn or syn in normalized_query or normalized_query in syn
        for syn in synonyms
    )


def expand_search_query(query: str) -> List[str]:
    normalized = normalize_query(query)
    expanded: Dict[str, None] = {normalized: None}

    for category_slug, synonyms in CATEGORY_SYNONYMS.items():
        if _group_matches(normalized, synonyms):
            expanded[category_slug] = None
            for syn in synonyms:
                expanded[syn] = None

    return list(expanded)


def get_matching_categories(query: str) -> List[str]:
    normalized = normalize_query(query)
    return [
        category_slug
        for category_slug, synonyms in CATEGORY_SYNONYMS.items()
        if _group_matches(normalized, synonyms)
    ]
