"""Keyword heuristics that suggest a spending category from free text.

Tables are ordered: the first category with a matching keyword wins, so a
merchant such as "Uber Eats" lands in Dining ("eats") before Travel ("uber").
"""

CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "Dining",
        (
            "chipotle", "starbucks", "mcdonald", "burger", "grill", "cafe", "coffee",
            "bistro", "steak", "pizza", "sushi", "taco", "eats", "grubhub", "doordash",
            "resy", "sweetgreen", "shake shack", "dunkin",
        ),
    ),
    (
        "Travel",
        (
            "uber", "lyft", "delta", "united", "american air", "jetblue", "southwest",
            "hotel", "airbnb", "expedia", "booking.com", "train", "amtrak", "hertz",
            "avis", "marriott", "hilton", "hyatt",
        ),
    ),
    (
        "Groceries",
        (
            "whole foods", "trader joe", "safeway", "kroger", "publix", "wegmans",
            "walmart", "target", "aldi", "costco", "market", "foods",
        ),
    ),
    ("Drugstore", ("cvs", "walgreens", "rite aid", "duane reade", "pharmacy", "chemist", "boots")),
    ("Gas", ("shell", "chevron", "exxon", "mobil", "bp", "wawa", "7-eleven", "arco", "texaco", "fuel", "gas")),
    (
        "Streaming",
        ("netflix", "hulu", "spotify", "disney", "hbo", "youtube", "apple", "peacock", "paramount", "music"),
    ),
    (
        "Shopping",
        (
            "amazon", "apple store", "best buy", "nike", "adidas", "gap", "zara", "h&m",
            "uniqlo", "sephora", "saks", "nordstrom", "bloomingdale",
        ),
    ),
)

BENEFIT_CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Dining", ("dining", "resy", "grubhub")),
    ("Travel", ("uber", "lyft", "travel", "hotel", "flight")),
    ("Shopping", ("saks",)),
    ("Streaming", ("digital", "stream")),
)

FALLBACK_CATEGORY = "Other"


def _first_match(text: str, table: tuple[tuple[str, tuple[str, ...]], ...]) -> str | None:
    normalized = text.lower()
    for category, keywords in table:
        if any(keyword in normalized for keyword in keywords):
            return category
    return None


def guess_category(merchant_name: str) -> str | None:
    """Return the spending category suggested by a merchant name, or None."""
    return _first_match(merchant_name or "", CATEGORY_KEYWORDS)


def category_for_benefit(benefit_name: str) -> str:
    return _first_match(benefit_name or "", BENEFIT_CATEGORY_KEYWORDS) or FALLBACK_CATEGORY
