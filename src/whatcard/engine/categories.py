from collections.abc import Callable

AIRLINE_KEYWORDS = (
    "delta", "united", "american", "aa.com", "southwest", "jetblue", "alaska", "british",
    "virgin", "emirates", "lufthansa", "air france", "klm", "qantas", "spirit", "frontier", "fly",
)
HOTEL_KEYWORDS = (
    "marriott", "hilton", "hyatt", "ihg", "sheraton", "westin", "choice", "best western",
    "wyndham", "airbnb", "vrbo", "booking", "expedia", "hotels.com",
)
ONLINE_GROCERY_KEYWORDS = (
    "instacart", "freshdirect", "amazon fresh", "peapod", "shipt", "hellofresh",
    "blue apron", "kroger pay", "walmart+",
)
CHASE_TRAVEL_KEYWORDS = ("chase travel", "chase.com/travel")

DINING_LABELS = frozenset({"dining", "restaurants"})
GROCERY_LABELS = frozenset({"groceries", "supermarkets"})
GAS_LABELS = frozenset({"gas", "gas stations"})

TravelMatcher = Callable[[str], bool]


def _contains_any(merchant: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in merchant for keyword in keywords)


# card label -> merchant test, used when the detected category is Travel
TRAVEL_LABEL_MATCHERS: tuple[tuple[str, TravelMatcher], ...] = (
    ("travel", lambda merchant: True),
    ("lyft", lambda merchant: "lyft" in merchant),
    ("flights", lambda merchant: _contains_any(merchant, AIRLINE_KEYWORDS)),
    ("hotels", lambda merchant: _contains_any(merchant, HOTEL_KEYWORDS)),
    ("chase hotels", lambda merchant: _contains_any(merchant, CHASE_TRAVEL_KEYWORDS)),
)


def is_category_match(detected_category: str, card_category_label: str, merchant_name: str = "") -> bool:
    """Decide whether a detected spending category earns a card's bonus category."""
    detected = (detected_category or "").lower()
    label = (card_category_label or "").lower()
    merchant = (merchant_name or "").lower()

    if detected == label:
        return True

    if detected in DINING_LABELS and label in DINING_LABELS:
        return True

    if detected in GROCERY_LABELS:
        if label in GROCERY_LABELS:
            return True
        if label == "online grocery":
            return _contains_any(merchant, ONLINE_GROCERY_KEYWORDS)

    if detected == "travel":
        for travel_label, matcher in TRAVEL_LABEL_MATCHERS:
            if label == travel_label:
                return matcher(merchant)

    if detected == "drugstore" and label == "drugstore":
        return True
    if detected == "streaming" and label == "streaming":
        return True
    if detected == "gas" and label in GAS_LABELS:
        return True
    return False
