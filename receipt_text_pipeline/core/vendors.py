"""
Known vendor lexicon used to recognise store names in receipt text.

Entries are matched in declaration order, so more specific names that share a
word with a later entry must come first.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class KnownVendor:
    """A known vendor name (lower-case) and the group it belongs to."""
    name: str
    category: str

    @property
    def words(self) -> Tuple[str, ...]:
        return tuple(self.name.split(" "))

    @property
    def is_brand(self) -> bool:
        """True for named chains, False for generic business-type words."""
        return self.category not in GENERIC_CATEGORIES


GENERIC_CATEGORIES = frozenset({"generic", "grocery"})


def _group(category: str, *names: str) -> Tuple[KnownVendor, ...]:
    return tuple(KnownVendor(name, category) for name in names)


KNOWN_VENDORS: Tuple[KnownVendor, ...] = (
    # International / Australian chains
    *_group("international",
            "bistro box", "bistro box departures",
            "metro cash", "walmart", "best price"),

    # Retail chains
    *_group("retail",
            "reliance fresh", "reliance mart", "reliance digital", "reliance trends",
            "big bazaar", "food bazaar", "fashion at big bazaar",
            "more", "more megastore", "more supermarket",
            "spencer's", "spencer's retail", "spencer's hyper",
            "dmart", "avenue supermarts", "d-mart",
            "easyday", "easyday club",
            "star bazaar", "trent hypermarket",
            "hypercity", "shopper's stop",
            "nature's basket", "godrej nature's basket",
            "twenty four seven", "24seven", "24x7"),

    # Food chains
    *_group("food",
            "mcdonald's", "mcdonalds", "mcd",
            "domino's", "dominos pizza", "dominos",
            "pizza hut", "pizzahut",
            "kfc", "kentucky fried chicken",
            "subway", "subway sandwich",
            "burger king", "bk",
            "taco bell",
            "baskin robbins", "dunkin donuts"),

    # Cafes
    *_group("cafe",
            "café coffee day", "ccd", "coffee day",
            "starbucks", "starbucks coffee",
            "barista", "barista coffee",
            "costa coffee", "costa",
            "tim hortons", "blue tokai"),

    # Indian restaurants / brands
    *_group("indian",
            "haldiram's", "haldirams",
            "bikanervala", "bikaner vala",
            "sagar ratna", "saravana bhavan",
            "udupi", "udupi restaurant",
            "punjabi by nature", "pind balluchi",
            "oh! calcutta", "mainland china",
            "barbeque nation", "bbq nation",
            "absolute barbecues", "ab's",
            "social", "hard rock cafe",
            "tgi friday's", "chili's"),

    # Generic business types
    *_group("generic",
            "hotel", "restaurant", "cafe", "bakery", "sweet shop",
            "medical", "pharmacy", "clinic", "hospital",
            "apollo", "fortis", "max healthcare", "manipal",
            "petrol pump", "gas station", "hp", "bharat petroleum",
            "indian oil", "reliance petroleum", "shell"),

    # Grocery / local
    *_group("grocery",
            "kirana", "general store", "supermarket", "mart",
            "provision store", "departmental store"),
)
