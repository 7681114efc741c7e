import re
from typing import List, Sequence, Tuple

from schemas import Intent

# Checked top to bottom, first hit wins. A message with both "hello" and "order"
# is a greeting; "hi" also fires inside words like "shipping".
INTENT_KEYWORDS: List[Tuple[Intent, Sequence[str]]] = [
    (Intent.GREETING,        ("hello", "hi", "hey", "good morning", "good afternoon")),
    (Intent.CART_HELP,       ("cart", "basket", "items", "checkout", "purchase")),
    (Intent.RECOMMENDATIONS, ("recommend", "suggest", "similar", "like this", "show me")),
    (Intent.ORDER_TRACKING,  ("order", "track", "shipping", "delivery", "status")),
    (Intent.SHIPPING,        ("ship", "deliver", "freight", "send")),
    (Intent.RETURNS,         ("return", "refund", "exchange", "money back")),
    (Intent.PRODUCT_SEARCH,  ("find", "search", "look for", "where is")),
    (Intent.PRICING,         ("price", "cost", "expensive", "cheap", "discount", "sale")),
    (Intent.SUPPORT,         ("help", "support", "problem", "issue")),
    (Intent.CHECKOUT,        ("buy", "purchase", "complete order", "pay")),
]

_SEARCH_TRIGGERS = re.compile(r"find|search|look for|where is", re.I)

def detect_intent(message: str) -> Intent:
    m = (message or "").lower()
    for intent, keywords in INTENT_KEYWORDS:
        if any(kw in m for kw in keywords):
            return intent
    return Intent.GENERAL

def extract_search_terms(message: str) -> str:
    """What is left of the message once the search trigger phrases are removed."""
    return _SEARCH_TRIGGERS.sub("", message or "").strip()
