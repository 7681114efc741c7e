from __future__ import annotations
from typing import List, Optional
import logging

from schemas import Product, SearchFilters
from services.catalog_loader import Catalog
from services.utils import rank_desc

logger = logging.getLogger(__name__)

# Field weights for keyword relevance
NAME_WEIGHT = 10
CATEGORY_WEIGHT = 5
TAG_WEIGHT = 3
DESCRIPTION_WEIGHT = 1

def normalize_query(query: Optional[str]) -> str:
    # no trimming: "  " is a real query and only matches text containing it
    return (query or "").lower()

def relevance_score(product: Product, query: str) -> int:
    """
    Additive substring score. Each matching tag counts separately.
    `query` is lowercased here as well, so raw input is fine.
    """
    q = query.lower()
    score = 0
    if q in product.name.lower():
        score += NAME_WEIGHT
    if q in product.category.lower():
        score += CATEGORY_WEIGHT
    for tag in product.tags:
        if q in tag.lower():
            score += TAG_WEIGHT
    if q in product.description.lower():
        score += DESCRIPTION_WEIGHT
    return score

def matches_query(product: Product, query: str) -> bool:
    if not query:
        return True
    return (
        query in product.name.lower()
        or query in product.description.lower()
        or any(query in t.lower() for t in product.tags)
        or query in product.category.lower()
    )

def matches_filters(product: Product, filters: SearchFilters) -> bool:
    if filters.category is not None and product.category != filters.category:
        return False
    if filters.min_price is not None and product.price < filters.min_price:
        return False
    if filters.max_price is not None and product.price > filters.max_price:  # inclusive max
        return False
    return True

class TextIndex:
    """
    Keyword search over the catalog:
      - text predicate on name / description / tags / category
      - strict category and price-range filters
      - relevance ordering (stable on ties) when a query is given
    """
    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def search_with_filters(self, query: Optional[str],
                            filters: Optional[SearchFilters] = None,
                            limit: Optional[int] = None) -> List[Product]:
        q = normalize_query(query)
        filters = filters or SearchFilters()

        if not q and filters.is_empty():
            out = self.catalog.items
        else:
            out = [p for p in self.catalog if matches_query(p, q) and matches_filters(p, filters)]
            if q:
                scores = [relevance_score(p, q) for p in out]
                out = [out[int(i)] for i in rank_desc(scores)]

        if limit is not None and limit >= 0:
            out = out[:limit]
        logger.info("search q=%r filters=%s -> %d results", q, filters.model_dump(), len(out))
        return out
