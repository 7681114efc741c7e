from typing import List, Optional, Sequence
from schemas import Product
from services.catalog_loader import Catalog
from services.utils import topk_indices

RECOMMEND_K = 4
BOUGHT_TOGETHER_K = 2

def preference_match(product: Product, preferences: Sequence[str]) -> int:
    # case-sensitive; preferences use the catalog's lowercase vocabulary
    for pref in preferences:
        if pref in product.category or any(pref in tag for tag in product.tags):
            return 1
    return 0

class PreferenceRecommender:
    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def recommend(self, preferences: Optional[Sequence[str]] = None,
                  exclude_product_id: Optional[int] = None,
                  k: int = RECOMMEND_K) -> List[Product]:
        items = [p for p in self.catalog if exclude_product_id is None or p.id != exclude_product_id]
        prefs = [p for p in (preferences or []) if p]
        if not prefs:
            return items[:k]
        scores = [preference_match(p, prefs) for p in items]
        return [items[int(i)] for i in topk_indices(scores, k)]

    def frequently_bought_with(self, product_id: int, k: int = BOUGHT_TOGETHER_K) -> List[Product]:
        current = self.catalog.get(product_id)
        if current is None:
            return []
        same = [p for p in self.catalog if p.id != product_id and p.category == current.category]
        return same[:k]
