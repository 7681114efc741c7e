from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence
import json, logging

from pydantic import ValidationError

from schemas import Product

logger = logging.getLogger(__name__)

# ---- Supported categories (same as UI filter dropdown) ----
CATEGORIES = ("electronics", "food", "furniture")

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "catalog.json"

class Catalog:
    """
    Read-only, ordered product list.
    Order is the file order and is what every "catalog order" result refers to.
    """
    def __init__(self, products: Sequence[Product]):
        seen: Dict[int, Product] = {}
        for p in products:
            if p.id in seen:
                raise ValueError(f"Duplicate product id {p.id} in catalog")
            seen[p.id] = p
        self._items = tuple(products)
        self._by_id = seen

    def __iter__(self) -> Iterator[Product]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, i: int) -> Product:
        return self._items[i]

    @property
    def items(self) -> List[Product]:
        return list(self._items)

    def get(self, product_id: Optional[int]) -> Optional[Product]:
        if product_id is None:
            return None
        return self._by_id.get(product_id)

    def categories(self) -> List[str]:
        out: List[str] = []
        for p in self._items:
            if p.category not in out:
                out.append(p.category)
        return out

def parse_catalog(raw: List[Dict[str, Any]]) -> Catalog:
    products: List[Product] = []
    for n, it in enumerate(raw):
        try:
            p = Product.model_validate(it)
        except ValidationError as e:
            raise ValueError(f"Invalid product record #{n}: {e}") from e
        if p.category not in CATEGORIES:
            raise ValueError(f"Invalid product record #{n}: unknown category {p.category!r}")
        products.append(p)
    return Catalog(products)

def load_catalog(path: Optional[Path] = None) -> Catalog:
    """
    Load data/catalog.json (or `path`) into a Catalog.
    A broken file is a startup error, so this raises instead of falling back.
    """
    path = Path(path) if path else DEFAULT_CATALOG_PATH
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of products")
    catalog = parse_catalog(data)
    logger.info("Loaded %d products (%s) from %s", len(catalog), ", ".join(catalog.categories()), path)
    return catalog
