from __future__ import annotations
import os, asyncio, logging, random
from typing import List, Optional, Sequence

from schemas import ChatContext, ChatResponse, Product, SearchFilters
from services.catalog_loader import Catalog
from services.text_index import TextIndex
from services.recommender import PreferenceRecommender
from services.chat import detect_intent
from agent.responses import build_response, welcome_messages

logger = logging.getLogger(__name__)

def _env_delay(default: float = 0.3) -> float:
    try:
        return max(0.0, float(os.getenv("STORE_SIM_DELAY", default)))
    except ValueError:
        return default

class StoreAgent:
    """
    The shopping assistant behind the storefront:
    - keyword search with category / price filters
    - preference-based recommendations and same-category "bought together" picks
    - rule-based chat: keyword intent detection + canned replies shaped by cart/user state

    Holds only the read-only catalog. `rng` drives template variety (seed it for
    reproducible replies); `delay` is the simulated service latency awaited once per call.
    """
    def __init__(self, catalog: Catalog, rng: Optional[random.Random] = None,
                 delay: Optional[float] = None):
        self.catalog = catalog
        self.text_index = TextIndex(catalog)
        self.recommender = PreferenceRecommender(catalog)
        self.rng = rng or random.Random()
        self.delay = _env_delay() if delay is None else max(0.0, float(delay))

    async def _pause(self) -> None:
        await asyncio.sleep(self.delay)

    async def search(self, query: str = "", filters: Optional[SearchFilters] = None,
                     limit: Optional[int] = None) -> List[Product]:
        await self._pause()
        return self.text_index.search_with_filters(query, filters, limit=limit)

    async def recommend(self, preferences: Optional[Sequence[str]] = None,
                        exclude_product_id: Optional[int] = None) -> List[Product]:
        await self._pause()
        return self.recommender.recommend(preferences, exclude_product_id)

    def frequently_bought_with(self, product_id: int) -> List[Product]:
        return self.recommender.frequently_bought_with(product_id)

    async def classify_and_respond(self, message: str,
                                   context: Optional[ChatContext] = None) -> ChatResponse:
        await self._pause()
        ctx = context or ChatContext()
        intent = detect_intent(message)
        logger.info("chat intent=%s user=%s cart_items=%d", intent.value,
                    "yes" if ctx.user else "anon", len(ctx.cart_items))
        return build_response(intent, ctx, message, self.rng)

    async def welcome(self, context: Optional[ChatContext] = None) -> List[ChatResponse]:
        await self._pause()
        return welcome_messages(context)
