from __future__ import annotations
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pathlib import Path
from typing import Any, Dict, List, Optional
import os, logging

from dotenv import load_dotenv

APP_DIR = Path(__file__).parent

# Load .env early so the service modules see it at import time
load_dotenv(dotenv_path=APP_DIR / ".env", override=False)

from schemas import (
    ChatContext, ChatRequest, ChatResponse, Product, RecommendRequest,
    SearchFilters, WelcomeRequest,
)
from services.catalog_loader import load_catalog
from agent.agent import StoreAgent
from agent.responses import connection_trouble

logging.basicConfig(level=os.getenv("STORE_LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

CATALOG_PATH = os.getenv("STORE_CATALOG_PATH") or None
CORS_ORIGINS = [o.strip() for o in os.getenv("STORE_CORS_ORIGINS", "*").split(",") if o.strip()]

app = FastAPI(title="AI Store Assistant")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS, allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"]
)

# Bootstrap
catalog = load_catalog(Path(CATALOG_PATH) if CATALOG_PATH else None)
agent = StoreAgent(catalog)

# -------- lenient body helpers ----------
def _pick_first(d: Dict[str, Any], keys: list[str], default=None):
    for k in keys:
        if k in d and d[k] not in (None, ""):
            return d[k]
    return default

def _to_int(x) -> Optional[int]:
    if x is None or isinstance(x, bool): return None
    try: return int(x)
    except (TypeError, ValueError): return None

async def _json_object(req: Request) -> Dict[str, Any]:
    try:
        body = await req.json()
    except Exception:
        body = {}
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Invalid JSON body")
    return body

# -------- catalog ----------
@app.get("/api/catalog", response_model=List[Product])
def get_catalog():
    return catalog.items

@app.get("/api/products/{product_id}", response_model=Product)
def get_product(product_id: int):
    p = catalog.get(product_id)
    if p is None:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")
    return p

@app.get("/api/products/{product_id}/frequently_bought", response_model=List[Product])
def frequently_bought(product_id: int):
    return agent.frequently_bought_with(product_id)

# -------- search / recommend ----------
@app.post("/api/search", response_model=List[Product])
async def search(req: Request):
    body = await _json_object(req)

    q = _pick_first(body, ["query", "q", "search", "text"], default="")
    raw_filters = body.get("filters") or {}
    if not isinstance(raw_filters, dict):
        raw_filters = {}
    merged = {
        "category": raw_filters.get("category", body.get("category")),
        "min_price": _pick_first(raw_filters, ["minPrice", "min_price"], _pick_first(body, ["minPrice", "min_price"])),
        "max_price": _pick_first(raw_filters, ["maxPrice", "max_price"], _pick_first(body, ["maxPrice", "max_price"])),
    }
    filters = SearchFilters(**merged)
    limit = _to_int(_pick_first(body, ["limit", "k"], None))
    return await agent.search(str(q), filters, limit=limit)

@app.post("/api/recommend", response_model=List[Product])
async def recommend(req: Request):
    body = await _json_object(req)

    prefs = body.get("preferences") or []
    if isinstance(prefs, str):
        prefs = [prefs]
    if not isinstance(prefs, list):
        prefs = []
    exclude = _to_int(_pick_first(body, ["excludeProductId", "exclude_product_id"], None))
    req_body = RecommendRequest(
        preferences=[p for p in prefs if isinstance(p, str)],
        exclude_product_id=exclude,
    )
    return await agent.recommend(req_body.preferences, req_body.exclude_product_id)

# -------- chat ----------
@app.post("/api/chat", response_model=ChatResponse)
async def chat(body: ChatRequest):
    try:
        return await agent.classify_and_respond(body.message.strip(), body.context)
    except Exception:
        logger.exception("chat reply failed for message %r", body.message)
        return connection_trouble()

@app.post("/api/chat/welcome", response_model=List[ChatResponse])
async def chat_welcome(body: Optional[WelcomeRequest] = None):
    return await agent.welcome(body.context if body else ChatContext())
