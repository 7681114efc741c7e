"""
Quick validator: checks every catalog item before the server loads it.
Reports duplicate ids, unknown categories, non-http images, out-of-range
price/stock/rating and missing tags. Exit code 1 if anything is wrong.
"""
from pathlib import Path
from typing import Any, Dict, List
import argparse, json, sys
from urllib.parse import urlparse

from services.catalog_loader import CATEGORIES, DEFAULT_CATALOG_PATH

def is_http(u: str) -> bool:
    try:
        p = urlparse(u)
        return p.scheme in ("http", "https") and bool(p.netloc)
    except Exception:
        return False

def check_items(data: List[Dict[str, Any]]) -> List[str]:
    problems: List[str] = []
    seen = set()
    for n, it in enumerate(data):
        tag = f"item #{n} (id={it.get('id')!r})"
        pid = it.get("id")
        if not isinstance(pid, int) or isinstance(pid, bool):
            problems.append(f"{tag}: id must be an integer")
        elif pid in seen:
            problems.append(f"{tag}: duplicate id")
        else:
            seen.add(pid)
        if not str(it.get("name", "")).strip():
            problems.append(f"{tag}: missing name")
        if it.get("category") not in CATEGORIES:
            problems.append(f"{tag}: unknown category {it.get('category')!r}")
        price = it.get("price")
        if not isinstance(price, (int, float)) or price < 0:
            problems.append(f"{tag}: price must be a non-negative number")
        stock = it.get("stock", 0)
        if not isinstance(stock, int) or stock < 0:
            problems.append(f"{tag}: stock must be a non-negative integer")
        rating = it.get("rating", 0)
        if not isinstance(rating, (int, float)) or not 0 <= rating <= 5:
            problems.append(f"{tag}: rating must be within 0..5")
        if not is_http(it.get("image", "")):
            problems.append(f"{tag}: image is not an http(s) URL")
        if not it.get("tags"):
            problems.append(f"{tag}: no tags")
    return problems

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Validate the storefront catalog file.")
    ap.add_argument("path", nargs="?", default=str(DEFAULT_CATALOG_PATH))
    args = ap.parse_args(argv)

    data = json.loads(Path(args.path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        print(f"{args.path}: expected a JSON list")
        return 1
    problems = check_items(data)
    for p in problems:
        print(p)
    print(f"Validated {len(data)} items. Problems: {len(problems)}")
    return 1 if problems else 0

if __name__ == "__main__":
    sys.exit(main())
