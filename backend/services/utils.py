import numpy as np
from typing import Sequence

def rank_desc(scores: Sequence[float]) -> np.ndarray:
    """Indices ordering `scores` high to low; equal scores keep their input order."""
    arr = np.asarray(scores, dtype=np.float64)
    if arr.size == 0:
        return np.zeros(0, dtype=np.int64)
    return np.argsort(-arr, kind="stable")

def topk_indices(scores: Sequence[float], k: int) -> np.ndarray:
    order = rank_desc(scores)
    return order[:max(k, 0)]
