"""Simulated recommendation endpoints.

None of these results come from a trained model: feature importances and
evaluation metrics are fixed, the cluster label is drawn at random and the
recommendation score is uniform noise over the current catalog. Nothing here
writes to a store.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from storefront.storage.json_store import Record

# Configure module logger
logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 5

# Score range of the simulated recommender, inclusive
MIN_SCORE = 60
MAX_SCORE = 100

FEATURE_IMPORTANCE: List[Dict[str, Any]] = [
    {"feature": "Purchase History", "importance": 34},
    {"feature": "Search Frequency", "importance": 22},
    {"feature": "Category Preference", "importance": 18},
    {"feature": "Click Behavior", "importance": 15},
    {"feature": "Rating Behavior", "importance": 11},
]

CLUSTERS = ("Tech Enthusiast", "Fashion Lover", "Budget Shopper", "Lifestyle Shopper")
CLUSTER_DESCRIPTION = "Simulated K-Means clustering result"
UNKNOWN_USER = "Unknown"

MODEL_EVAL: Dict[str, Any] = {
    "rmse": 0.83,
    "mae": 0.57,
    "precisionAtK": 0.89,
    "note": "Simulated evaluation metrics",
}


class SimulationService:
    """Produces fixed or randomized "AI" payloads.

    Attributes:
        rng: numpy random generator; pass a seeded one for reproducible output.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def feature_importance(self) -> List[Dict[str, Any]]:
        return [dict(row) for row in FEATURE_IMPORTANCE]

    def cluster(self, user: Optional[str] = None) -> Dict[str, str]:
        """Assign a random cluster label to ``user``."""
        chosen = CLUSTERS[int(self.rng.integers(len(CLUSTERS)))]
        return {
            "user": user or UNKNOWN_USER,
            "cluster": chosen,
            "description": CLUSTER_DESCRIPTION,
        }

    def score(self, n: int) -> np.ndarray:
        """Draw ``n`` integer scores in [MIN_SCORE, MAX_SCORE].

        Scores are ``round((u * 0.4 + 0.6) * 100)`` for ``u`` uniform in
        [0, 1), rounding halves up.
        """
        span = (MAX_SCORE - MIN_SCORE) / 100
        raw = (self.rng.random(n) * span + MIN_SCORE / 100) * 100
        return np.floor(raw + 0.5).astype(int)

    def recommend(
        self,
        products: Sequence[Record],
        top_n: int = DEFAULT_TOP_N,
    ) -> List[Dict[str, Any]]:
        """Score every product at random and return the best ``top_n``.

        Args:
            products: Current catalog.
            top_n: Maximum number of products to return.

        Returns:
            Copies of the top products with an added ``aiScore`` key, highest
            score first.
        """
        if not products or top_n <= 0:
            return []

        scores = self.score(len(products))
        order = np.argsort(-scores, kind="stable")[:top_n]

        recommendations = [
            {**products[idx], "aiScore": int(scores[idx])} for idx in order
        ]
        logger.debug(
            "Simulated recommendations",
            extra={
                "num_products": len(products),
                "num_recommendations": len(recommendations),
            },
        )
        return recommendations

    def model_eval(self) -> Dict[str, Any]:
        return dict(MODEL_EVAL)
