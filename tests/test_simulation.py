"""Tests for the simulated recommendation logic."""

import numpy as np
import pytest

from storefront.services.simulation import (
    CLUSTERS,
    FEATURE_IMPORTANCE,
    MAX_SCORE,
    MIN_SCORE,
    SimulationService,
)


@pytest.fixture
def simulation() -> SimulationService:
    return SimulationService(rng=np.random.default_rng(42))


def _products(n: int):
    return [
        {"id": str(i), "name": f"Product {i}", "price": i, "createdAt": "2024-01-01T00:00:00.000Z"}
        for i in range(n)
    ]


def test_feature_importance_is_fixed(simulation: SimulationService):
    table = simulation.feature_importance()

    assert table == FEATURE_IMPORTANCE
    assert [row["importance"] for row in table] == [34, 22, 18, 15, 11]


def test_feature_importance_returns_copies(simulation: SimulationService):
    simulation.feature_importance()[0]["importance"] = 0

    assert simulation.feature_importance()[0]["importance"] == 34


def test_cluster_uses_known_labels(simulation: SimulationService):
    for _ in range(50):
        result = simulation.cluster("ann")
        assert result["user"] == "ann"
        assert result["cluster"] in CLUSTERS
        assert result["description"] == "Simulated K-Means clustering result"


def test_cluster_without_user_is_unknown(simulation: SimulationService):
    assert simulation.cluster()["user"] == "Unknown"
    assert simulation.cluster("")["user"] == "Unknown"


def test_scores_within_range(simulation: SimulationService):
    scores = simulation.score(10_000)

    assert scores.min() >= MIN_SCORE
    assert scores.max() <= MAX_SCORE


def test_recommend_returns_at_most_five(simulation: SimulationService):
    products = _products(12)

    recommendations = simulation.recommend(products)

    assert len(recommendations) == 5
    ids = {p["id"] for p in products}
    assert all(r["id"] in ids for r in recommendations)


def test_recommend_sorted_by_descending_score(simulation: SimulationService):
    scores = [r["aiScore"] for r in simulation.recommend(_products(20))]

    assert scores == sorted(scores, reverse=True)


def test_recommend_with_few_products_returns_all(simulation: SimulationService):
    recommendations = simulation.recommend(_products(3))

    assert sorted(r["id"] for r in recommendations) == ["0", "1", "2"]


def test_recommend_empty_catalog(simulation: SimulationService):
    assert simulation.recommend([]) == []


def test_recommend_does_not_mutate_products(simulation: SimulationService):
    products = _products(4)

    simulation.recommend(products)

    assert all("aiScore" not in p for p in products)


def test_model_eval_is_fixed(simulation: SimulationService):
    assert simulation.model_eval() == {
        "rmse": 0.83,
        "mae": 0.57,
        "precisionAtK": 0.89,
        "note": "Simulated evaluation metrics",
    }
