"""Simulated recommendation endpoints for the Storefront API.

These endpoints mimic the responses of a recommendation model without
running one. They never modify any store.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends

from storefront.api.dependencies import get_catalog_service, get_simulation_service
from storefront.api.schemas import (
    ClusterResponse,
    FeatureImportance,
    ModelEvalResponse,
)
from storefront.services.catalog import CatalogService
from storefront.services.simulation import DEFAULT_TOP_N, SimulationService

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(
    prefix="/ai",
    tags=["ai"],
)


@router.get("/feature-importance", response_model=List[FeatureImportance])
def feature_importance(
    simulation: SimulationService = Depends(get_simulation_service),
) -> List[dict]:
    """Return the fixed feature-importance table."""
    return simulation.feature_importance()


@router.get("/cluster", response_model=ClusterResponse)
def cluster(
    user: Optional[str] = None,
    simulation: SimulationService = Depends(get_simulation_service),
) -> dict:
    """Return a randomly chosen customer segment for ``user``."""
    return simulation.cluster(user)


@router.get("/recommend")
def recommend(
    catalog: CatalogService = Depends(get_catalog_service),
    simulation: SimulationService = Depends(get_simulation_service),
) -> List[Dict[str, Any]]:
    """Return the top products of the catalog under a random score.

    Example:
        GET /ai/recommend
        Returns at most 5 products, each with an ``aiScore`` in [60, 100].
    """
    recommendations = simulation.recommend(catalog.list(), top_n=DEFAULT_TOP_N)
    logger.info(
        "Served simulated recommendations",
        extra={"num_recommendations": len(recommendations)},
    )
    return recommendations


@router.get("/model-eval", response_model=ModelEvalResponse)
def model_eval(
    simulation: SimulationService = Depends(get_simulation_service),
) -> dict:
    """Return fixed evaluation metrics of the simulated model."""
    return simulation.model_eval()
