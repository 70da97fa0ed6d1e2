"""Progress stats routes."""

from fastapi import APIRouter, Depends

from ...services import ProgressAggregator
from ..deps import get_aggregator

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("")
async def weekly_stats(aggregator: ProgressAggregator = Depends(get_aggregator)):
    """Caller's completion figures for this week, with partner summary."""
    return (await aggregator.compute_stats()).to_dict()


@router.get("/compare/{partner_id}")
async def compare(partner_id: int, aggregator: ProgressAggregator = Depends(get_aggregator)):
    return (await aggregator.compare_with_partner(partner_id)).to_dict()
