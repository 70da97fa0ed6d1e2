"""Request-scoped dependencies."""

import random

from fastapi import Depends, Header, Request

from ..db import Gateway
from ..services import PartnerManager, ProgressAggregator, WorkoutGenerator
from ..settings import get_settings


def get_gateway(
    request: Request,
    x_user_id: int | None = Header(default=None),
) -> Gateway:
    """Gateway bound to the caller named in the X-User-Id header."""
    return Gateway(request.app.state.db_path, user_id=x_user_id)


def get_generator(gateway: Gateway = Depends(get_gateway)) -> WorkoutGenerator:
    settings = get_settings()
    return WorkoutGenerator(
        gateway,
        rng=random.Random(settings.random_seed),
        first_weekday=settings.first_weekday,
    )


def get_aggregator(gateway: Gateway = Depends(get_gateway)) -> ProgressAggregator:
    return ProgressAggregator(gateway, first_weekday=get_settings().first_weekday)


def get_partner_manager(gateway: Gateway = Depends(get_gateway)) -> PartnerManager:
    return PartnerManager(gateway)
