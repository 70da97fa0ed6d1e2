"""Workout partner routes."""

from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...services import PartnerManager
from ..deps import get_partner_manager

router = APIRouter(prefix="/partners", tags=["partners"])


class InviteRequest(BaseModel):
    target_id: int


class InviteResponse(BaseModel):
    status: Literal["accepted", "rejected"]


@router.get("")
async def list_partners(manager: PartnerManager = Depends(get_partner_manager)):
    """Sent and received invites with the other user's profile."""
    links = await manager.list_partners()
    return {side: [link.to_dict() for link in items] for side, items in links.items()}


@router.get("/search")
async def search_users(q: str, manager: PartnerManager = Depends(get_partner_manager)):
    return [user.to_dict() for user in await manager.search_users(q)]


@router.post("", status_code=201)
async def send_invite(body: InviteRequest, manager: PartnerManager = Depends(get_partner_manager)):
    return (await manager.send_invite(body.target_id)).to_dict()


@router.post("/{link_id}/respond")
async def respond(
    link_id: int,
    body: InviteResponse,
    manager: PartnerManager = Depends(get_partner_manager),
):
    return (await manager.respond_to_invite(link_id, body.status)).to_dict()


@router.delete("/{link_id}")
async def cancel(link_id: int, manager: PartnerManager = Depends(get_partner_manager)):
    return {"deleted": await manager.cancel_invite(link_id)}


@router.get("/{partner_id}/week")
async def partner_week(partner_id: int, manager: PartnerManager = Depends(get_partner_manager)):
    """A partner's most recent weekly workout."""
    week = await manager.latest_week(partner_id)
    if week is None:
        return None
    data = week.to_dict()
    data["id"] = week.id
    data["workouts"] = [w.to_detail_dict() for w in week.workouts]
    return data
