"""Workout partner invites and lookups."""

import logging

from ..db.gateway import Gateway
from ..db.repositories import (
    PartnerRepository,
    UserRepository,
    WeeklyWorkoutRepository,
    WorkoutRepository,
)
from ..errors import ConflictError, NotFoundError
from ..models.partner import PartnerLink, PartnerStatus, UserProfile
from ..models.workout import WeeklyWorkout

logger = logging.getLogger(__name__)


class PartnerManager:
    """Pairwise partner links.

    A link starts ``pending``; its target moves it to ``accepted`` or
    ``rejected``. Its requester may delete it at any time.
    """

    def __init__(self, gateway: Gateway):
        self.gateway = gateway
        self.links = PartnerRepository(gateway)
        self.users = UserRepository(gateway)
        self.weeks = WeeklyWorkoutRepository(gateway)
        self.workouts = WorkoutRepository(gateway)

    async def send_invite(self, target_id: int) -> PartnerLink:
        """Invite another user to be a partner.

        Raises:
            ConflictError: Any link already exists between the two users,
                in either direction and whatever its status
            NotFoundError: The target user does not exist
        """
        caller = self.gateway.current_identity()
        if target_id == caller:
            raise ValueError("Cannot invite yourself")
        if await self.users.get(target_id) is None:
            raise NotFoundError(f"User {target_id} not found")

        if await self.links.find_between(caller, target_id):
            raise ConflictError("A partnership already exists with this user")

        try:
            link = await self.links.create(caller, target_id)
        except ConflictError as e:
            raise ConflictError("Invite already exists with this user") from e

        logger.info("User %s invited user %s (link %s)", caller, target_id, link.id)
        return link

    async def respond_to_invite(self, link_id: int, status: PartnerStatus | str) -> PartnerLink:
        """Accept or reject an invite addressed to the caller.

        Raises:
            NotFoundError: No such invite addressed to the caller
            ConflictError: The invite was already answered
        """
        caller = self.gateway.current_identity()
        status = PartnerStatus(status)
        if status == PartnerStatus.PENDING:
            raise ValueError("An invite can only be accepted or rejected")

        link = await self.links.get(link_id)
        if link is None or link.target_id != caller:
            raise NotFoundError(f"Invite {link_id} not found")
        if link.status != PartnerStatus.PENDING:
            raise ConflictError(f"Invite already {link.status.value}")

        await self.links.set_status(link_id, caller, status)
        logger.info("User %s %s invite %s", caller, status.value, link_id)
        return await self.links.get(link_id)

    async def cancel_invite(self, link_id: int) -> bool:
        """Delete a link the caller sent, whatever its status.

        Returns:
            True if a link was deleted; False if the caller sent no such link
        """
        caller = self.gateway.current_identity()
        deleted = await self.links.delete(link_id, caller)
        if deleted:
            logger.info("User %s cancelled link %s", caller, link_id)
        return bool(deleted)

    async def list_partners(self, user_id: int | None = None) -> dict[str, list[PartnerLink]]:
        """Sent and received links, each with the other user's profile."""
        caller = self.gateway.current_identity()
        user_id = user_id or caller
        return {
            "sent": await self.links.list_sent(user_id),
            "received": await self.links.list_received(user_id),
        }

    async def search_users(self, query: str, limit: int = 10) -> list[UserProfile]:
        """Find other users by username or email."""
        caller = self.gateway.current_identity()
        return await self.users.search(query, exclude_id=caller, limit=limit)

    async def accepted_partner(self, user_id: int | None = None) -> UserProfile | None:
        """The user's partner from their oldest accepted link, if any."""
        caller = self.gateway.current_identity()
        user_id = user_id or caller
        links = await self.links.list_accepted(user_id)
        if not links:
            return None
        return await self.users.get(links[0].other(user_id))

    async def latest_week(self, partner_id: int) -> WeeklyWorkout | None:
        """A partner's most recent weekly workout with its daily workouts.

        Raises:
            NotFoundError: The caller and ``partner_id`` are not accepted partners
        """
        caller = self.gateway.current_identity()
        if partner_id != caller:
            links = await self.links.find_between(caller, partner_id)
            if not any(link.status == PartnerStatus.ACCEPTED for link in links):
                raise NotFoundError(f"No accepted partnership with user {partner_id}")

        week = await self.weeks.latest_for_user(partner_id)
        if week is None:
            return None
        week.workouts = await self.workouts.list_by_weekly(week.id)
        return week
