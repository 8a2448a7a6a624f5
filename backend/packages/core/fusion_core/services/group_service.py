"""
Group service.

Handles group management and feed reassignment.
"""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fusion_core import get_logger
from fusion_core.exceptions import NotFoundError
from fusion_core.schemas import GroupCreate, GroupResponse, GroupUpdate
from fusion_database.models import DEFAULT_GROUP_ID, Feed, Group

logger = get_logger(__name__)


class GroupService:
    """Group management service."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize group service.

        Args:
            session: Database session.
        """
        self.session = session

    async def list_groups(self) -> list[GroupResponse]:
        """
        Get all groups ordered by id.

        Returns:
            List of group responses.
        """
        result = await self.session.execute(select(Group).order_by(Group.id))
        return [GroupResponse.model_validate(group) for group in result.scalars().all()]

    async def get_group(self, group_id: int) -> Group:
        """
        Get a group row.

        Raises:
            NotFoundError: If the group does not exist.
        """
        group = await self.session.get(Group, group_id)
        if group is None:
            raise NotFoundError("Group not found")
        return group

    async def create_group(self, data: GroupCreate) -> GroupResponse:
        """
        Create a group.

        Args:
            data: Group fields.

        Returns:
            Created group.

        Raises:
            ValueError: If a group with the same name exists.
        """
        await self._ensure_unique_name(data.name)

        group = Group(name=data.name, auto_fetch_full_content=data.auto_fetch_full_content)
        self.session.add(group)
        await self.session.commit()

        logger.info("Created group", extra={"group_id": group.id})
        return GroupResponse.model_validate(group)

    async def get_or_create_group(self, name: str) -> tuple[Group, bool]:
        """
        Find a group by name, creating it if missing.

        Returns:
            The group and whether it was created.
        """
        group = await self.session.scalar(select(Group).where(Group.name == name))
        if group is not None:
            return group, False

        group = Group(name=name)
        self.session.add(group)
        await self.session.commit()
        return group, True

    async def update_group(self, group_id: int, data: GroupUpdate) -> GroupResponse:
        """
        Update a group.

        Only fields present in the request are applied.

        Raises:
            ValueError: If the group does not exist or the new name is taken.
        """
        group = await self.get_group(group_id)
        fields = data.model_fields_set

        if "name" in fields and data.name is not None and data.name != group.name:
            await self._ensure_unique_name(data.name)
            group.name = data.name
        if "auto_fetch_full_content" in fields:
            group.auto_fetch_full_content = data.auto_fetch_full_content

        await self.session.commit()
        return GroupResponse.model_validate(group)

    async def delete_group(self, group_id: int) -> None:
        """
        Delete a group, moving its feeds to the default group.

        Raises:
            ValueError: If the group is the default group or does not exist.
        """
        if group_id == DEFAULT_GROUP_ID:
            raise ValueError("The default group cannot be deleted")

        group = await self.get_group(group_id)

        await self.session.execute(
            update(Feed).where(Feed.group_id == group_id).values(group_id=DEFAULT_GROUP_ID)
        )
        await self.session.delete(group)
        await self.session.commit()

        logger.info("Deleted group", extra={"group_id": group_id})

    async def _ensure_unique_name(self, name: str) -> None:
        existing = await self.session.scalar(select(Group.id).where(Group.name == name))
        if existing is not None:
            raise ValueError("Group name already exists")
