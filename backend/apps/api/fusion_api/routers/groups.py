"""
Groups router.

Provides endpoints for managing feed groups.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from fusion_core.exceptions import NotFoundError
from fusion_core.schemas import GroupCreate, GroupListResponse, GroupResponse, GroupUpdate
from fusion_core.services import GroupService

from ..dependencies import get_group_service

router = APIRouter()


@router.get("")
async def list_groups(
    group_service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupListResponse:
    """
    Get all groups.

    Returns:
        List of groups ordered by id.
    """
    return GroupListResponse(groups=await group_service.list_groups())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_group(
    data: GroupCreate,
    group_service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """
    Create a group.

    Raises:
        HTTPException: If the name is already taken.
    """
    try:
        return await group_service.create_group(data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None


@router.patch("/{group_id}")
async def update_group(
    group_id: int,
    data: GroupUpdate,
    group_service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """
    Update a group.

    Raises:
        HTTPException: If the group is missing or the name is taken.
    """
    try:
        return await group_service.update_group(group_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_group(
    group_id: int,
    group_service: Annotated[GroupService, Depends(get_group_service)],
) -> None:
    """
    Delete a group; its feeds move to the default group.

    Raises:
        HTTPException: If the group is missing or is the default group.
    """
    try:
        await group_service.delete_group(group_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None
