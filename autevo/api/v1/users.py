# autevo/api/v1/users.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from autevo.api.dependencies import get_current_user, require_operation
from autevo.core.tenant import RequestContext
from autevo.db.database import get_db
from autevo.db.models.user import User
from autevo.schemas.user import Invite, InviteCreate, RoleUpdate, User as UserSchema
from autevo.services.team_service import TeamService

router = APIRouter()


@router.get("/me", response_model=UserSchema)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """Get current user information"""
    return current_user


@router.get("", response_model=List[UserSchema])
async def list_team(
    include_inactive: bool = False,
    ctx: RequestContext = Depends(require_operation("user.list")),
    db: AsyncSession = Depends(get_db)
):
    return await TeamService(db, ctx).list(include_inactive)


@router.post("/invite", response_model=Invite, status_code=status.HTTP_201_CREATED)
async def invite_user(
    data: InviteCreate,
    ctx: RequestContext = Depends(require_operation("user.invite")),
    db: AsyncSession = Depends(get_db)
):
    return await TeamService(db, ctx).invite(data)


@router.patch("/{user_id}/role", response_model=UserSchema)
async def update_user_role(
    user_id: str,
    data: RoleUpdate,
    ctx: RequestContext = Depends(require_operation("user.update_role")),
    db: AsyncSession = Depends(get_db)
):
    return await TeamService(db, ctx).update_role(user_id, data.role)


@router.post("/{user_id}/deactivate", response_model=UserSchema)
async def deactivate_user(
    user_id: str,
    ctx: RequestContext = Depends(require_operation("user.deactivate")),
    db: AsyncSession = Depends(get_db)
):
    return await TeamService(db, ctx).deactivate(user_id)


@router.post("/{user_id}/reactivate", response_model=UserSchema)
async def reactivate_user(
    user_id: str,
    ctx: RequestContext = Depends(require_operation("user.reactivate")),
    db: AsyncSession = Depends(get_db)
):
    return await TeamService(db, ctx).reactivate(user_id)
