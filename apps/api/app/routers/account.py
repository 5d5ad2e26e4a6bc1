"""Endpoints for the caller's own account."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import account as account_schema
from ..services import account as account_service
from ..services.access import Viewer, get_viewer

router = APIRouter()


@router.post("", response_model=account_schema.AccountResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    payload: account_schema.SignUpRequest,
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> account_schema.AccountResponse:
    """Create the profile for a newly authenticated user."""

    return await account_service.sign_up(payload, viewer, session)


@router.get("", response_model=account_schema.AccountResponse)
async def get_account(viewer: Viewer = Depends(get_viewer)) -> account_schema.AccountResponse:
    return await account_service.get_account(viewer)


@router.patch("", response_model=account_schema.AccountResponse)
async def update_account(
    payload: account_schema.AccountUpdateRequest,
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> account_schema.AccountResponse:
    return await account_service.update_account(payload, viewer, session)
