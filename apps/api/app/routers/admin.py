"""Admin endpoints for moderating users, dealerships and listings."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import admin as admin_schema
from ..services import admin as admin_service
from ..services.access import Viewer, get_viewer

router = APIRouter()


@router.get("/overview", response_model=admin_schema.AdminOverviewResponse)
async def overview(
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> admin_schema.AdminOverviewResponse:
    """Return platform counters and the newest listings."""

    return await admin_service.overview(viewer, session)


@router.get("/listings", response_model=admin_schema.AdminListingsResponse)
async def list_listings(
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> admin_schema.AdminListingsResponse:
    return await admin_service.list_listings(viewer, session)


@router.get("/users", response_model=admin_schema.UserListResponse)
async def list_users(
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> admin_schema.UserListResponse:
    return await admin_service.list_users(viewer, session)


@router.post("/users/{uid}/status", response_model=admin_schema.UserSummary)
async def set_user_status(
    uid: str,
    payload: admin_schema.UserStatusRequest,
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> admin_schema.UserSummary:
    """Suspend or reactivate an account."""

    return await admin_service.set_user_status(uid, payload.status, viewer, session)


@router.delete("/users/{uid}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    uid: str,
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> None:
    """Delete an account with its dealership and listings."""

    await admin_service.delete_user(uid, viewer, session)


@router.get("/dealers", response_model=admin_schema.DealerListResponse)
async def list_dealers(
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> admin_schema.DealerListResponse:
    return await admin_service.list_dealers(viewer, session)


@router.post("/dealers/{uid}/status", status_code=status.HTTP_204_NO_CONTENT)
async def set_dealer_status(
    uid: str,
    payload: admin_schema.DealerStatusRequest,
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> None:
    """Approve, reject or suspend a dealership."""

    await admin_service.set_dealer_status(uid, payload.status, viewer, session)
