"""
Jobs API routes.

Route prefix: /api/jobs

In the authenticated deployment every route goes through the bearer-token
gate and only sees the caller's own jobs. In the open deployment
``get_job_owner`` yields ``None`` and nothing is scoped.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas import JobCreate, JobResponse, JobUpdate
from auth.dependencies import db_session, get_job_owner
from auth.errors import NotFoundError
from auth.gate import Identity
from database.helpers import (
    create_job,
    delete_job,
    get_job,
    job_to_dict,
    list_jobs,
    update_job,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["jobs"])


def _owner_id(owner: Optional[Identity]):
    return owner.user_id if owner is not None else None


async def _load_job(session: AsyncSession, job_id: str, owner: Optional[Identity]):
    job = await get_job(session, job_id, owner_id=_owner_id(owner))
    if job is None:
        raise NotFoundError("No such job")
    return job


@router.get("", response_model=List[JobResponse])
async def get_all_jobs(
    session: AsyncSession = Depends(db_session),
    owner: Optional[Identity] = Depends(get_job_owner),
) -> List[Dict[str, Any]]:
    jobs = await list_jobs(session, owner_id=_owner_id(owner))
    return [job_to_dict(job) for job in jobs]


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_new_job(
    req: JobCreate,
    session: AsyncSession = Depends(db_session),
    owner: Optional[Identity] = Depends(get_job_owner),
) -> Dict[str, Any]:
    job = await create_job(session, req.model_dump(), owner_id=_owner_id(owner))
    await session.commit()
    return job_to_dict(job)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job_by_id(
    job_id: str,
    session: AsyncSession = Depends(db_session),
    owner: Optional[Identity] = Depends(get_job_owner),
) -> Dict[str, Any]:
    job = await _load_job(session, job_id, owner)
    return job_to_dict(job)


@router.put("/{job_id}", response_model=JobResponse)
async def update_existing_job(
    job_id: str,
    req: JobUpdate,
    session: AsyncSession = Depends(db_session),
    owner: Optional[Identity] = Depends(get_job_owner),
) -> Dict[str, Any]:
    job = await _load_job(session, job_id, owner)
    job = await update_job(session, job, req.model_dump(exclude_unset=True, exclude_none=True))
    await session.commit()
    return job_to_dict(job)


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_existing_job(
    job_id: str,
    session: AsyncSession = Depends(db_session),
    owner: Optional[Identity] = Depends(get_job_owner),
) -> Response:
    job = await _load_job(session, job_id, owner)
    await delete_job(session, job)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
