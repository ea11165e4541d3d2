"""
Database helper functions — job postings CRUD.

Every lookup takes an optional ``owner_id``. When given (authenticated
deployment) the query is scoped to that user's jobs; a job owned by someone
else behaves exactly like a missing one.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Job

logger = logging.getLogger(__name__)


def to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    """Parse an id; malformed input gives ``None``."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def job_to_dict(job: Job) -> Dict[str, Any]:
    return {
        "id": str(job.job_id),
        "title": job.title,
        "type": job.type,
        "description": job.description,
        "company": dict(job.company or {}),
        "user_id": str(job.user_id) if job.user_id else None,
        "created_at": job.created_at,
        "updated_at": job.updated_at,
    }


async def list_jobs(session: AsyncSession, owner_id: Optional[uuid.UUID] = None) -> List[Job]:
    stmt = select(Job).order_by(Job.created_at)
    if owner_id is not None:
        stmt = stmt.where(Job.user_id == owner_id)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_job(
    session: AsyncSession,
    job_id: str | uuid.UUID,
    owner_id: Optional[uuid.UUID] = None,
) -> Optional[Job]:
    jid = to_uuid(job_id)
    if jid is None:
        return None
    job = await session.get(Job, jid)
    if job is None or (owner_id is not None and job.user_id != owner_id):
        return None
    return job


async def create_job(
    session: AsyncSession,
    fields: Dict[str, Any],
    owner_id: Optional[uuid.UUID] = None,
) -> Job:
    job = Job(
        job_id=uuid.uuid4(),
        title=fields["title"],
        type=fields["type"],
        description=fields["description"],
        company=dict(fields["company"]),
        user_id=owner_id,
    )
    session.add(job)
    await session.flush()
    await session.refresh(job)
    logger.info("Created job %s (owner=%s)", job.job_id, owner_id)
    return job


async def update_job(session: AsyncSession, job: Job, changes: Dict[str, Any]) -> Job:
    """Apply a partial update. ``company`` is merged key by key."""
    for key, value in changes.items():
        if key == "company":
            # New dict so the JSON column is flagged dirty.
            job.company = {**(job.company or {}), **value}
        else:
            setattr(job, key, value)
    await session.flush()
    await session.refresh(job)
    return job


async def delete_job(session: AsyncSession, job: Job) -> None:
    await session.delete(job)
    await session.flush()
    logger.info("Deleted job %s", job.job_id)
