"""
Job History Service
Applicants keep a list of past positions on their profile
"""
from typing import Any, Dict, List

from loguru import logger

from core.exceptions import ResourceNotFoundException
from domain.entities import Actor, JobHistoryEntry
from application.repositories.interfaces import IJobHistoryRepository


class JobHistoryService:

    def __init__(self, job_history_repository: IJobHistoryRepository):
        self.job_history_repo = job_history_repository

    async def list_entries(self, actor: Actor) -> List[JobHistoryEntry]:
        return await self.job_history_repo.list_for_user(actor.id)

    async def add_entry(self, actor: Actor, data: Dict[str, Any]) -> JobHistoryEntry:
        entry = JobHistoryEntry(id=None, user_id=actor.id, **data)
        created = await self.job_history_repo.create(entry)
        logger.info(f"User {actor.id} added job history entry {created.id}")
        return created

    async def delete_entry(self, actor: Actor, entry_id: int) -> None:
        """
        Remove one of your own entries

        Raises:
            ResourceNotFoundException: No such entry, or it belongs to someone else
        """
        entry = await self.job_history_repo.get_by_id(entry_id)
        if entry is None or not entry.belongs_to(actor.id):
            raise ResourceNotFoundException("Job history entry", str(entry_id))

        await self.job_history_repo.delete(entry_id)
        logger.info(f"User {actor.id} deleted job history entry {entry_id}")
