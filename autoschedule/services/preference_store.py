"""
Per-user scheduling preferences with lazy default creation.
"""

from autoschedule.interfaces.preference_repository import IPreferenceRepository
from autoschedule.models.preferences import SchedulePreference, SchedulePreferenceUpdate


class PreferenceStore:
    def __init__(self, repo: IPreferenceRepository):
        self.repo = repo

    async def get(self, user_id: str) -> SchedulePreference:
        """Return preferences, creating the defaults on first access."""
        return await self.repo.get_or_create(user_id)

    async def update(self, user_id: str, update: SchedulePreferenceUpdate) -> SchedulePreference:
        """Merge only the supplied fields and return the stored row."""
        return await self.repo.update(user_id, update)
