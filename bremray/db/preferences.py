"""Key-value preference storage on top of the ``preferences`` table."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bremray.models import Preference


class PreferenceStore:
    def __init__(self, factory: async_sessionmaker[AsyncSession]):
        self._factory = factory

    async def get(self, key: str) -> str | None:
        async with self._factory() as db:
            pref = await db.get(Preference, key)
            return pref.value if pref else None

    async def set(self, key: str, value: str) -> None:
        async with self._factory() as db:
            pref = await db.get(Preference, key)
            if pref is None:
                db.add(Preference(key=key, value=value))
            else:
                pref.value = value
            await db.commit()

    async def delete(self, key: str) -> None:
        async with self._factory() as db:
            pref = await db.get(Preference, key)
            if pref is not None:
                await db.delete(pref)
                await db.commit()
