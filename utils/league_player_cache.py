"""
Lock protected in-memory cache of tracked League players.
Cogs and the refresh loop share it through bot.league_players.
"""

import asyncio
from typing import Dict, Iterable, Optional, Tuple

from logger import setup_logger
from utils.league_models import TrackedPlayer

logger = setup_logger("LeaguePlayerCache")


def _key(name: str, tag: str) -> Tuple[str, str]:
    return (name.lower(), tag.lower())


class LeaguePlayerCache:
    def __init__(self):
        self._cache: Dict[Tuple[str, str], TrackedPlayer] = {}
        self._lock = asyncio.Lock()

    async def get(self, name: str, tag: str) -> Optional[TrackedPlayer]:
        async with self._lock:
            return self._cache.get(_key(name, tag))

    async def get_all(self) -> Dict[Tuple[str, str], TrackedPlayer]:
        """
        Get all cached players.
        Returns a copy of the mapping; the players themselves are shared.
        """
        async with self._lock:
            return self._cache.copy()

    async def set(self, player: TrackedPlayer) -> None:
        async with self._lock:
            self._cache[_key(player.name, player.tag)] = player
            logger.debug(f"Updated player cache for {player.riot_id}")

    async def batch_set(self, players: Iterable[TrackedPlayer]) -> None:
        async with self._lock:
            count = 0
            for player in players:
                self._cache[_key(player.name, player.tag)] = player
                count += 1
            logger.info(f"Batch updated {count} players in cache")

    async def delete(self, name: str, tag: str) -> bool:
        async with self._lock:
            if self._cache.pop(_key(name, tag), None) is not None:
                logger.info(f"Deleted {name}#{tag} from cache")
                return True
            return False

    async def size(self) -> int:
        async with self._lock:
            return len(self._cache)
