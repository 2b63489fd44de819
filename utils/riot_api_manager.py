from typing import Optional

from logger import setup_logger
from utils.league_models import RankedInfo, TrackedPlayer
from utils.mock_riot_client import MockRiotApiClient
from utils.riot_api_client import RankedDataClient, RiotApiClient
from utils.riot_errors import ConfigurationError

logger = setup_logger("RiotApiManager")


class RiotApiManager:
    """
    Chooses between the real Riot client and the mock client.
    Callers use this object only and never branch on the mode themselves.
    """

    def __init__(
        self,
        real_client: Optional[RiotApiClient] = None,
        mock_client: Optional[MockRiotApiClient] = None,
    ):
        self.real_client = real_client or RiotApiClient()
        self.mock_client = mock_client or MockRiotApiClient()
        self._use_mock = not self.real_client.has_api_key()

        if self._use_mock:
            logger.info("No Riot API key set - using simulated data")

    def current_client(self) -> RankedDataClient:
        return self.mock_client if self._use_mock else self.real_client

    def is_using_mock_api(self) -> bool:
        return self._use_mock

    def set_api_key(self, api_key: Optional[str]) -> None:
        """Store the key and switch to the real client if it is non-empty."""
        self.real_client.set_api_key(api_key)
        self._use_mock = not self.real_client.has_api_key()
        logger.info(f"Switched to {'mock' if self._use_mock else 'real'} Riot API")

    def use_mock(self) -> None:
        self._use_mock = True
        logger.info("Forced mock Riot API")

    def use_real(self) -> None:
        if not self.real_client.has_api_key():
            raise ConfigurationError("No API key set for real API client")
        self._use_mock = False
        logger.info("Forced real Riot API")

    async def get_ranked_info(self, riot_id: str, region: str) -> RankedInfo:
        return await self.current_client().get_ranked_info(riot_id, region)

    async def update_player(self, player: TrackedPlayer) -> TrackedPlayer:
        return await self.current_client().update_player(player)

    async def is_in_game(self, player: TrackedPlayer) -> bool:
        return await self.current_client().is_in_game(player)

    def has_api_key(self) -> bool:
        return self.current_client().has_api_key()

    def get_api_key(self) -> Optional[str]:
        return self.current_client().get_api_key()

    def get_stats(self) -> dict:
        return {
            "mode": "mock" if self._use_mock else "real",
            **self.real_client.scheduler.get_stats(),
        }

    async def close(self) -> None:
        await self.real_client.close()
