from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from urllib.parse import quote

from constants.league_config import (
    ACCOUNT_CLUSTER,
    API_BASE_URLS,
    ENDPOINTS,
    LEAGUE_CONFIG,
    REGIONAL_ROUTING,
)
from logger import setup_logger
from utils.league_models import (
    RankedInfo,
    TrackedPlayer,
    parse_riot_id,
    select_solo_entry,
)
from utils.request_scheduler import RequestScheduler
from utils.riot_credentials import CredentialStore
from utils.riot_errors import ErrorKind, InvalidRequestError, RiotAPIError
from utils.riot_transport import RiotTransport

logger = setup_logger("RiotApiClient")


class RankedDataClient(ABC):
    """Interface shared by the real Riot client and the mock client."""

    @abstractmethod
    async def get_ranked_info(self, riot_id: str, region: str) -> RankedInfo:
        """Resolve a Riot ID to its solo queue ranked info."""

    @abstractmethod
    async def is_in_game(self, player: TrackedPlayer) -> bool:
        """Check whether a tracked player is currently in a live game."""

    @abstractmethod
    def has_api_key(self) -> bool: ...

    @abstractmethod
    def get_api_key(self) -> Optional[str]: ...

    @abstractmethod
    def set_api_key(self, api_key: Optional[str]) -> None: ...

    async def update_player(self, player: TrackedPlayer) -> TrackedPlayer:
        """Refresh a tracked player in place with fresh ranked info."""
        try:
            info = await self.get_ranked_info(player.riot_id, player.region)
        except RiotAPIError as e:
            logger.warning(f"Failed to update player {player.riot_id}: {e}")
            raise
        player.apply_ranked_info(info)
        return player


def platform_host(region: str) -> str:
    """Base URL of a platform region, e.g. https://na1.api.riotgames.com."""
    region = (region or "").lower()
    if region not in REGIONAL_ROUTING:
        raise InvalidRequestError(
            f"Unknown region '{region}'. Valid regions: {', '.join(REGIONAL_ROUTING)}"
        )
    return f"https://{region}.api.riotgames.com"


class RiotApiClient(RankedDataClient):
    """
    Riot API client. Every call is routed through one RequestScheduler so
    the whole process shares a single quota.
    """

    def __init__(
        self,
        credentials: Optional[CredentialStore] = None,
        scheduler: Optional[RequestScheduler] = None,
        transport: Optional[RiotTransport] = None,
    ):
        self.credentials = credentials or CredentialStore.from_env()
        self.transport = transport or RiotTransport(self.credentials)
        self.scheduler = scheduler or RequestScheduler.for_tier(
            self.transport.execute, LEAGUE_CONFIG["api"]["rate_limit_tier"]
        )

    def set_api_key(self, api_key: Optional[str]) -> None:
        self.credentials.set(api_key)

    def get_api_key(self) -> Optional[str]:
        return self.credentials.get()

    def has_api_key(self) -> bool:
        return self.credentials.has()

    async def close(self) -> None:
        await self.scheduler.close()

    async def get_account_by_riot_id(self, game_name: str, tag_line: str) -> Dict:
        """Get account (puuid) by Riot ID. Always served by the account cluster."""
        url = API_BASE_URLS[ACCOUNT_CLUSTER] + ENDPOINTS["account"].format(
            game_name=quote(game_name, safe=""),
            tag_line=quote(tag_line, safe=""),
        )
        return await self.scheduler.submit(url)

    async def get_summoner_by_puuid(self, puuid: str, region: str) -> Dict:
        url = platform_host(region) + ENDPOINTS["summoner"].format(
            puuid=quote(puuid, safe="")
        )
        return await self.scheduler.submit(url)

    async def get_league_entries(self, summoner_id: str, region: str) -> List[Dict]:
        url = platform_host(region) + ENDPOINTS["league"].format(
            summoner_id=quote(summoner_id, safe="")
        )
        return await self.scheduler.submit(url)

    async def get_current_game(self, summoner_id: str, region: str) -> Dict:
        url = platform_host(region) + ENDPOINTS["spectator"].format(
            summoner_id=quote(summoner_id, safe="")
        )
        return await self.scheduler.submit(url)

    async def get_ranked_info(self, riot_id: str, region: str) -> RankedInfo:
        """
        Get solo queue ranked info for a player.

        Args:
            riot_id: Riot ID in name#tag form
            region: Platform region (na1, euw1, kr, ...)

        Returns:
            RankedInfo for the player's RANKED_SOLO_5x5 entry

        Raises:
            InvalidRiotIdError: When riot_id is malformed
            NoRankedDataError: When the player has no solo queue entry
            TransportError: Any failure from the three lookups, unchanged
        """
        parsed = parse_riot_id(riot_id)
        platform_host(region)

        account = await self.get_account_by_riot_id(parsed.game_name, parsed.tag_line)
        summoner = await self.get_summoner_by_puuid(account["puuid"], region)
        entries = await self.get_league_entries(summoner["id"], region)

        entry = select_solo_entry(entries)
        info = RankedInfo.from_lookup(parsed, account, summoner, entry)
        logger.info(
            f"Fetched {info.riot_id}: {info.tier} {info.rank or ''} {info.league_points} LP"
        )
        return info

    async def resolve_summoner_id(self, riot_id: str, region: str) -> str:
        """Riot ID -> encrypted summoner id (account and summoner lookups only)."""
        parsed = parse_riot_id(riot_id)
        platform_host(region)
        account = await self.get_account_by_riot_id(parsed.game_name, parsed.tag_line)
        summoner = await self.get_summoner_by_puuid(account["puuid"], region)
        return summoner["id"]

    async def is_in_game(self, player: TrackedPlayer) -> bool:
        """
        Check the spectator endpoint for a live game.

        The summoner id is cached on the player to skip the lookups next
        time. A 404 anywhere means "not in game"; other errors propagate.
        """
        try:
            if not player.summoner_id:
                player.summoner_id = await self.resolve_summoner_id(
                    player.riot_id, player.region
                )
            game = await self.get_current_game(player.summoner_id, player.region)
        except RiotAPIError as e:
            if e.kind is ErrorKind.NOT_FOUND:
                return False
            raise
        return game is not None
