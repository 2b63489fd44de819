import asyncio
import random
from typing import Awaitable, Callable, Dict, Optional

from constants.league_config import DIVISION_ORDER, LEAGUE_CONFIG
from logger import setup_logger
from utils.league_models import RankedInfo, TrackedPlayer, parse_riot_id
from utils.riot_api_client import RankedDataClient, platform_host

logger = setup_logger("MockRiotApiClient")

MOCK_CONFIG = LEAGUE_CONFIG["mock"]
MOCK_API_KEY = "mock_api_key"


class MockRiotApiClient(RankedDataClient):
    """
    Stand-in for the Riot API when no key is configured.

    Each game name gets a random ranked record on first lookup which then
    drifts a little between lookups, so repeated refreshes look alive.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        latency: float = MOCK_CONFIG["latency"],
        in_game_latency: float = MOCK_CONFIG["in_game_latency"],
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.rng = rng or random.Random()
        self.latency = latency
        self.in_game_latency = in_game_latency
        self._sleep = sleep
        self.mock_data: Dict[str, Dict] = {}
        self._initialize_mock_data()

    def _initialize_mock_data(self) -> None:
        for index, data in enumerate(MOCK_CONFIG["seed_players"]):
            self.mock_data[f"player{index}"] = dict(data)

    def _generate_record(self) -> Dict:
        return {
            "tier": self.rng.choice(MOCK_CONFIG["tiers"]),
            "rank": self.rng.choice(list(DIVISION_ORDER)),
            "lp": self.rng.randint(0, 100),
            "wins": self.rng.randint(5, 50),
            "losses": self.rng.randint(5, 50),
        }

    def _maybe_progress(self, record: Dict) -> None:
        """Simulate some games being played since the last lookup."""
        if self.rng.random() >= MOCK_CONFIG["progression_chance"]:
            return
        record["wins"] += self.rng.randint(0, 2)
        record["losses"] += self.rng.randint(0, 1)
        record["lp"] = max(0, min(100, record["lp"] + self.rng.randint(-10, 15)))

    async def get_ranked_info(self, riot_id: str, region: str) -> RankedInfo:
        await self._sleep(self.latency)

        parsed = parse_riot_id(riot_id)
        platform_host(region)
        key = parsed.game_name.lower()

        record = self.mock_data.get(key)
        if record is None:
            record = self._generate_record()
            self.mock_data[key] = record
            logger.debug(f"Generated mock data for {key}")

        self._maybe_progress(record)

        return RankedInfo(
            riot_id=str(parsed),
            puuid=f"puuid_{key}",
            summoner_id=f"summoner_{key}",
            summoner_name=parsed.game_name,
            summoner_level=self.rng.randint(30, 200),
            tier=record["tier"],
            rank=record["rank"],
            league_points=record["lp"],
            wins=record["wins"],
            losses=record["losses"],
            veteran=self.rng.random() < 0.1,
            inactive=self.rng.random() < 0.05,
            fresh_blood=self.rng.random() < 0.1,
            hot_streak=self.rng.random() < 0.15,
        )

    async def update_player(self, player: TrackedPlayer) -> TrackedPlayer:
        await super().update_player(player)
        # Synthetic ids are never sent to the real spectator endpoint
        player.summoner_id = None
        return player

    async def is_in_game(self, player: TrackedPlayer) -> bool:
        await self._sleep(self.in_game_latency)
        platform_host(player.region)
        return self.rng.random() < MOCK_CONFIG["in_game_chance"]

    def set_api_key(self, api_key: Optional[str]) -> None:
        pass

    def get_api_key(self) -> Optional[str]:
        return MOCK_API_KEY

    def has_api_key(self) -> bool:
        return True
