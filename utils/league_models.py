from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, NamedTuple, Optional

from constants.league_config import SOLO_QUEUE
from utils.riot_errors import InvalidRiotIdError, NoRankedDataError

RIOT_ID_SEPARATOR = "#"


class RiotId(NamedTuple):
    game_name: str
    tag_line: str

    def __str__(self) -> str:
        return f"{self.game_name}{RIOT_ID_SEPARATOR}{self.tag_line}"


def parse_riot_id(riot_id: str) -> RiotId:
    """
    Split a "name#tag" Riot ID into its parts.

    Raises:
        InvalidRiotIdError: Unless there is exactly one separator with a
            non-empty name and tag around it
    """
    if not isinstance(riot_id, str) or riot_id.count(RIOT_ID_SEPARATOR) != 1:
        raise InvalidRiotIdError(f"Invalid Riot ID '{riot_id}'. Use the name#tag format")

    game_name, tag_line = (part.strip() for part in riot_id.split(RIOT_ID_SEPARATOR))
    if not game_name or not tag_line:
        raise InvalidRiotIdError(f"Invalid Riot ID '{riot_id}'. Use the name#tag format")

    return RiotId(game_name, tag_line)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class RankedEntry:
    """One row of the league entries endpoint."""

    queue_type: str
    tier: str
    rank: Optional[str]
    league_points: int
    wins: int
    losses: int
    veteran: bool = False
    inactive: bool = False
    fresh_blood: bool = False
    hot_streak: bool = False

    @classmethod
    def from_api(cls, data: Dict) -> "RankedEntry":
        return cls(
            queue_type=data.get("queueType", ""),
            tier=data.get("tier", ""),
            rank=data.get("rank"),
            league_points=data.get("leaguePoints", 0),
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
            veteran=data.get("veteran", False),
            inactive=data.get("inactive", False),
            fresh_blood=data.get("freshBlood", False),
            hot_streak=data.get("hotStreak", False),
        )


def select_solo_entry(entries: List[Dict]) -> RankedEntry:
    """Pick the solo queue entry out of a league entries response."""
    for data in entries or []:
        if data.get("queueType") == SOLO_QUEUE:
            return RankedEntry.from_api(data)
    raise NoRankedDataError("No ranked solo queue data found")


@dataclass(frozen=True)
class RankedInfo:
    riot_id: str
    puuid: str
    summoner_id: str
    summoner_name: str
    summoner_level: int
    tier: str
    rank: Optional[str]
    league_points: int
    wins: int
    losses: int
    veteran: bool
    inactive: bool
    fresh_blood: bool
    hot_streak: bool
    last_updated: str = field(default_factory=utc_now_iso)

    @classmethod
    def from_lookup(
        cls, riot_id: RiotId, account: Dict, summoner: Dict, entry: RankedEntry
    ) -> "RankedInfo":
        return cls(
            riot_id=str(riot_id),
            puuid=account.get("puuid", ""),
            summoner_id=summoner.get("id", ""),
            summoner_name=summoner.get("name") or account.get("gameName") or riot_id.game_name,
            summoner_level=summoner.get("summonerLevel", 0),
            tier=entry.tier,
            rank=entry.rank,
            league_points=entry.league_points,
            wins=entry.wins,
            losses=entry.losses,
            veteran=entry.veteran,
            inactive=entry.inactive,
            fresh_blood=entry.fresh_blood,
            hot_streak=entry.hot_streak,
        )

    def to_dict(self) -> Dict:
        """External (camelCase) representation."""
        return {
            "riotId": self.riot_id,
            "puuid": self.puuid,
            "summonerId": self.summoner_id,
            "summonerName": self.summoner_name,
            "summonerLevel": self.summoner_level,
            "tier": self.tier,
            "rank": self.rank,
            "leaguePoints": self.league_points,
            "wins": self.wins,
            "losses": self.losses,
            "veteran": self.veteran,
            "inactive": self.inactive,
            "freshBlood": self.fresh_blood,
            "hotStreak": self.hot_streak,
            "lastUpdated": self.last_updated,
        }


@dataclass
class TrackedPlayer:
    """A player tracked by the bot, updated in place from RankedInfo."""

    name: str
    tag: str
    region: str
    tier: Optional[str] = None
    division: Optional[str] = None
    lp: int = 0
    wins: int = 0
    losses: int = 0
    summoner_id: Optional[str] = None
    summoner_level: Optional[int] = None
    veteran: bool = False
    inactive: bool = False
    fresh_blood: bool = False
    hot_streak: bool = False
    last_updated: Optional[str] = None

    @property
    def riot_id(self) -> str:
        return f"{self.name}{RIOT_ID_SEPARATOR}{self.tag}"

    def apply_ranked_info(self, info: RankedInfo) -> None:
        self.tier = info.tier
        self.division = info.rank
        self.lp = info.league_points
        self.wins = info.wins
        self.losses = info.losses
        self.summoner_id = info.summoner_id
        self.summoner_level = info.summoner_level
        self.veteran = info.veteran
        self.inactive = info.inactive
        self.fresh_blood = info.fresh_blood
        self.hot_streak = info.hot_streak
        self.last_updated = info.last_updated

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_row(cls, row: Dict) -> "TrackedPlayer":
        known = cls.__dataclass_fields__
        data = {key: value for key, value in row.items() if key in known}
        for flag in ("veteran", "inactive", "fresh_blood", "hot_streak"):
            if flag in data:
                data[flag] = bool(data[flag])
        return cls(**data)
