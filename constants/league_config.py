# Riot API hosts
API_BASE_URLS = {
    "americas": "https://americas.api.riotgames.com",
    "asia": "https://asia.api.riotgames.com",
    "europe": "https://europe.api.riotgames.com",
}

# Platform region -> regional cluster
REGIONAL_ROUTING = {
    "na1": "americas",
    "br1": "americas",
    "la1": "americas",
    "la2": "americas",
    "euw1": "europe",
    "eun1": "europe",
    "tr1": "europe",
    "ru": "europe",
    "kr": "asia",
    "jp1": "asia",
    "oc1": "asia",
}

# Account lookups are sharded by cluster, not by platform
ACCOUNT_CLUSTER = "americas"

ENDPOINTS = {
    "account": "/riot/account/v1/accounts/by-riot-id/{game_name}/{tag_line}",
    "summoner": "/lol/summoner/v4/summoners/by-puuid/{puuid}",
    "league": "/lol/league/v4/entries/by-summoner/{summoner_id}",
    "spectator": "/lol/spectator/v4/active-games/by-summoner/{summoner_id}",
}

RATE_LIMITS = {
    "personal": {"per_second": 20, "per_minute": 100},
    "production": {"per_second": 500, "per_minute": 30000},
}

SOLO_QUEUE = "RANKED_SOLO_5x5"

TIER_ORDER = {
    "IRON": 1,
    "BRONZE": 2,
    "SILVER": 3,
    "GOLD": 4,
    "PLATINUM": 5,
    "DIAMOND": 6,
    "MASTER": 7,
    "GRANDMASTER": 8,
    "CHALLENGER": 9,
}

DIVISION_ORDER = {
    "IV": 1,
    "III": 2,
    "II": 3,
    "I": 4,
}

# Tiers without divisions
APEX_TIERS = {"MASTER", "GRANDMASTER", "CHALLENGER"}

LEAGUE_CONFIG = {
    "api": {
        "header": "X-Riot-Token",
        "request_timeout": 15,  # seconds
        "rate_limit_tier": "personal",
        "request_delay": 0.05,  # seconds between queued requests
    },
    "mock": {
        "latency": 0.5,
        "in_game_latency": 0.2,
        "progression_chance": 0.3,
        "in_game_chance": 0.1,
        "tiers": ["IRON", "BRONZE", "SILVER", "GOLD", "PLATINUM"],
        "seed_players": [
            {"tier": "SILVER", "rank": "II", "lp": 45, "wins": 12, "losses": 8},
            {"tier": "GOLD", "rank": "IV", "lp": 78, "wins": 25, "losses": 18},
            {"tier": "BRONZE", "rank": "I", "lp": 23, "wins": 8, "losses": 12},
            {"tier": "PLATINUM", "rank": "III", "lp": 56, "wins": 45, "losses": 32},
            {"tier": "IRON", "rank": "II", "lp": 67, "wins": 5, "losses": 15},
        ],
    },
    "tracker": {
        "update_interval_hours": 2,
        "stale_after_hours": 1,
        "leaderboard_entries_per_page": 10,
    },
    "ui_timeouts": {
        "leaderboard_view": 300,
    },
    "defaults": {
        "region": "na1",
    },
}
