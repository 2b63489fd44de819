import os
from typing import Optional

from logger import setup_logger

logger = setup_logger("RiotCredentials")


class CredentialStore:
    """Holds the Riot API key for the process. Persisting it is up to the caller."""

    ENV_VAR = "RIOT_API_KEY"

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = self._normalize(api_key)

    @classmethod
    def from_env(cls, env_var: Optional[str] = None) -> "CredentialStore":
        return cls(os.getenv(env_var or cls.ENV_VAR))

    @staticmethod
    def _normalize(api_key: Optional[str]) -> Optional[str]:
        if api_key is None:
            return None
        api_key = api_key.strip()
        return api_key or None

    def get(self) -> Optional[str]:
        return self._api_key

    def set(self, api_key: Optional[str]) -> None:
        self._api_key = self._normalize(api_key)
        if self._api_key:
            logger.info("Riot API key updated")
        else:
            logger.info("Riot API key cleared")

    def has(self) -> bool:
        return self._api_key is not None
