import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

_TRUE = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    deployer_mnemonic: Optional[str] = None
    network: str = "localnet"
    smoke_test: bool = True
    require_algorand_addresses: bool = True
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    @classmethod
    def from_env(cls) -> "Settings":
        # Load environment variables
        load_dotenv()

        deployer = os.getenv("DEPLOYER")
        return cls(
            deployer_mnemonic=deployer if deployer and deployer.strip() else None,
            network=os.getenv("NETWORK", "localnet").lower(),
            smoke_test=_flag("SMOKE_TEST", True),
            require_algorand_addresses=_flag("REQUIRE_ALGORAND_ADDRESSES", True),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUE
