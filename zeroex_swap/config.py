import os
from dataclasses import dataclass
from dotenv import load_dotenv
from .client import ZEROEX_BASE_URL

PRIVATE_KEY_ENV = "PRIVATE_KEY"
ZERO_EX_API_KEY_ENV = "ZERO_EX_API_KEY"
RPC_URL_ENV = "ALCHEMY_HTTP_TRANSPORT_URL"
ZERO_EX_BASE_URL_ENV = "ZERO_EX_BASE_URL"

DEFAULT_ZERO_EX_BASE_URL = ZEROEX_BASE_URL

class ConfigurationError(ValueError):
    """A required setting is missing from the environment"""

@dataclass
class Settings:
    private_key: str
    zero_ex_api_key: str
    rpc_url: str
    zero_ex_base_url: str = DEFAULT_ZERO_EX_BASE_URL

def _require(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(f"missing {name}.")
    return value

def load_settings(use_dotenv: bool = True) -> Settings:
    """Load the swap settings from the environment.

    Args:
        use_dotenv: Whether to read a local `.env` file first

    Returns:
        The validated settings

    Raises:
        ConfigurationError: If the private key, API key or RPC URL is not set
    """
    if use_dotenv:
        load_dotenv(override=True)

    private_key = _require(PRIVATE_KEY_ENV)
    api_key = _require(ZERO_EX_API_KEY_ENV)
    rpc_url = _require(RPC_URL_ENV)

    if not private_key.startswith("0x"):
        private_key = f"0x{private_key}"

    return Settings(
        private_key=private_key,
        zero_ex_api_key=api_key,
        rpc_url=rpc_url,
        zero_ex_base_url=os.getenv(ZERO_EX_BASE_URL_ENV) or DEFAULT_ZERO_EX_BASE_URL,
    )
