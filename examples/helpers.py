from typing import Tuple
from zeroex_swap import SwapContext, ZeroExClient, Settings, load_settings

# Scroll mainnet
SCROLL_CHAIN_ID = 534352
SCROLL_CHAIN_NAME = "Scroll"
SCROLLSCAN_TX_URL = "https://scrollscan.com/tx/"

WETH = "0x5300000000000000000000000000000000000004"  # Scroll wETH
WSTETH = "0xf610A9dfB7C89644979B4A0f27063E9e7D7CDA32"  # Scroll wstETH

def get_settings() -> Settings:
    """Load settings from the environment and a local `.env`.

    Raises:
        ConfigurationError: If PRIVATE_KEY, ZERO_EX_API_KEY or
            ALCHEMY_HTTP_TRANSPORT_URL is not set
    """
    return load_settings(use_dotenv=True)

def get_context_and_client(settings: Settings, chain_id: int = SCROLL_CHAIN_ID) -> Tuple[SwapContext, ZeroExClient]:
    """Build the chain context and 0x client for a run.

    Args:
        settings: The loaded settings
        chain_id: The chain the RPC endpoint must serve

    Returns:
        A tuple of (SwapContext, ZeroExClient)

    Raises:
        ValueError: If the RPC endpoint is on a different chain
    """
    context = SwapContext.from_rpc(settings.rpc_url, settings.private_key)
    if context.chain_id != chain_id:
        raise ValueError(f"RPC endpoint is on chain {context.chain_id}, expected {chain_id}")
    client = ZeroExClient(settings.zero_ex_api_key, settings.zero_ex_base_url)
    return context, client
