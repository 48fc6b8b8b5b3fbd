from .client import ZeroExClient, ZeroExClientError, SwapRequest
from .chain import ChainContext, SwapContext, MAX_UINT256, parse_units
from .config import Settings, ConfigurationError, load_settings
from .http import AggregatorHttpClient
from .pipeline import ApprovalFailurePolicy, SwapPipelineError, SwapResult, run_swap
from .types import PriceResponse, QuoteResponse

__all__ = [
    "ZeroExClient",
    "ZeroExClientError",
    "AggregatorHttpClient",
    "ChainContext",
    "SwapContext",
    "MAX_UINT256",
    "parse_units",
    "Settings",
    "ConfigurationError",
    "load_settings",
    "ApprovalFailurePolicy",
    "SwapPipelineError",
    "SwapResult",
    "run_swap",
    "SwapRequest",
    "PriceResponse",
    "QuoteResponse",
]
