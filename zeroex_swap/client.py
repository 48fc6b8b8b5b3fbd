import logging
from dataclasses import dataclass
from typing import Dict, List, Optional
from httpx import Client, Headers, Response
from web3 import Web3
from .http import AggregatorHttpClient
from .types import PriceResponse, QuoteResponse, SourcesResponse

logger = logging.getLogger(__name__)

ZEROEX_BASE_URL = "https://api.0x.org"

ZEROEX_API_KEY_HEADER = "0x-api-key"
ZEROEX_VERSION_HEADER = "0x-version"
ZEROEX_API_VERSION = "v2"

LIQUIDITY_SOURCES_ROUTE = "/swap/v1/sources"
PERMIT2_PRICE_ROUTE = "/swap/permit2/price"
PERMIT2_QUOTE_ROUTE = "/swap/permit2/quote"

CHAIN_ID_QUERY_PARAM = "chainId"

class ZeroExClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

@dataclass
class SwapRequest:
    """The monetized parameter set shared by the price and quote endpoints"""
    chain_id: int
    sell_token: str
    buy_token: str
    sell_amount: int
    taker: str
    affiliate_address: Optional[str] = None
    buy_token_percentage_fee: Optional[str] = None
    fee_recipient: Optional[str] = None

    def __post_init__(self) -> None:
        self.sell_token = Web3.to_checksum_address(self.sell_token)
        self.buy_token = Web3.to_checksum_address(self.buy_token)
        self.taker = Web3.to_checksum_address(self.taker)

    def with_taker(self, taker: str) -> "SwapRequest":
        self.taker = Web3.to_checksum_address(taker)
        return self

    def with_affiliate_fee(self, affiliate_address: str, buy_token_percentage_fee: str) -> "SwapRequest":
        self.affiliate_address = affiliate_address
        self.buy_token_percentage_fee = buy_token_percentage_fee
        return self

    def with_fee_recipient(self, fee_recipient: str) -> "SwapRequest":
        self.fee_recipient = fee_recipient
        return self

    def to_query_params(self) -> Dict[str, str]:
        """
        Builds the query parameters sent to the price and quote endpoints, in
        wire order. Unset monetization fields are left out
        """
        params = {
            "chainId": str(self.chain_id),
            "sellToken": self.sell_token,
            "buyToken": self.buy_token,
            "sellAmount": str(self.sell_amount),
            "taker": self.taker,
            "affiliateAddress": self.affiliate_address,
            "buyTokenPercentageFee": self.buy_token_percentage_fee,
            "feeRecipient": self.fee_recipient,
        }
        return {k: v for k, v in params.items() if v is not None}

class ZeroExClient:
    """Client for the 0x swap API's Permit2 flow.

    This client handles authentication and provides methods for listing
    liquidity sources, requesting indicative prices and requesting firm quotes.
    """

    def __init__(self, api_key: str, base_url: str = ZEROEX_BASE_URL, http_client: Optional[Client] = None):
        """Initialize a new ZeroExClient.

        Args:
            api_key: The 0x API key for authentication
            base_url: The base URL of the 0x API
            http_client: An optional httpx client to send requests through
        """
        self.api_key = api_key
        self.http_client = AggregatorHttpClient(base_url, http_client)

    def get_liquidity_sources(self, chain_id: int) -> List[str]:
        """List the names of the liquidity sources available on a chain.

        Args:
            chain_id: The chain to list sources for

        Returns:
            The source names in the order the API returns them

        Raises:
            ZeroExClientError: If the request fails
        """
        params = {CHAIN_ID_QUERY_PARAM: str(chain_id)}
        response = self.http_client.get_with_headers(LIQUIDITY_SOURCES_ROUTE, params, self._get_headers())
        sources_resp = SourcesResponse(**self._handle_response(response))
        return [source.name for source in sources_resp.sources]

    def get_price(self, request: SwapRequest) -> PriceResponse:
        """Request an indicative price for the given swap.

        Args:
            request: The swap to price

        Returns:
            The parsed price response

        Raises:
            ZeroExClientError: If the request fails
            pydantic.ValidationError: If the response does not match the expected shape
        """
        params = request.to_query_params()
        logger.info("GET %s", self.http_client.build_url(PERMIT2_PRICE_ROUTE, params))
        response = self.http_client.get_with_headers(PERMIT2_PRICE_ROUTE, params, self._get_headers())
        return PriceResponse(**self._handle_response(response))

    def get_quote(self, request: SwapRequest) -> QuoteResponse:
        """Request a firm quote for the given swap.

        The quote is requested with exactly the parameters used for the price.

        Args:
            request: The swap to quote

        Returns:
            The parsed quote response, including the transaction to submit

        Raises:
            ZeroExClientError: If the request fails
            pydantic.ValidationError: If the response does not match the expected shape
        """
        params = dict(request.to_query_params())
        logger.info("GET %s", self.http_client.build_url(PERMIT2_QUOTE_ROUTE, params))
        response = self.http_client.get_with_headers(PERMIT2_QUOTE_ROUTE, params, self._get_headers())
        return QuoteResponse(**self._handle_response(response))

    def close(self) -> None:
        self.http_client.close()

    def _get_headers(self) -> Headers:
        """Get the headers required for API requests.

        Returns:
            Headers containing the API key and API version
        """
        headers = Headers()
        headers["Content-Type"] = "application/json"
        headers[ZEROEX_API_KEY_HEADER] = self.api_key
        headers[ZEROEX_VERSION_HEADER] = ZEROEX_API_VERSION
        return headers

    def _handle_response(self, response: Response) -> dict:
        """Handle an API response.

        Args:
            response: The API response to handle

        Returns:
            The decoded JSON body

        Raises:
            ZeroExClientError: If the response indicates an error
        """
        if response.status_code == 200:  # OK
            return response.json()
        raise ZeroExClientError(
            response.text,
            status_code=response.status_code
        )
