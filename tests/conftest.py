"""Pytest configuration and shared fixtures."""

import copy
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from hexbytes import HexBytes

from zeroex_swap import SwapRequest, ZeroExClient

CHAIN_ID = 534352
WETH = "0x5300000000000000000000000000000000000004"
WSTETH = "0xf610A9dfB7C89644979B4A0f27063E9e7D7CDA32"
TAKER = "0x1111111111111111111111111111111111111111"
PERMIT2 = "0x000000000022D473030F116dDEE9F6B43aC78BA3"
SETTLER = "0x7f6cee965959295cc64d0e6c00d99d6532d8e86b"

MOCK_SIGNATURE = bytes(range(1, 66))


class FakeContext:
    """Records every chain interaction instead of touching a node."""

    chain_id = CHAIN_ID
    address = TAKER

    def __init__(
        self,
        signature: Optional[bytes] = MOCK_SIGNATURE,
        approve_error: Optional[Exception] = None,
        sign_error: Optional[Exception] = None,
        nonce: int = 7,
    ):
        self.signature = signature
        self.approve_error = approve_error
        self.sign_error = sign_error
        self.nonce = nonce
        self.approvals: List[tuple] = []
        self.receipts_awaited: List[HexBytes] = []
        self.typed_data_signed: List[Dict[str, Any]] = []
        self.nonce_reads = 0
        self.signed_transactions: List[Dict[str, Any]] = []
        self.broadcasts: List[bytes] = []

    def approve(self, token: str, spender: str, amount: int) -> HexBytes:
        self.approvals.append((token, spender, amount))
        if self.approve_error:
            raise self.approve_error
        return HexBytes(b"\xaa" * 32)

    def wait_for_receipt(self, tx_hash: HexBytes) -> Dict[str, Any]:
        self.receipts_awaited.append(tx_hash)
        return {"status": 1, "transactionHash": tx_hash}

    def sign_typed_data(self, typed_data: Dict[str, Any]) -> Optional[bytes]:
        self.typed_data_signed.append(typed_data)
        if self.sign_error:
            raise self.sign_error
        return self.signature

    def get_nonce(self) -> int:
        self.nonce_reads += 1
        return self.nonce

    def sign_transaction(self, tx: Dict[str, Any]) -> bytes:
        self.signed_transactions.append(tx)
        return b"signed-transaction"

    def send_raw_transaction(self, raw_transaction: bytes) -> HexBytes:
        self.broadcasts.append(raw_transaction)
        return HexBytes(b"\xbb" * 32)


@pytest.fixture
def fake_context() -> FakeContext:
    return FakeContext()


@pytest.fixture
def swap_request() -> SwapRequest:
    return SwapRequest(
        chain_id=CHAIN_ID,
        sell_token=WETH,
        buy_token=WSTETH,
        sell_amount=100_000_000_000_000_000,
        taker=TAKER,
    ).with_affiliate_fee(TAKER, "0.01").with_fee_recipient(TAKER)


@pytest.fixture
def permit_typed_data() -> Dict[str, Any]:
    """A Permit2 PermitTransferFrom message as embedded in a quote."""
    return {
        "types": {
            "EIP712Domain": [
                {"name": "name", "type": "string"},
                {"name": "chainId", "type": "uint256"},
                {"name": "verifyingContract", "type": "address"},
            ],
            "PermitTransferFrom": [
                {"name": "permitted", "type": "TokenPermissions"},
                {"name": "spender", "type": "address"},
                {"name": "nonce", "type": "uint256"},
                {"name": "deadline", "type": "uint256"},
            ],
            "TokenPermissions": [
                {"name": "token", "type": "address"},
                {"name": "amount", "type": "uint256"},
            ],
        },
        "domain": {
            "name": "Permit2",
            "chainId": CHAIN_ID,
            "verifyingContract": PERMIT2,
        },
        "primaryType": "PermitTransferFrom",
        "message": {
            "permitted": {"token": WETH, "amount": 100_000_000_000_000_000},
            "spender": SETTLER,
            "nonce": 2241959297937691820908574931991575,
            "deadline": 1733817256,
        },
    }


@pytest.fixture
def price_payload() -> Dict[str, Any]:
    return {
        "liquidityAvailable": True,
        "buyAmount": "84000000000000000",
        "sellAmount": "100000000000000000",
        "buyTokenPercentageFee": "0.01",
        "issues": {
            "allowance": None,
            "balance": None,
            "simulationIncomplete": False,
            "invalidSourcesPassed": [],
        },
        "route": {
            "fills": [
                {"from": WETH, "to": WSTETH, "source": "Ambient", "proportionBps": "6000"},
                {"from": WETH, "to": WSTETH, "source": "SyncSwap", "proportionBps": "4000"},
            ],
            "tokens": [
                {"address": WETH, "symbol": "WETH"},
                {"address": WSTETH, "symbol": "wstETH"},
            ],
        },
        "tokenMetadata": {
            "buyToken": {"buyTaxBps": "0", "sellTaxBps": "0"},
            "sellToken": {"buyTaxBps": "0", "sellTaxBps": "0"},
        },
    }


@pytest.fixture
def quote_payload(price_payload, permit_typed_data) -> Dict[str, Any]:
    payload = copy.deepcopy(price_payload)
    payload["transaction"] = {
        "to": SETTLER,
        "data": "0x1234",
        "gas": "288079",
        "gasPrice": "4500000000",
        "value": "0",
    }
    payload["permit2"] = {
        "type": "Permit2",
        "hash": "0x" + "ab" * 32,
        "eip712": permit_typed_data,
    }
    return payload


class StubApi:
    """Serves canned responses for the 0x endpoints and records requests."""

    def __init__(self, routes: Dict[str, Any]):
        self.routes = routes
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, text="not found")
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, json=copy.deepcopy(route))

    def requests_to(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]


@pytest.fixture
def make_client() -> Callable[[Dict[str, Any]], tuple]:
    def _make(routes: Dict[str, Any]):
        api = StubApi(routes)
        http_client = httpx.Client(transport=httpx.MockTransport(api))
        client = ZeroExClient("test-api-key", "https://api.0x.test", http_client)
        return client, api

    return _make
