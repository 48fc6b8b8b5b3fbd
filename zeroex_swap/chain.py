import logging
from decimal import Decimal
from typing import Any, Dict, Protocol, Union, runtime_checkable
from eth_account import Account
from eth_account.messages import encode_typed_data
from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3 import Web3
from web3.middleware import SignAndSendRawMiddlewareBuilder
from web3.types import TxParams, TxReceipt

logger = logging.getLogger(__name__)

MAX_UINT256 = 2**256 - 1

# Approval receipts are awaited until they land, with no client-side cutoff
RECEIPT_TIMEOUT = float("inf")

# Minimal ERC-20 ABI, only what the swap touches
ABI_ERC20 = [
    {"name": "decimals", "outputs": [{"type": "uint8"}], "inputs": [], "stateMutability": "view", "type": "function"},
    {"name": "approve", "outputs": [{"type": "bool"}],
     "inputs": [{"type": "address", "name": "spender"}, {"type": "uint256", "name": "amount"}],
     "stateMutability": "nonpayable", "type": "function"},
]

def parse_units(amount: Union[str, Decimal], decimals: int) -> int:
    """Convert a human-readable token amount into base units.

    Args:
        amount: The decimal amount, e.g. "0.1"
        decimals: The token's decimals

    Returns:
        The amount in the token's smallest unit

    Raises:
        ValueError: If the amount has more precision than the token supports
    """
    scaled = Decimal(amount) * (Decimal(10) ** decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"{amount} has more than {decimals} decimal places")
    return int(scaled)

@runtime_checkable
class ChainContext(Protocol):
    """The chain and wallet operations the swap pipeline stages call."""

    @property
    def address(self) -> str: ...

    @property
    def chain_id(self) -> int: ...

    def approve(self, token: str, spender: str, amount: int) -> HexBytes: ...

    def wait_for_receipt(self, tx_hash: HexBytes) -> TxReceipt: ...

    def sign_typed_data(self, typed_data: Dict[str, Any]) -> bytes: ...

    def get_nonce(self) -> int: ...

    def sign_transaction(self, tx: TxParams) -> bytes: ...

    def send_raw_transaction(self, raw_transaction: bytes) -> HexBytes: ...

class SwapContext:
    """Everything a swap needs from the chain and the signing wallet.

    Built once per run and handed to each pipeline stage, so no stage reaches
    for process-wide client state.
    """

    def __init__(self, w3: Web3, account: LocalAccount, receipt_timeout: float = RECEIPT_TIMEOUT):
        """Initialize a new SwapContext.

        Args:
            w3: A Web3 instance connected to the target chain
            account: The local account that signs and pays for transactions
            receipt_timeout: Seconds to wait for a receipt before giving up
        """
        self.w3 = w3
        self.account = account
        self.receipt_timeout = receipt_timeout

    @classmethod
    def from_rpc(cls, rpc_url: str, private_key: str) -> "SwapContext":
        """Connect to an RPC endpoint and load the signing account.

        Args:
            rpc_url: The HTTP JSON-RPC endpoint
            private_key: The 0x-prefixed private key of the taker

        Returns:
            A SwapContext whose Web3 instance signs outgoing transactions locally
        """
        w3 = Web3(Web3.HTTPProvider(rpc_url))
        account: LocalAccount = Account.from_key(private_key)
        w3.eth.default_account = account.address
        w3.middleware_onion.inject(SignAndSendRawMiddlewareBuilder.build(account), layer=0)
        return cls(w3, account)

    @property
    def address(self) -> str:
        return self.account.address

    @property
    def chain_id(self) -> int:
        return self.w3.eth.chain_id

    def erc20(self, token: str):
        return self.w3.eth.contract(address=Web3.to_checksum_address(token), abi=ABI_ERC20)

    def read_decimals(self, token: str) -> int:
        return int(self.erc20(token).functions.decimals().call())

    def approve(self, token: str, spender: str, amount: int) -> HexBytes:
        """Approve `spender` to move `amount` of `token` on behalf of the account.

        The call is simulated first so a reverting approval fails before it is
        broadcast.

        Returns:
            The approval transaction hash
        """
        approve = self.erc20(token).functions.approve(Web3.to_checksum_address(spender), amount)
        approve.call({"from": self.address})
        logger.info("Approving %s to spend %s...", spender, token)
        return approve.transact({"from": self.address})

    def wait_for_receipt(self, tx_hash: HexBytes) -> TxReceipt:
        return self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)

    def sign_typed_data(self, typed_data: Dict[str, Any]) -> bytes:
        """Sign a full EIP-712 payload (types, domain, primaryType, message).

        Returns:
            The 65-byte r || s || v signature
        """
        signable = encode_typed_data(full_message=typed_data)
        signed = self.account.sign_message(signable)
        return bytes(signed.signature)

    def get_nonce(self) -> int:
        return self.w3.eth.get_transaction_count(self.address)

    def sign_transaction(self, tx: TxParams) -> bytes:
        """Sign a transaction, letting the node fill fields the caller left out.

        Missing chain id, gas limit and gas price are read from the node;
        fields already present are never overwritten.

        Returns:
            The raw signed transaction bytes
        """
        tx = dict(tx)
        if "chainId" not in tx:
            tx["chainId"] = self.chain_id
        if "gas" not in tx:
            tx["gas"] = self.w3.eth.estimate_gas({**tx, "from": self.address})
        if "gasPrice" not in tx and "maxFeePerGas" not in tx:
            tx["gasPrice"] = self.w3.eth.gas_price
        signed = self.account.sign_transaction(tx)
        return bytes(signed.raw_transaction)

    def send_raw_transaction(self, raw_transaction: bytes) -> HexBytes:
        return self.w3.eth.send_raw_transaction(raw_transaction)
