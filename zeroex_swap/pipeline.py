"""The price → allowance → quote → permit → submit swap pipeline.

Each stage takes the chain context explicitly and hands its output to the next
one; no stage re-enters an earlier one.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
from hexbytes import HexBytes
from web3 import Web3
from .chain import MAX_UINT256, ChainContext
from .client import SwapRequest, ZeroExClient
from .display import report_quote
from .permit import append_signature, sign_permit
from .types import PriceResponse, QuoteResponse, QuoteTransaction

logger = logging.getLogger(__name__)

class SwapPipelineError(Exception):
    """The pipeline reached a state from which the swap cannot be submitted"""

class ApprovalFailurePolicy(str, Enum):
    # Log the failure and keep going; the swap may then revert on-chain for
    # lack of allowance
    SOFT_FAIL = "soft_fail"
    ABORT = "abort"

@dataclass
class SwapResult:
    price: PriceResponse
    quote: QuoteResponse
    approval_receipt: Optional[Any] = None
    signature: Optional[bytes] = None
    tx_hash: Optional[HexBytes] = None

    @property
    def submitted(self) -> bool:
        return self.tx_hash is not None

def fetch_price(client: ZeroExClient, request: SwapRequest) -> PriceResponse:
    price = client.get_price(request)
    logger.info("priceResponse: %s", price.model_dump(by_alias=True))
    return price

def resolve_allowance(
    context: ChainContext,
    sell_token: str,
    price: PriceResponse,
    policy: ApprovalFailurePolicy = ApprovalFailurePolicy.SOFT_FAIL,
) -> Optional[Any]:
    """Approve the quoted spender for an unlimited amount if the price asks for it.

    Args:
        context: The chain context
        sell_token: The token being sold
        price: The price response whose `issues.allowance` drives the decision
        policy: What to do when the approval fails

    Returns:
        The approval receipt, or None if no approval was needed or it failed
    """
    allowance = price.allowance_issue
    if allowance is None:
        logger.info("%s already approved for Permit2", sell_token)
        return None

    try:
        tx_hash = context.approve(sell_token, allowance.spender, MAX_UINT256)
        receipt = context.wait_for_receipt(tx_hash)
    except Exception:
        if policy is ApprovalFailurePolicy.ABORT:
            raise
        logger.exception("Error approving Permit2")
        return None

    logger.info("Approved %s to spend %s: %s", allowance.spender, sell_token, receipt)
    return receipt

def fetch_quote(client: ZeroExClient, request: SwapRequest) -> QuoteResponse:
    quote = client.get_quote(request)
    logger.info("quoteResponse: %s", quote.model_dump(by_alias=True))
    report_quote(quote)
    return quote

def sign_and_assemble(context: ChainContext, quote: QuoteResponse) -> Optional[bytes]:
    """Sign the quote's permit and append the signature to its calldata.

    Leaves the quote untouched when it carries no permit message.

    Returns:
        The permit signature, or None if the quote had no permit

    Raises:
        SwapPipelineError: If a permit was present but the signature or the
            transaction data is missing
    """
    if not quote.permit_message:
        return None

    signature = sign_permit(context, quote)
    if not signature or not quote.transaction.data:
        raise SwapPipelineError("Failed to obtain signature or transaction data")

    quote.transaction.data = append_signature(quote.transaction.data, signature)
    return signature

def build_transaction(transaction: QuoteTransaction, nonce: int, chain_id: int) -> Dict[str, Any]:
    """Build the transaction request from the quote's transaction fields.

    Optional numeric fields are only set when the quote provides them, so the
    node can fill in its own estimates.
    """
    if not transaction.to:
        raise SwapPipelineError("Quote transaction has no target address")

    tx: Dict[str, Any] = {
        "to": Web3.to_checksum_address(transaction.to),
        "data": transaction.data,
        "nonce": nonce,
        "chainId": chain_id,
    }
    if transaction.gas:
        tx["gas"] = int(transaction.gas)
    # Only non-zero for native token sells
    if transaction.value:
        tx["value"] = int(transaction.value)
    if transaction.gas_price:
        tx["gasPrice"] = int(transaction.gas_price)
    return tx

def submit_transaction(context: ChainContext, quote: QuoteResponse, signature: Optional[bytes]) -> Optional[HexBytes]:
    """Sign and broadcast the quote's transaction.

    Returns:
        The transaction hash, or None if there was nothing signed to submit
    """
    if not signature or not quote.transaction.data:
        logger.error("Failed to obtain a signature, transaction not sent.")
        return None

    nonce = context.get_nonce()
    tx = build_transaction(quote.transaction, nonce, context.chain_id)
    signed_transaction = context.sign_transaction(tx)
    tx_hash = context.send_raw_transaction(signed_transaction)

    logger.info("Transaction hash: %s", Web3.to_hex(tx_hash))
    return tx_hash

def run_swap(
    context: ChainContext,
    client: ZeroExClient,
    request: SwapRequest,
    approval_policy: ApprovalFailurePolicy = ApprovalFailurePolicy.SOFT_FAIL,
) -> SwapResult:
    """Run the full swap once, from price inquiry to broadcast.

    Args:
        context: The chain context used for approvals, signing and submission
        client: The 0x API client
        request: The swap parameters, reused verbatim for price and quote
        approval_policy: What to do when the allowance approval fails

    Returns:
        Everything the run produced

    Raises:
        SwapPipelineError: If a permit could not be signed into the calldata
    """
    price = fetch_price(client, request)
    receipt = resolve_allowance(context, request.sell_token, price, approval_policy)
    quote = fetch_quote(client, request)
    signature = sign_and_assemble(context, quote)
    tx_hash = submit_transaction(context, quote, signature)
    return SwapResult(
        price=price,
        quote=quote,
        approval_receipt=receipt,
        signature=signature,
        tx_hash=tx_hash,
    )
