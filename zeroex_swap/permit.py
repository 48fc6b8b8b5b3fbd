"""Permit2 signing and calldata assembly."""

import logging
from typing import Optional, Union
from hexbytes import HexBytes
from web3 import Web3
from .chain import ChainContext
from .types import QuoteResponse

logger = logging.getLogger(__name__)

SIGNATURE_LENGTH_PREFIX_BYTES = 32

def encode_signature_length(signature: bytes) -> bytes:
    """Encode a signature's byte length as an unsigned 32-byte big-endian word."""
    return len(signature).to_bytes(SIGNATURE_LENGTH_PREFIX_BYTES, "big", signed=False)

def append_signature(calldata: Union[str, bytes], signature: Union[str, bytes]) -> str:
    """Append a length-prefixed signature to transaction calldata.

    The settler contract reads the permit signature from the tail of its
    calldata, laid out as `calldata || uint256(len(signature)) || signature`.

    Args:
        calldata: The quote's transaction data, hex string or bytes
        signature: The permit signature, hex string or bytes

    Returns:
        The assembled calldata as a 0x-prefixed hex string
    """
    data_bytes = HexBytes(calldata)
    sig_bytes = HexBytes(signature)
    return Web3.to_hex(data_bytes + encode_signature_length(sig_bytes) + sig_bytes)

def sign_permit(context: ChainContext, quote: QuoteResponse) -> Optional[bytes]:
    """Sign the quote's Permit2 message, if it carries one.

    A failed signature is logged and reported as `None` so the caller can
    decide how to proceed.
    """
    typed_data = quote.permit_message
    if not typed_data:
        return None

    try:
        signature = context.sign_typed_data(typed_data)
    except Exception:
        logger.exception("Error signing permit2 message")
        return None

    logger.info("Signed permit2 message from quote response")
    return signature
