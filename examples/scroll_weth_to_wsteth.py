"""Example of swapping 0.1 wETH for wstETH on Scroll through the 0x Permit2 flow."""

import logging
from web3 import Web3
from zeroex_swap import SwapRequest, parse_units, run_swap
from zeroex_swap.display import format_liquidity_source_names
from examples.helpers import (
    SCROLL_CHAIN_ID, SCROLL_CHAIN_NAME, SCROLLSCAN_TX_URL, WETH, WSTETH,
    get_settings, get_context_and_client
)

SELL_AMOUNT = "0.1"
AFFILIATE_FEE = "0.01"  # 1%

def swap_weth_for_wsteth() -> None:
    """Price, approve, quote, sign and submit the swap."""
    # Fail on missing secrets before touching the network
    settings = get_settings()
    context, client = get_context_and_client(settings)

    try:
        # List every liquidity source on the chain
        sources = client.get_liquidity_sources(SCROLL_CHAIN_ID)
        print("\n".join(format_liquidity_source_names(SCROLL_CHAIN_NAME, sources)))

        # Affiliate fee and surplus both go to the taker
        decimals = context.read_decimals(WETH)
        request = SwapRequest(
            chain_id=SCROLL_CHAIN_ID,
            sell_token=WETH,
            buy_token=WSTETH,
            sell_amount=parse_units(SELL_AMOUNT, decimals),
            taker=context.address,
        ).with_affiliate_fee(context.address, AFFILIATE_FEE).with_fee_recipient(context.address)

        print(f"Swapping {SELL_AMOUNT} wETH for wstETH...")
        result = run_swap(context, client, request)
        if result.submitted:
            tx_hash = Web3.to_hex(result.tx_hash)
            print(f"Transaction submitted: {tx_hash}")
            print(f"See tx details at {SCROLLSCAN_TX_URL}{tx_hash}")
    finally:
        client.close()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    swap_weth_for_wsteth()
