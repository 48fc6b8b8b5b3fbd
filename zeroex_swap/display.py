"""Human-readable reporting of price and quote responses."""

import logging
from decimal import Decimal
from typing import List, Optional
from .types import PriceResponse, Route, TokenMetadata, TokenTaxes

logger = logging.getLogger(__name__)

def format_bps(bps: Optional[int]) -> str:
    """Render basis points as a percentage with two decimals, without the sign"""
    return f"{Decimal(bps or 0) / 100:.2f}"

def format_liquidity_sources(route: Route) -> List[str]:
    lines = [f"{len(route.fills)} Sources"]
    for fill in route.fills:
        lines.append(f"{fill.source}: {format_bps(fill.proportion_bps)}%")
    return lines

def _has_tax(taxes: TokenTaxes) -> bool:
    return bool(taxes.buy_tax_bps) or bool(taxes.sell_tax_bps)

def format_token_taxes(token_metadata: TokenMetadata) -> List[str]:
    """Tax lines for each side of the swap, skipping tokens that are untaxed"""
    lines = []
    for label, taxes in (("Buy Token", token_metadata.buy_token), ("Sell Token", token_metadata.sell_token)):
        if _has_tax(taxes):
            lines.append(f"{label} Buy Tax: {format_bps(taxes.buy_tax_bps)}%")
            lines.append(f"{label} Sell Tax: {format_bps(taxes.sell_tax_bps)}%")
    return lines

def format_affiliate_fee(buy_token_percentage_fee: str) -> str:
    # The API expresses the fee as a fraction, e.g. "0.01" for 1%
    return f"{Decimal(buy_token_percentage_fee) * 100:.2f}%"

def format_liquidity_source_names(chain_name: str, sources: List[str]) -> List[str]:
    return [f"Liquidity sources for {chain_name} chain:"] + [f"    {name}" for name in sources]

def report_quote(quote: PriceResponse) -> List[str]:
    """Log the routing, tax and monetization details of a price or quote.

    Returns:
        The lines that were logged
    """
    lines = []
    if quote.route:
        lines.extend(format_liquidity_sources(quote.route))
    if quote.token_metadata:
        lines.extend(format_token_taxes(quote.token_metadata))
    if quote.buy_token_percentage_fee:
        lines.append(f"Affiliate Fee: {format_affiliate_fee(quote.buy_token_percentage_fee)}")
    # Surplus is not reported back by the API; it is on whenever feeRecipient is sent
    lines.append("Surplus collection is enabled.")

    for line in lines:
        logger.info(line)
    return lines
