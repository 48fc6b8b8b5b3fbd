from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any, List

class BaseModelWithConfig(BaseModel):
    """Base model with common configuration"""
    model_config = ConfigDict(populate_by_name=True)

    def model_dump(self, **kwargs) -> Dict[str, Any]:
        data = super().model_dump(**kwargs)
        return self._remove_none_recursive(data)

    def _remove_none_recursive(self, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                k: self._remove_none_recursive(v)
                for k, v in data.items()
                if v is not None
            }
        elif isinstance(data, list):
            return [self._remove_none_recursive(item) for item in data]
        return data

class AllowanceIssue(BaseModelWithConfig):
    actual: str
    spender: str

class BalanceIssue(BaseModelWithConfig):
    token: str
    actual: str
    expected: str

class Issues(BaseModelWithConfig):
    # Present only when the taker has not approved the spender for enough
    # of the sell token
    allowance: Optional[AllowanceIssue] = None
    balance: Optional[BalanceIssue] = None
    simulation_incomplete: bool = Field(alias="simulationIncomplete", default=False)
    invalid_sources_passed: List[str] = Field(alias="invalidSourcesPassed", default_factory=list)

class Fill(BaseModelWithConfig):
    source: str
    proportion_bps: int = Field(alias="proportionBps")
    from_token: Optional[str] = Field(alias="from", default=None)
    to_token: Optional[str] = Field(alias="to", default=None)

class RouteToken(BaseModelWithConfig):
    address: str
    symbol: Optional[str] = None

class Route(BaseModelWithConfig):
    fills: List[Fill] = Field(default_factory=list)
    tokens: List[RouteToken] = Field(default_factory=list)

class TokenTaxes(BaseModelWithConfig):
    buy_tax_bps: Optional[int] = Field(alias="buyTaxBps", default=None)
    sell_tax_bps: Optional[int] = Field(alias="sellTaxBps", default=None)

class TokenMetadata(BaseModelWithConfig):
    buy_token: TokenTaxes = Field(alias="buyToken")
    sell_token: TokenTaxes = Field(alias="sellToken")

class PriceResponse(BaseModelWithConfig):
    """An indicative price, used for display and for the allowance decision"""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    liquidity_available: bool = Field(alias="liquidityAvailable", default=True)
    buy_amount: Optional[str] = Field(alias="buyAmount", default=None)
    sell_amount: Optional[str] = Field(alias="sellAmount", default=None)
    issues: Optional[Issues] = None
    route: Optional[Route] = None
    token_metadata: Optional[TokenMetadata] = Field(alias="tokenMetadata", default=None)
    buy_token_percentage_fee: Optional[str] = Field(alias="buyTokenPercentageFee", default=None)

    @property
    def allowance_issue(self) -> Optional[AllowanceIssue]:
        return self.issues.allowance if self.issues else None

class QuoteTransaction(BaseModelWithConfig):
    to: Optional[str] = None
    data: Optional[str] = None
    value: Optional[str] = None
    gas: Optional[str] = None
    gas_price: Optional[str] = Field(alias="gasPrice", default=None)

class Permit2(BaseModelWithConfig):
    type: Optional[str] = None
    hash: Optional[str] = None
    # Full EIP-712 typed-data payload, passed to the signer untouched
    eip712: Optional[Dict[str, Any]] = None

class QuoteResponse(PriceResponse):
    """A firm quote binding a concrete transaction

    `transaction.data` is rewritten in place once the permit signature has
    been appended
    """
    transaction: QuoteTransaction = Field(default_factory=QuoteTransaction)
    permit2: Optional[Permit2] = None

    @property
    def permit_message(self) -> Optional[Dict[str, Any]]:
        return self.permit2.eip712 if self.permit2 else None

class LiquiditySource(BaseModelWithConfig):
    name: str

class SourcesResponse(BaseModelWithConfig):
    sources: List[LiquiditySource] = Field(default_factory=list)
