"""Bindings for the legacy v1 quote API

v1 predates the route plan format: quotes carry ``marketInfos`` with plain
integer amounts, and swaps come back as up to three legacy transactions
(setup, swap, cleanup).
"""

import logging
from typing import List, Optional

from solders.pubkey import Pubkey
from solders.transaction import Transaction

from .exceptions import ResponseDecodeError
from .fields import U64, PubkeyField, decode_legacy_transaction, decode_optional_legacy_transaction
from .operations import BaseOperations
from .types import JupiterModel, Response, RouteMap
from .utils import parse_model

logger = logging.getLogger(__name__)


class LegacyPrice(JupiterModel):
    input_mint: PubkeyField
    input_symbol: str
    output_mint: PubkeyField
    output_symbol: str
    amount: U64
    price: float


class FeeInfo(JupiterModel):
    amount: U64
    mint: PubkeyField
    pct: float


class MarketInfo(JupiterModel):
    id: str
    label: str
    input_mint: PubkeyField
    output_mint: PubkeyField
    not_enough_liquidity: bool
    in_amount: U64
    out_amount: U64
    price_impact_pct: float
    lp_fee: FeeInfo
    platform_fee: FeeInfo


class LegacyQuote(JupiterModel):
    in_amount: U64
    out_amount: U64
    out_amount_with_slippage: U64
    price_impact_pct: float
    market_infos: List[MarketInfo]


class LegacySwap(JupiterModel):
    """Partially signed transactions required to execute a swap"""
    setup: Optional[Transaction] = None
    swap: Transaction
    cleanup: Optional[Transaction] = None


class LegacyOperations(BaseOperations):
    """Operations for the v1 quote API"""

    async def price(self, input_mint: Pubkey, output_mint: Pubkey, amount: float) -> Response[LegacyPrice]:
        payload = await self._get(
            "/price",
            {"inputMint": input_mint, "outputMint": output_mint, "amount": amount}
        )
        return parse_model(Response[LegacyPrice], payload)

    async def quote(
        self,
        input_mint: Pubkey,
        output_mint: Pubkey,
        amount: int,
        only_direct_routes: bool = False,
        slippage: Optional[float] = None,
        fees_bps: Optional[float] = None
    ) -> Response[List[LegacyQuote]]:
        payload = await self._get("/quote", {
            "inputMint": input_mint,
            "outputMint": output_mint,
            "amount": amount,
            "onlyDirectRoutes": only_direct_routes,
            "slippage": slippage,
            "feesBps": fees_bps,
        })
        quotes = parse_model(Response[List[LegacyQuote]], payload)
        logger.info(f"Received {len(quotes.data)} legacy quotes for {input_mint} -> {output_mint}")
        return quotes

    async def swap(
        self,
        quote: LegacyQuote,
        user_public_key: Pubkey,
        wrap_unwrap_sol: bool = True,
        fee_account: Optional[Pubkey] = None,
        token_ledger: Optional[Pubkey] = None
    ) -> LegacySwap:
        """Get swap serialized transactions for a quote"""
        body = {
            "quote": quote.model_dump(mode="json", by_alias=True),
            "wrapUnwrapSOL": wrap_unwrap_sol,
            "feeAccount": str(fee_account) if fee_account is not None else None,
            "tokenLedger": str(token_ledger) if token_ledger is not None else None,
            "userPublicKey": str(user_public_key),
        }
        payload = await self._post("/swap", body)
        if not isinstance(payload, dict) or "swapTransaction" not in payload:
            raise ResponseDecodeError("Swap response missing swapTransaction")

        return LegacySwap(
            setup=decode_optional_legacy_transaction(payload.get("setupTransaction")),
            swap=decode_legacy_transaction(payload["swapTransaction"]),
            cleanup=decode_optional_legacy_transaction(payload.get("cleanupTransaction")),
        )

    async def route_map(self, only_direct_routes: bool = False) -> RouteMap:
        return await self._route_map(only_direct_routes)
