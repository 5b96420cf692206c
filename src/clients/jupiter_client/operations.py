import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import aiohttp
from solders.pubkey import Pubkey

from .exceptions import (
    InvalidPubkeyError,
    JupiterApiError,
    JupiterConnectionError,
    ResponseDecodeError,
)
from .fields import decode_versioned_transaction, parse_pubkeys
from .types import (
    Price,
    QuoteConfig,
    QuoteResponse,
    Response,
    RouteMap,
    Swap,
    SwapInstructions,
    SwapRequest,
)
from .utils import check_api_error, expand_indexed_route_map, format_query_params, parse_model

logger = logging.getLogger(__name__)

class BaseOperations:
    """Shared request handling for one API binding"""

    def __init__(self, client, base_url: str):
        self.client = client
        self.base_url = base_url.rstrip("/")

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        body: Optional[Dict[str, Any]] = None,
        base_url: Optional[str] = None
    ) -> Any:
        """Issue one request and return the decoded JSON payload"""
        await self.client.ensure_initialized()
        url = f"{base_url or self.base_url}{path}"
        logger.debug(f"{method} {url} params={params}")
        if body is not None:
            logger.debug(f"Request body: {json.dumps(body)}")

        try:
            async with self.client.session.request(method, url, params=params, json=body) as response:
                status = response.status
                raw = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Request to {url} failed: {e!r}")
            raise JupiterConnectionError(f"Request to {url} failed: {e!r}") from e

        logger.debug(f"Response {status}: {raw[:500]!r}")

        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            preview = raw[:200].decode("utf-8", errors="replace")
            logger.error(f"Invalid JSON from {url} (status {status}): {preview}")
            if status >= 400:
                raise JupiterApiError(preview or "empty response body", status) from e
            raise ResponseDecodeError(f"Invalid JSON from {url} (status {status}): {e}") from e

        check_api_error(payload, status)
        return payload

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return await self._request("GET", path, params=format_query_params(params or {}), **kwargs)

    async def _post(self, path: str, body: Dict[str, Any], **kwargs) -> Any:
        return await self._request("POST", path, body=body, **kwargs)

    async def _route_map(self, only_direct_routes: bool) -> RouteMap:
        payload = await self._get(
            "/indexed-route-map",
            {"onlyDirectRoutes": only_direct_routes}
        )
        if (
            not isinstance(payload, dict)
            or not isinstance(payload.get("mintKeys"), list)
            or not isinstance(payload.get("indexedRouteMap"), dict)
        ):
            raise ResponseDecodeError("Route map response missing mintKeys or indexedRouteMap")
        route_map = expand_indexed_route_map(payload["mintKeys"], payload["indexedRouteMap"])
        logger.info(f"Loaded route map with {len(route_map)} input mints")
        return route_map


class JupiterOperations(BaseOperations):
    """Operations for the current Jupiter quote and price APIs"""

    def __init__(self, client, quote_api_url: str, price_api_url: str):
        super().__init__(client, quote_api_url)
        self.price_api_url = price_api_url.rstrip("/")

    async def price(
        self,
        input_mint: Pubkey,
        output_mint: Optional[Pubkey] = None,
        ui_amount: Optional[float] = None
    ) -> Response[Price]:
        """Get simple price for a given input mint, output mint and amount"""
        payload = await self._get(
            "/price",
            {"id": input_mint, "vsToken": output_mint, "amount": ui_amount},
            base_url=self.price_api_url,
        )
        return parse_model(Response[Price], payload)

    async def quote(
        self,
        input_mint: Pubkey,
        output_mint: Pubkey,
        amount: int,
        config: Optional[QuoteConfig] = None
    ) -> QuoteResponse:
        """Get quote for a given input mint, output mint and amount"""
        config = config or QuoteConfig()
        params = {
            "inputMint": str(input_mint),
            "outputMint": str(output_mint),
            "amount": str(amount),
        }
        params.update(config.to_query_params())
        payload = await self._get("/quote", params)
        quote = parse_model(QuoteResponse, payload)
        logger.info(
            f"Quote {input_mint} -> {output_mint}: {quote.in_amount} in, "
            f"{quote.out_amount} out over {len(quote.route_plan)} legs"
        )
        return quote

    async def swap(self, swap_request: SwapRequest) -> Swap:
        """Get the unsigned swap transaction for a quote"""
        payload = await self._post("/swap", swap_request.to_json_dict())
        if not isinstance(payload, dict) or "swapTransaction" not in payload:
            raise ResponseDecodeError("Swap response missing swapTransaction")
        return parse_model(Swap, {
            "swapTransaction": decode_versioned_transaction(payload["swapTransaction"]),
            "lastValidBlockHeight": payload.get("lastValidBlockHeight"),
        })

    async def swap_instructions(self, swap_request: SwapRequest) -> SwapInstructions:
        """Get the individual instructions that make up a swap"""
        payload = await self._post("/swap-instructions", swap_request.to_json_dict())
        return parse_model(SwapInstructions, payload)

    async def route_map(self, only_direct_routes: bool = False) -> RouteMap:
        """Returns a map of input mint to the output mints it can be swapped into"""
        return await self._route_map(only_direct_routes)

    async def tokens(self) -> List[Pubkey]:
        """Mints of all tradable tokens"""
        payload = await self._get("/tokens")
        try:
            return parse_pubkeys(payload)
        except InvalidPubkeyError:
            raise
        except ValueError as e:
            raise ResponseDecodeError(f"Failed to decode token list: {e}") from e

    async def program_id_to_label(self) -> Dict[str, str]:
        """Map of DEX program ids to their labels"""
        payload = await self._get("/program-id-to-label")
        if not isinstance(payload, dict):
            raise ResponseDecodeError("Expected program id to label mapping")
        return {str(program_id): str(label) for program_id, label in payload.items()}
