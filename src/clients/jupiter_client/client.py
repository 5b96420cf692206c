from typing import Dict, List, Optional
import aiohttp
import logging

from solders.pubkey import Pubkey

from .config import LEGACY_QUOTE_API_URL, PRICE_API_URL, QUOTE_API_URL, REQUEST_TIMEOUT
from .exceptions import JupiterConnectionError
from .legacy import LegacyOperations
from .operations import JupiterOperations
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

logger = logging.getLogger(__name__)

class JupiterClient:
    """Client for the Jupiter swap aggregator API"""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        quote_api_url: str = QUOTE_API_URL,
        price_api_url: str = PRICE_API_URL,
        legacy_api_url: str = LEGACY_QUOTE_API_URL,
        timeout: float = REQUEST_TIMEOUT
    ):
        self.session = session
        self.timeout = timeout
        self.owns_session = session is None
        self.initialized = session is not None
        self.operations = JupiterOperations(self, quote_api_url, price_api_url)
        self.legacy = LegacyOperations(self, legacy_api_url)

    async def initialize(self) -> None:
        """Create the HTTP session"""
        if self.initialized:
            return

        try:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self.owns_session = True
            self.initialized = True
            logger.info("Client initialized successfully")
        except Exception as e:
            await self.close()
            raise JupiterConnectionError(f"Failed to initialize client: {e}") from e

    async def ensure_initialized(self) -> None:
        """Ensure client is initialized before operations"""
        if not self.initialized:
            await self.initialize()

    async def close(self) -> None:
        """Close client session and cleanup"""
        if self.session and self.owns_session:
            await self.session.close()
        self.session = None
        self.initialized = False

    async def __aenter__(self) -> "JupiterClient":
        await self.ensure_initialized()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def price(
        self,
        input_mint: Pubkey,
        output_mint: Optional[Pubkey] = None,
        ui_amount: Optional[float] = None
    ) -> Response[Price]:
        """Get simple price for a given input mint, output mint and amount"""
        return await self.operations.price(input_mint, output_mint, ui_amount)

    async def quote(
        self,
        input_mint: Pubkey,
        output_mint: Pubkey,
        amount: int,
        config: Optional[QuoteConfig] = None
    ) -> QuoteResponse:
        """Get the best route quote for swapping `amount` base units"""
        return await self.operations.quote(input_mint, output_mint, amount, config)

    async def swap(self, swap_request: SwapRequest) -> Swap:
        """Get the unsigned swap transaction for a quote"""
        return await self.operations.swap(swap_request)

    async def swap_instructions(self, swap_request: SwapRequest) -> SwapInstructions:
        """Get the individual swap instructions for a quote"""
        return await self.operations.swap_instructions(swap_request)

    async def route_map(self, only_direct_routes: bool = False) -> RouteMap:
        """
        Get all possible swap routes
        Returns a map of input mint to an array of valid output mints
        """
        return await self.operations.route_map(only_direct_routes)

    async def tokens(self) -> List[Pubkey]:
        """Get the mints of all tradable tokens"""
        return await self.operations.tokens()

    async def program_id_to_label(self) -> Dict[str, str]:
        """Get the DEX label for each program id"""
        return await self.operations.program_id_to_label()
