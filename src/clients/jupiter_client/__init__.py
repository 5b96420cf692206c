"""Jupiter Aggregator Client Package"""

import logging

from .client import JupiterClient
from .operations import JupiterOperations
from .legacy import (
    LegacyOperations,
    LegacyPrice,
    LegacyQuote,
    LegacySwap,
    MarketInfo,
    FeeInfo
)
from .types import (
    Response,
    Price,
    SwapMode,
    QuoteConfig,
    PlatformFee,
    SwapInfo,
    RoutePlan,
    QuoteResponse,
    PriorityLevel,
    PrioritizationFeeLamports,
    SwapRequest,
    Swap,
    SwapInstructions,
    RouteMap
)
from .exceptions import (
    JupiterError,
    JupiterConnectionError,
    ResponseDecodeError,
    JupiterApiError,
    InvalidPubkeyError,
    Base64DecodeError,
    TransactionDecodeError
)
from .utils import (
    ui_amount_to_amount,
    amount_to_ui_amount,
    format_route
)

logger = logging.getLogger(__name__)

__version__ = "0.1.0"

SUPPORTED_FEATURES = {
    "operations": [
        "price",
        "quote",
        "swap",
        "swap_instructions",
        "route_map",
        "tokens",
        "program_id_to_label"
    ],
    "api_versions": ["v6", "v1"]
}

__all__ = [
    "JupiterClient",
    "JupiterOperations",
    "LegacyOperations",
    "LegacyPrice",
    "LegacyQuote",
    "LegacySwap",
    "MarketInfo",
    "FeeInfo",
    "Response",
    "Price",
    "SwapMode",
    "QuoteConfig",
    "PlatformFee",
    "SwapInfo",
    "RoutePlan",
    "QuoteResponse",
    "PriorityLevel",
    "PrioritizationFeeLamports",
    "SwapRequest",
    "Swap",
    "SwapInstructions",
    "RouteMap",
    "JupiterError",
    "JupiterConnectionError",
    "ResponseDecodeError",
    "JupiterApiError",
    "InvalidPubkeyError",
    "Base64DecodeError",
    "TransactionDecodeError",
    "ui_amount_to_amount",
    "amount_to_ui_amount",
    "format_route",
    "SUPPORTED_FEATURES"
]
