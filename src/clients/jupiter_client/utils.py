"""Jupiter Client Utility Functions"""

import logging
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from solders.pubkey import Pubkey

from .config import TOKEN_MAP
from .exceptions import JupiterApiError, JupiterError, ResponseDecodeError
from .fields import parse_pubkey

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def ui_amount_to_amount(ui_amount: float, decimals: int) -> int:
    """Convert a human-readable amount to base units"""
    return int(Decimal(str(ui_amount)) * (Decimal(10) ** decimals))

def amount_to_ui_amount(amount: int, decimals: int) -> float:
    """Convert base units to a human-readable amount"""
    return float(Decimal(amount) / (Decimal(10) ** decimals))

def get_token_by_symbol(symbol: str) -> Optional[Dict[str, Any]]:
    return TOKEN_MAP.get(symbol.upper())

def format_query_params(params: Mapping[str, Any]) -> Dict[str, str]:
    """Render query values the way the API expects them

    Booleans become lowercase strings, lists are comma-joined and None
    values are left out.
    """
    formatted = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            formatted[key] = "true" if value else "false"
        elif isinstance(value, Enum):
            formatted[key] = str(value.value)
        elif isinstance(value, (list, tuple)):
            formatted[key] = ",".join(str(item) for item in value)
        else:
            formatted[key] = str(value)
    return formatted

def check_api_error(payload: Any, status: int = 200) -> None:
    """Raise JupiterApiError if the payload is an API error"""
    if isinstance(payload, dict) and "error" in payload:
        error = payload["error"]
        message = error if isinstance(error, str) else str(error)
        raise JupiterApiError(message, status)
    if status >= 400:
        raise JupiterApiError(str(payload), status)

def expand_indexed_route_map(
    mint_keys: List[str],
    indexed_route_map: Mapping[Any, List[int]]
) -> Dict[Pubkey, List[Pubkey]]:
    """Expand an index-compressed route map into mint -> [mint]"""
    mints = [parse_pubkey(key) for key in mint_keys]

    def mint_at(index: Any) -> Pubkey:
        try:
            position = int(index)
        except (TypeError, ValueError) as e:
            raise ResponseDecodeError(f"Invalid route map index: {index!r}") from e
        if not 0 <= position < len(mints):
            raise ResponseDecodeError(
                f"Route map index {position} out of range for {len(mints)} mint keys"
            )
        return mints[position]

    route_map = {}
    for from_index, to_indices in indexed_route_map.items():
        if not isinstance(to_indices, list):
            raise ResponseDecodeError(f"Route map entry {from_index} is not a list of indices")
        route_map[mint_at(from_index)] = [mint_at(i) for i in to_indices]
    return route_map

def parse_model(model: Type[ModelT], payload: Any) -> ModelT:
    """Validate a payload into a model

    Field decoders raise JupiterError subclasses; the first one found is
    re-raised as is. Other mismatches become ResponseDecodeError.
    """
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        for error in e.errors():
            cause = (error.get("ctx") or {}).get("error")
            if isinstance(cause, JupiterError):
                location = ".".join(str(part) for part in error["loc"])
                logger.error(f"Invalid field {location} in {model.__name__}: {cause}")
                raise cause from e
        logger.error(f"Failed to decode {model.__name__}: {e}")
        raise ResponseDecodeError(f"Failed to decode {model.__name__}: {e}") from e

def format_route(quote: Any) -> str:
    """Comma-separated venue labels of a quote's route"""
    if hasattr(quote, "route_plan"):
        labels = [plan.swap_info.label or "Unknown DEX" for plan in quote.route_plan]
    else:
        labels = [market_info.label for market_info in quote.market_infos]
    return ", ".join(labels)
