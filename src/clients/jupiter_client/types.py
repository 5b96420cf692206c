"""Jupiter API Type Definitions"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from .fields import (
    F64Str,
    InstructionField,
    OptionalInstruction,
    OptionalPubkey,
    PubkeyField,
    U64Str,
    serialize_prioritization_fee,
)
from .utils import format_query_params

T = TypeVar("T")


class JupiterModel(BaseModel):
    """Base model mapping snake_case attributes to camelCase JSON keys"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Response(JupiterModel, Generic[T]):
    """Generic response with timing information"""
    data: T
    time_taken: float


class Price(JupiterModel):
    id: PubkeyField
    mint_symbol: str
    vs_token: PubkeyField
    vs_token_symbol: str
    price: float


class SwapMode(str, Enum):
    EXACT_IN = "ExactIn"
    EXACT_OUT = "ExactOut"


class PriorityLevel(str, Enum):
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "veryHigh"


@dataclass(frozen=True)
class PrioritizationFeeLamports:
    """Prioritization fee setting sent with a swap request

    Build one with the classmethods; ``auto()`` lets Jupiter pick the fee.
    """
    kind: str = "auto"
    lamports: Optional[int] = None
    multiplier: Optional[int] = None
    priority_level: Optional[PriorityLevel] = None
    max_lamports: Optional[int] = None

    @classmethod
    def auto(cls) -> "PrioritizationFeeLamports":
        return cls()

    @classmethod
    def exact(cls, lamports: int) -> "PrioritizationFeeLamports":
        return cls(kind="exact", lamports=lamports)

    @classmethod
    def auto_multiplier(cls, multiplier: int) -> "PrioritizationFeeLamports":
        return cls(kind="autoMultiplier", multiplier=multiplier)

    @classmethod
    def jito_tip_lamports(cls, lamports: int) -> "PrioritizationFeeLamports":
        return cls(kind="jitoTipLamports", lamports=lamports)

    @classmethod
    def priority_level_with_max_lamports(
        cls,
        priority_level: PriorityLevel,
        max_lamports: int
    ) -> "PrioritizationFeeLamports":
        return cls(
            kind="priorityLevelWithMaxLamports",
            priority_level=PriorityLevel(priority_level),
            max_lamports=max_lamports,
        )

    def to_json(self):
        return serialize_prioritization_fee(self)


PrioritizationFeeField = Annotated[
    PrioritizationFeeLamports,
    PlainSerializer(serialize_prioritization_fee),
]


class QuoteConfig(JupiterModel):
    """Optional quote parameters"""
    slippage_bps: Optional[int] = None
    swap_mode: Optional[SwapMode] = None
    dexes: Optional[List[str]] = None
    exclude_dexes: Optional[List[str]] = None
    only_direct_routes: bool = False
    as_legacy_transaction: Optional[bool] = None
    platform_fee_bps: Optional[int] = None
    max_accounts: Optional[int] = None

    def to_query_params(self) -> Dict[str, str]:
        return format_query_params({
            to_camel(name): getattr(self, name) for name in type(self).model_fields
        })


class PlatformFee(JupiterModel):
    amount: U64Str
    fee_bps: int


class SwapInfo(JupiterModel):
    amm_key: PubkeyField
    label: Optional[str] = None
    input_mint: PubkeyField
    output_mint: PubkeyField
    in_amount: U64Str
    out_amount: U64Str
    fee_amount: U64Str
    fee_mint: PubkeyField


class RoutePlan(JupiterModel):
    percent: int
    swap_info: SwapInfo


class QuoteResponse(JupiterModel):
    input_mint: PubkeyField
    in_amount: U64Str
    output_mint: PubkeyField
    out_amount: U64Str
    other_amount_threshold: U64Str
    swap_mode: SwapMode
    slippage_bps: int
    platform_fee: Optional[PlatformFee] = None
    price_impact_pct: F64Str
    route_plan: List[RoutePlan]
    context_slot: Optional[int] = None
    time_taken: Optional[float] = None


class SwapRequest(JupiterModel):
    """Body of the /swap and /swap-instructions requests"""
    user_public_key: PubkeyField
    wrap_and_unwrap_sol: bool = True
    use_shared_accounts: bool = True
    fee_account: OptionalPubkey = None
    compute_unit_price_micro_lamports: Optional[int] = None
    prioritization_fee_lamports: PrioritizationFeeField = Field(
        default_factory=PrioritizationFeeLamports.auto
    )
    as_legacy_transaction: bool = False
    use_token_ledger: bool = False
    destination_token_account: OptionalPubkey = None
    dynamic_compute_unit_limit: bool = False
    skip_user_accounts_rpc_calls: bool = False
    quote_response: QuoteResponse


class Swap(JupiterModel):
    """Unsigned swap transaction, to be signed and sent by the caller"""
    swap_transaction: VersionedTransaction
    last_valid_block_height: int


class SwapInstructions(JupiterModel):
    token_ledger_instruction: OptionalInstruction = None
    compute_budget_instructions: List[InstructionField]
    setup_instructions: List[InstructionField]
    swap_instruction: InstructionField
    cleanup_instruction: OptionalInstruction = None
    address_lookup_table_addresses: List[PubkeyField]


# Input mint to the output mints reachable from it
RouteMap = Dict[Pubkey, List[Pubkey]]
