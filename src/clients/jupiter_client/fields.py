"""Field encoders and decoders for Jupiter wire formats

The API transports public keys as base58 strings, u64 amounts and some
floats as decimal strings, instruction data and transactions as base64.
Each helper here converts one such field and raises a ``ValueError``
subclass on bad input, so they can back pydantic validators directly.
"""

import base64
import binascii
import logging
from decimal import Decimal
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import BeforeValidator, GetCoreSchemaHandler, PlainSerializer
from pydantic_core import core_schema
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.transaction import Transaction, VersionedTransaction

from .exceptions import Base64DecodeError, InvalidPubkeyError, TransactionDecodeError

logger = logging.getLogger(__name__)

U64_MAX = 2 ** 64 - 1
ACCOUNT_META_FIELDS = {"pubkey", "isSigner", "isWritable"}


def parse_pubkey(value: Any) -> Pubkey:
    """Parse a base58 string into a Pubkey"""
    if isinstance(value, Pubkey):
        return value
    if not isinstance(value, str):
        raise InvalidPubkeyError(f"Expected pubkey string, got {type(value).__name__}")
    try:
        return Pubkey.from_string(value)
    except ValueError as e:
        raise InvalidPubkeyError(f"Invalid pubkey {value!r}: {e}") from e


def parse_pubkeys(values: Any) -> List[Pubkey]:
    if not isinstance(values, list):
        raise ValueError(f"Expected list of pubkeys, got {type(values).__name__}")
    return [parse_pubkey(value) for value in values]


def parse_u64(value: Any) -> int:
    """Parse an unsigned 64-bit integer sent as a number or decimal string"""
    if isinstance(value, bool):
        raise ValueError(f"Expected u64, got {value!r}")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.isascii() and value.isdigit():
        number = int(value)
    else:
        raise ValueError(f"Expected u64 string, got {value!r}")
    if not 0 <= number <= U64_MAX:
        raise ValueError(f"Value {number} out of range for u64")
    return number


class WireFloat(float):
    """Float that serializes back to the decimal string it was parsed from"""

    text: Optional[str] = None

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            parse_f64,
            serialization=core_schema.plain_serializer_function_ser_schema(
                format_f64, return_schema=core_schema.str_schema()
            ),
        )


def parse_f64(value: Any) -> WireFloat:
    if isinstance(value, WireFloat):
        return value
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError(f"Expected float string, got {value!r}")
    number = WireFloat(value)
    if isinstance(value, str):
        number.text = value
    return number


def format_f64(value: float) -> str:
    """Decimal string for a float, never in exponent notation"""
    text = getattr(value, "text", None)
    if text is not None:
        return text
    rendered = repr(float(value))
    if "e" in rendered or "E" in rendered:
        rendered = format(Decimal(rendered), "f")
    return rendered


def decode_base64(value: Any, field: str = "data") -> bytes:
    if not isinstance(value, str):
        raise Base64DecodeError(f"Expected base64 string for {field}, got {type(value).__name__}")
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as e:
        raise Base64DecodeError(f"Error decoding {field}: {e}") from e


def decode_instruction(value: Any) -> Instruction:
    """Decode a JSON instruction with base64 data and string pubkeys"""
    if isinstance(value, Instruction):
        return value
    if not isinstance(value, dict):
        raise ValueError(f"Expected instruction object, got {type(value).__name__}")

    missing = [key for key in ("programId", "accounts", "data") if key not in value]
    if missing:
        raise ValueError(f"Instruction missing fields: {', '.join(missing)}")

    try:
        program_id = parse_pubkey(value["programId"])
    except InvalidPubkeyError as e:
        raise InvalidPubkeyError(f"Error parsing programId: {e}") from e

    if not isinstance(value["accounts"], list):
        raise ValueError("Instruction accounts must be a list")

    accounts = []
    for account in value["accounts"]:
        if not isinstance(account, dict) or not ACCOUNT_META_FIELDS <= account.keys():
            raise ValueError(f"Malformed account meta: {account!r}")
        try:
            pubkey = parse_pubkey(account["pubkey"])
        except InvalidPubkeyError as e:
            raise InvalidPubkeyError(f"Error parsing pubkey: {e}") from e
        accounts.append(AccountMeta(
            pubkey=pubkey,
            is_signer=bool(account["isSigner"]),
            is_writable=bool(account["isWritable"]),
        ))

    data = decode_base64(value["data"], "instruction data")
    return Instruction(program_id, data, accounts)


def encode_instruction(instruction: Instruction) -> Dict[str, Any]:
    return {
        "programId": str(instruction.program_id),
        "accounts": [
            {
                "pubkey": str(account.pubkey),
                "isSigner": account.is_signer,
                "isWritable": account.is_writable,
            }
            for account in instruction.accounts
        ],
        "data": base64.b64encode(bytes(instruction.data)).decode('utf-8'),
    }


def decode_versioned_transaction(value: Any) -> VersionedTransaction:
    """Decode a base64 bincode-serialized versioned transaction"""
    raw = decode_base64(value, "transaction")
    try:
        return VersionedTransaction.from_bytes(raw)
    except ValueError as e:
        logger.error(f"Failed to deserialize versioned transaction ({len(raw)} bytes): {e}")
        raise TransactionDecodeError(f"bincode: {e}") from e


def decode_legacy_transaction(value: Any) -> Transaction:
    """Decode a base64 bincode-serialized legacy transaction"""
    raw = decode_base64(value, "transaction")
    try:
        return Transaction.from_bytes(raw)
    except ValueError as e:
        logger.error(f"Failed to deserialize legacy transaction ({len(raw)} bytes): {e}")
        raise TransactionDecodeError(f"bincode: {e}") from e


def decode_optional_legacy_transaction(value: Any) -> Optional[Transaction]:
    if value is None:
        return None
    return decode_legacy_transaction(value)


def serialize_prioritization_fee(fee) -> Union[str, int, Dict[str, Any]]:
    """Wire form of a PrioritizationFeeLamports value"""
    if fee.kind == "auto":
        return "auto"
    if fee.kind == "exact":
        return fee.lamports
    if fee.kind == "autoMultiplier":
        return {"autoMultiplier": fee.multiplier}
    if fee.kind == "jitoTipLamports":
        return {"jitoTipLamports": fee.lamports}
    if fee.kind == "priorityLevelWithMaxLamports":
        return {
            "priorityLevelWithMaxLamports": {
                "priorityLevel": fee.priority_level.value,
                "maxLamports": fee.max_lamports,
            }
        }
    raise ValueError(f"Unknown prioritization fee kind: {fee.kind}")


PubkeyField = Annotated[Pubkey, BeforeValidator(parse_pubkey), PlainSerializer(str, return_type=str)]
OptionalPubkey = Optional[PubkeyField]
U64Str = Annotated[int, BeforeValidator(parse_u64), PlainSerializer(str, return_type=str)]
U64 = Annotated[int, BeforeValidator(parse_u64)]
F64Str = WireFloat
InstructionField = Annotated[
    Instruction,
    BeforeValidator(decode_instruction),
    PlainSerializer(encode_instruction, return_type=dict),
]
OptionalInstruction = Optional[InstructionField]
