import base64

import pytest
from solders.pubkey import Pubkey

from clients.jupiter_client.exceptions import (
    Base64DecodeError,
    InvalidPubkeyError,
    TransactionDecodeError,
)
from clients.jupiter_client.fields import (
    decode_instruction,
    decode_legacy_transaction,
    decode_versioned_transaction,
    encode_instruction,
    format_f64,
    parse_f64,
    parse_pubkey,
    parse_pubkeys,
    parse_u64,
)
from clients.jupiter_client.types import PrioritizationFeeLamports, PriorityLevel

from conftest import (
    SOL,
    TOKEN_PROGRAM,
    USDC,
    encode_legacy_transaction,
    encode_versioned_transaction,
    instruction_payload,
)


class TestPubkeyFields:

    def test_parse_pubkey(self):
        pubkey = parse_pubkey(SOL)
        assert isinstance(pubkey, Pubkey)
        assert str(pubkey) == SOL

    def test_parse_pubkey_passes_through_pubkey(self):
        pubkey = Pubkey.from_string(USDC)
        assert parse_pubkey(pubkey) is pubkey

    @pytest.mark.parametrize("value", ["not-a-pubkey", "", "0OIl", 42, None])
    def test_parse_pubkey_rejects_invalid(self, value):
        with pytest.raises(InvalidPubkeyError):
            parse_pubkey(value)

    def test_invalid_pubkey_is_value_error(self):
        with pytest.raises(ValueError):
            parse_pubkey("not-a-pubkey")

    def test_parse_pubkeys(self):
        assert [str(p) for p in parse_pubkeys([SOL, USDC])] == [SOL, USDC]

    def test_parse_pubkeys_stops_at_first_invalid(self):
        with pytest.raises(InvalidPubkeyError, match="bogus"):
            parse_pubkeys([SOL, "bogus!", "also-bad"])


class TestNumericFields:

    def test_u64_from_string(self):
        assert parse_u64("18446744073709551615") == 2 ** 64 - 1

    def test_u64_from_int(self):
        assert parse_u64(1000) == 1000

    @pytest.mark.parametrize("value", ["-1", "18446744073709551616", "1.5", "abc", "\u0661\u0662\u0663", "\u00b2", True, None, -3])
    def test_u64_rejects(self, value):
        with pytest.raises(ValueError):
            parse_u64(value)

    def test_f64_from_string(self):
        assert parse_f64("0.0012") == pytest.approx(0.0012)

    def test_f64_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_f64("lots")

    @pytest.mark.parametrize("text", ["0.00001", "0", "0.10", "12.5"])
    def test_f64_keeps_wire_text(self, text):
        assert format_f64(parse_f64(text)) == text

    @pytest.mark.parametrize("value, text", [(0.00001, "0.00001"), (0.0, "0.0"), (1e-07, "0.0000001")])
    def test_f64_never_uses_exponent(self, value, text):
        assert format_f64(value) == text


class TestInstructionField:

    def test_decode_instruction(self):
        instruction = decode_instruction(instruction_payload())

        assert str(instruction.program_id) == TOKEN_PROGRAM
        assert bytes(instruction.data) == b"\x01\x02\x03"
        assert len(instruction.accounts) == 2
        first, second = instruction.accounts
        assert str(first.pubkey) == SOL
        assert (first.is_signer, first.is_writable) == (False, True)
        assert (second.is_signer, second.is_writable) == (True, False)

    def test_encode_instruction_restores_wire_form(self):
        payload = instruction_payload()
        assert encode_instruction(decode_instruction(payload)) == payload

    def test_bad_program_id(self):
        payload = instruction_payload(program_id="nope!")
        with pytest.raises(InvalidPubkeyError, match="Error parsing programId"):
            decode_instruction(payload)

    def test_bad_account_pubkey(self):
        payload = instruction_payload()
        payload["accounts"][1]["pubkey"] = "nope!"
        with pytest.raises(InvalidPubkeyError, match="Error parsing pubkey"):
            decode_instruction(payload)

    def test_bad_data(self):
        payload = instruction_payload(data="not base64!")
        with pytest.raises(Base64DecodeError, match="Error decoding instruction data"):
            decode_instruction(payload)

    def test_missing_fields(self):
        with pytest.raises(ValueError, match="data"):
            decode_instruction({"programId": TOKEN_PROGRAM, "accounts": []})

    def test_malformed_account_meta(self):
        payload = instruction_payload()
        del payload["accounts"][0]["isSigner"]
        with pytest.raises(ValueError, match="Malformed account meta"):
            decode_instruction(payload)


class TestTransactionFields:

    def test_decode_versioned_transaction(self, payer):
        transaction = decode_versioned_transaction(encode_versioned_transaction(payer))
        assert transaction.message.account_keys[0] == payer.pubkey()

    def test_decode_legacy_transaction(self, payer):
        transaction = decode_legacy_transaction(encode_legacy_transaction(payer))
        assert transaction.message.account_keys[0] == payer.pubkey()

    def test_invalid_base64(self):
        with pytest.raises(Base64DecodeError):
            decode_versioned_transaction("%%%")

    def test_invalid_bincode(self):
        garbage = base64.b64encode(b"\x05\x01").decode("utf-8")
        with pytest.raises(TransactionDecodeError):
            decode_versioned_transaction(garbage)


class TestPrioritizationFee:

    def test_auto(self):
        assert PrioritizationFeeLamports.auto().to_json() == "auto"

    def test_exact(self):
        assert PrioritizationFeeLamports.exact(5000).to_json() == 5000

    def test_auto_multiplier(self):
        assert PrioritizationFeeLamports.auto_multiplier(3).to_json() == {"autoMultiplier": 3}

    def test_jito_tip(self):
        fee = PrioritizationFeeLamports.jito_tip_lamports(1000)
        assert fee.to_json() == {"jitoTipLamports": 1000}

    def test_priority_level_with_max_lamports(self):
        fee = PrioritizationFeeLamports.priority_level_with_max_lamports(PriorityLevel.VERY_HIGH, 4000000)
        assert fee.to_json() == {
            "priorityLevelWithMaxLamports": {
                "priorityLevel": "veryHigh",
                "maxLamports": 4000000,
            }
        }
