import base64
import json

import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.transaction import Transaction, VersionedTransaction

from clients.jupiter_client import JupiterClient

SOL = "So11111111111111111111111111111111111111112"
USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
MSOL = "mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So"
TOKEN_PROGRAM = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
COMPUTE_BUDGET_PROGRAM = "ComputeBudget111111111111111111111111111111"
SYSTEM_PROGRAM = "11111111111111111111111111111111"


class FakeResponse:
    """Stands in for the aiohttp response context manager"""

    def __init__(self, status=200, body=None, text=None, raw=None):
        self.status = status
        if raw is None:
            raw = (text if text is not None else json.dumps(body)).encode("utf-8")
        self._raw = raw

    async def read(self):
        return self._raw

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Records requests and replays queued responses or errors"""

    def __init__(self):
        self.requests = []
        self.responses = []
        self.closed = False

    def add_response(self, body=None, status=200, text=None, raw=None):
        self.responses.append(FakeResponse(status, body, text, raw))

    def add_error(self, error):
        self.responses.append(error)

    def request(self, method, url, params=None, json=None):
        self.requests.append({"method": method, "url": url, "params": params, "json": json})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self):
        self.closed = True


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    return JupiterClient(
        session=session,
        quote_api_url="https://quote.test/v6",
        price_api_url="https://price.test/v1",
        legacy_api_url="https://quote.test/v1",
    )


@pytest.fixture
def payer():
    return Keypair()


def swap_info_payload(label="Orca", input_mint=SOL, output_mint=USDC):
    return {
        "ammKey": TOKEN_PROGRAM,
        "label": label,
        "inputMint": input_mint,
        "outputMint": output_mint,
        "inAmount": "10000000",
        "outAmount": "1520000",
        "feeAmount": "3000",
        "feeMint": input_mint,
    }


def quote_payload():
    return {
        "inputMint": SOL,
        "inAmount": "10000000",
        "outputMint": USDC,
        "outAmount": "1520000",
        "otherAmountThreshold": "1504800",
        "swapMode": "ExactIn",
        "slippageBps": 100,
        "platformFee": None,
        "priceImpactPct": "0.0012",
        "routePlan": [
            {"percent": 100, "swapInfo": swap_info_payload()},
        ],
        "contextSlot": 251234567,
        "timeTaken": 0.021,
    }


def instruction_payload(program_id=TOKEN_PROGRAM, data="AQID"):
    return {
        "programId": program_id,
        "accounts": [
            {"pubkey": SOL, "isSigner": False, "isWritable": True},
            {"pubkey": USDC, "isSigner": True, "isWritable": False},
        ],
        "data": data,
    }


def swap_instructions_payload():
    return {
        "tokenLedgerInstruction": None,
        "computeBudgetInstructions": [instruction_payload(COMPUTE_BUDGET_PROGRAM, "AsBcAAA=")],
        "setupInstructions": [instruction_payload()],
        "swapInstruction": instruction_payload(data="5RfLl3rjrSoBAAAA"),
        "cleanupInstruction": None,
        "addressLookupTableAddresses": [MSOL],
    }


def encode_versioned_transaction(keypair):
    message = MessageV0.try_compile(keypair.pubkey(), [], [], Hash.default())
    transaction = VersionedTransaction(message, [keypair])
    return base64.b64encode(bytes(transaction)).decode("utf-8")


def encode_legacy_transaction(keypair):
    transaction = Transaction.new_with_payer([], keypair.pubkey())
    return base64.b64encode(bytes(transaction)).decode("utf-8")
