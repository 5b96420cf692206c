"""Jupiter Client Configuration"""

import os
from dotenv import load_dotenv

load_dotenv()

# API Configuration
QUOTE_API_URL = os.getenv('QUOTE_API_URL', 'https://quote-api.jup.ag/v6')
PRICE_API_URL = os.getenv('PRICE_API_URL', 'https://price.jup.ag/v1')
LEGACY_QUOTE_API_URL = os.getenv('LEGACY_QUOTE_API_URL', 'https://quote-api.jup.ag/v1')
REQUEST_TIMEOUT = float(os.getenv('JUPITER_REQUEST_TIMEOUT', '30'))

# Token Configuration
TOKEN_MAP = {
    'SOL': {
        'mint': 'So11111111111111111111111111111111111111112',
        'decimals': 9,
    },
    'USDC': {
        'mint': 'EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v',
        'decimals': 6,
    },
    'MSOL': {
        'mint': 'mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So',
        'decimals': 9,
    },
}

# Add validation
if not QUOTE_API_URL:
    raise ValueError("QUOTE_API_URL must be set in environment or use default")

if not PRICE_API_URL:
    raise ValueError("PRICE_API_URL must be set in environment or use default")

if not LEGACY_QUOTE_API_URL:
    raise ValueError("LEGACY_QUOTE_API_URL must be set in environment or use default")
