"""Wallet input classification and address validation."""

from solders.pubkey import Pubkey

SNS_DOMAINS = (
    ".sol", ".bonk", ".poor", ".ser", ".abc", ".backpack", ".crown", ".gogo",
    ".hodl", ".meme", ".monke", ".oon", ".ponke", ".pump", ".shark", ".snipe",
    ".turtle", ".wallet", ".whale", ".worker", ".00", ".inv", ".ux", ".ray", ".luv",
)


def clean_domain(text: str) -> str:
    """Drop the leading handle marker and normalize case."""
    return text.strip().replace("@", "", 1).lower()


def is_domain(text: str) -> bool:
    """True if the input names an SNS domain rather than an address."""
    cleaned = clean_domain(text)
    return any(cleaned.endswith(suffix) for suffix in SNS_DOMAINS)


def validate_address(address: str) -> bool:
    """True if ``address`` is a base58 encoded 32-byte public key."""
    if not isinstance(address, str) or not address:
        return False
    try:
        Pubkey.from_string(address)
    except ValueError:
        return False
    return True
