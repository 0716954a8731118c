from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from src.portfolio.exceptions import InvalidAddressError


def is_valid_address(address: str) -> bool:
    """True if ``address`` decodes to a 32-byte base58 public key."""
    if not isinstance(address, str) or not address:
        return False
    try:
        Pubkey.from_string(address)
    except ValueError:
        return False
    return True


def validate_address(address: str) -> str:
    if not is_valid_address(address):
        raise InvalidAddressError(address)
    return address
