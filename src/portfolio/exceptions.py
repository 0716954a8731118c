class PortfolioError(Exception):
    pass


class InvalidAddressError(PortfolioError, ValueError):
    """Address is not a well-formed Solana public key."""

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"Invalid Solana address: {address!r}")


class DuplicateAddressError(PortfolioError):
    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"Wallet already tracked: {address}")


class ValuationError(PortfolioError):
    """Holdings for ``address`` could not be fetched; ``cause`` is the original error."""

    def __init__(self, address: str, cause: Exception) -> None:
        self.address = address
        self.cause = cause
        super().__init__(f"Failed to value wallet {address}: {cause}")
