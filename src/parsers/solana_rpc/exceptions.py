class ProviderError(Exception):
    """Solana RPC call failed: transport error, HTTP status, RPC error or bad payload."""
