"""Display helpers for hashes and addresses in status messages"""


def shorten_hash(tx_hash: str | None) -> str:
    """0x1234ab...cdef - first 8 and last 4 characters"""
    if not tx_hash:
        return ""
    if len(tx_hash) <= 12:
        return tx_hash
    return f"{tx_hash[:8]}...{tx_hash[-4:]}"


def shorten_address(address: str | None) -> str:
    """0x1234...cdef - first 6 and last 4 characters"""
    if not address:
        return ""
    if len(address) <= 10:
        return address
    return f"{address[:6]}...{address[-4:]}"
