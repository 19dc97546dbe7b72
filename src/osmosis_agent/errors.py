"""Exception hierarchy for the Osmosis agent toolkit.

Every failure surfaced by the toolkit derives from ToolkitError so callers
(agents, the MCP server) can catch one type and still branch on the cause.
"""


class ToolkitError(Exception):
    """Base class for all toolkit errors."""

    pass


class InvalidNumberError(ToolkitError, ValueError):
    """Raised when an amount is not a finite number."""

    pass


class KeyDerivationError(ToolkitError):
    """Raised when a mnemonic cannot produce a key for a derivation path."""

    pass


class NodeError(ToolkitError):
    """Base class for failures reported by (or reaching) a chain node."""

    pass


class NodeUnreachableError(NodeError):
    """Raised when a node endpoint cannot be connected to."""

    pass


class SimulationError(NodeError):
    """Raised when the node rejects a transaction simulation."""

    pass


class BroadcastError(NodeError):
    """Raised when the node rejects a signed transaction."""

    def __init__(self, message: str, code: int = 0, tx_hash: str = ""):
        super().__init__(message)
        self.code = code
        self.tx_hash = tx_hash


class QuoteNotFoundError(ToolkitError):
    """Raised when a quote id is unknown, evicted, or already used."""

    def __init__(self, quote_id: str):
        super().__init__(f"Quote not found: {quote_id}")
        self.quote_id = quote_id


class AssetNotFoundError(ToolkitError):
    """Raised when a ticker or denom is not in the asset list."""

    pass
