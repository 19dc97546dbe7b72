"""Chain state queries over Cosmos REST (LCD)."""

from osmosis_agent.queries.bank import query_balances

__all__ = ["query_balances"]
