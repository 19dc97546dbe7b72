"""Utility modules for the Osmosis agent toolkit."""

from osmosis_agent.utils.number import limit_decimals, to_base_units, to_display_units

__all__ = ["limit_decimals", "to_base_units", "to_display_units"]
