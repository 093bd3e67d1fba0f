"""Output formatting for terminal and tables."""

from showdown_sim.formatters.text import TextFormatter
from showdown_sim.formatters.table import TableFormatter

__all__ = ["TextFormatter", "TableFormatter"]
