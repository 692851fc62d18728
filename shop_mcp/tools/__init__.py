"""Tool implementations exposed by the MCP server."""

from .customers import create_customer, email_for
from .expenses import compute_customer_expenses, round_money

__all__ = [
    "create_customer",
    "email_for",
    "compute_customer_expenses",
    "round_money",
]
