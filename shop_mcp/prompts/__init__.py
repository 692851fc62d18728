"""Prompt builders exposed by the MCP server."""

from .insights import INSIGHT_TYPES, build_customer_insights_prompt

__all__ = ["INSIGHT_TYPES", "build_customer_insights_prompt"]
