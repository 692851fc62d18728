"""
Shop/customer MCP server.

Serves shop, customer and transaction fixtures as MCP resources, with tools
for creating customers and summarizing their expenses and a prompt for
customer insights.
"""

__version__ = "1.0.0"
