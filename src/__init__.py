"""
Reactive Resume MCP server source package.
"""
