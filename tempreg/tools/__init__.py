"""
MCP tools for tempreg.
"""
