from src.rxresume_mcp.tools.connection_tools import register_connection_tools
from src.rxresume_mcp.tools.content_tools import register_content_tools
from src.rxresume_mcp.tools.resume_tools import register_resume_tools


def register_all_tools(mcp, holder) -> list[str]:
    """Register all MCP tools on the given server instance and return their names."""
    return [
        *register_connection_tools(mcp, holder),
        *register_resume_tools(mcp, holder),
        *register_content_tools(mcp, holder),
    ]
