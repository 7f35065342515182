"""MCP tools for connection and authentication."""

from typing import Optional

from src.rxresume_mcp.providers.errors import AuthenticationError
from src.rxresume_mcp.services.client_holder import RxResumeClientHolder
from src.rxresume_mcp.tools.common import UrlString, to_json_text, tool_call


def register_connection_tools(mcp, holder: RxResumeClientHolder) -> list[str]:
    """Register connection/auth MCP tools."""

    @mcp.tool
    async def check_connection() -> str:
        """Check if the Reactive Resume instance is accessible."""
        with tool_call("check_connection", "Connection failed"):
            health = await holder.client.health_check()
            status = health.get("status", "unknown") if isinstance(health, dict) else health
            return f"Connection successful. Server status: {status}"

    @mcp.tool
    async def set_base_url(url: UrlString) -> str:
        """
        Change the Reactive Resume instance URL.

        Any session held for the previous instance is discarded; authenticate again afterwards.

        Args:
            url: Base URL of the Reactive Resume instance
        """
        with tool_call("set_base_url", "Failed to change base URL"):
            holder.set_base_url(url)
            return f"Base URL changed to: {url}"

    @mcp.tool
    async def authenticate(
        api_key: Optional[str] = None,
        identifier: Optional[str] = None,
        password: Optional[str] = None,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
    ) -> str:
        """
        Authenticate with Reactive Resume using an API key (recommended for v5) or email/password.
        API keys can be created in Settings > API Keys in the Reactive Resume dashboard.

        Args:
            api_key: API key (recommended for v5)
            identifier: Username or email address (legacy auth)
            password: User password (legacy auth)
            access_token: Existing access token (legacy auth, with refresh_token)
            refresh_token: Existing refresh token (legacy auth, with access_token)
        """
        with tool_call("authenticate", "Authentication failed"):
            client = holder.client
            if api_key:
                client.set_api_key(api_key)
                return "Successfully authenticated with API key"

            if identifier and password:
                result = await client.login(identifier, password)
                user = result.get("user", {})
                return f"Successfully authenticated as {user.get('name')} ({user.get('email')})"

            if access_token and refresh_token:
                user = await client.login_with_tokens(access_token, refresh_token)
                return f"Successfully authenticated as {user.get('name')} ({user.get('email')})"

            raise AuthenticationError(
                "Please provide either an api_key, both identifier and password, "
                "or both access_token and refresh_token"
            )

    @mcp.tool
    async def get_current_user() -> str:
        """Get information about the currently authenticated user."""
        with tool_call("get_current_user", "Failed to get user"):
            return to_json_text(await holder.client.get_current_user())

    @mcp.tool
    async def logout() -> str:
        """End the legacy cookie session and forget its tokens."""
        with tool_call("logout", "Failed to log out"):
            await holder.client.logout()
            return "Logged out successfully."

    return ["check_connection", "set_base_url", "authenticate", "get_current_user", "logout"]
