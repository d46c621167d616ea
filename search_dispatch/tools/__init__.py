from .tool_base import Tool, ToolDefinition
from .web_search_tool import WebSearchTool

__all__ = ["Tool", "ToolDefinition", "WebSearchTool"]
