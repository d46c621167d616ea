"""
Base class for agent-facing tools (tool-use function definitions).
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, TypedDict


class ToolDefinition(TypedDict):
    name: str
    description: str
    input_schema: Dict[str, Any]


class Tool(ABC):
    """
    A callable tool exposed to an LLM agent: a name, a description and a
    JSONSchema for its input.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name used in function calling format."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what the tool does."""
        pass

    @property
    @abstractmethod
    def input_schema(self) -> Dict[str, Any]:
        """
        JSONSchema object defining accepted input.
        Must include:
        - type: "object"
        - properties: Parameter definitions
        - required: List of required parameters
        """
        pass

    @abstractmethod
    def run(self, input: Dict[str, Any]) -> Dict[str, Any]:
        """Execute the tool with the given input."""
        pass

    def get_tool_definition(self) -> ToolDefinition:
        schema = self.input_schema if isinstance(self.input_schema, dict) else {}
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": {
                "type": "object",
                "properties": schema.get("properties", {}) or {},
                "required": schema.get("required", []) or [],
            },
        }

    def format_error(self, error: str) -> Dict[str, Any]:
        return {"type": "error", "content": f"Error: {error}"}
