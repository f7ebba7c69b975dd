"""Tool registry: the authoritative table of callable tools.

A registry is filled during setup (append-only), sealed when a session opens,
and read-only while serving. ``dispatch`` never raises: unknown tools,
invalid arguments and handler failures all come back as error results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

from mcp.types import Tool
from pydantic import ValidationError as PydanticValidationError

from coda_mcp.exceptions import DuplicateToolError, RegistryError, ValidationError
from coda_mcp.logger import Logger, session_logger
from coda_mcp.mcp_server.responses import _error, failure_message, with_error_envelope
from coda_mcp.mcp_server.tool_types import EnvelopedHandler, ToolHandler, ToolResult
from coda_mcp.validation import ToolInput


@dataclass(frozen=True)
class ToolDefinition:
    """A registered tool. Immutable once registered."""

    name: str
    description: str
    operation: str
    input_model: Type[ToolInput]
    handler: EnvelopedHandler

    @property
    def input_schema(self) -> Dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=True)

    def to_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.input_schema)


@dataclass(frozen=True)
class ToolInvocation:
    """One incoming tool call."""

    tool_name: str
    arguments: Dict[str, Any] = field(default_factory=dict)
    correlation_id: Optional[Any] = None


class ToolRegistry:
    """Maps tool names to input models and enveloped handlers."""

    def __init__(self, logger: Optional[Logger] = None):
        self.logger: Logger = logger or session_logger
        self._tools: Dict[str, ToolDefinition] = {}
        self._sealed = False

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        """Make the registry read-only."""
        self._sealed = True

    def register(
        self,
        name: str,
        description: str,
        input_model: Type[ToolInput],
        handler: ToolHandler,
        operation: Optional[str] = None,
    ) -> ToolDefinition:
        """Register a tool.

        Args:
            name: Unique, stable tool name
            description: Description shown to the calling assistant
            input_model: Pydantic model the arguments are validated against
            handler: Coroutine taking the validated model; returns a plain
                value or raises
            operation: Phrase used in error messages ("list pages"); defaults
                to the tool name with underscores replaced by spaces

        Raises:
            DuplicateToolError: If the name is already registered
            RegistryError: If the registry has been sealed
        """
        if self._sealed:
            raise RegistryError(f"Cannot register '{name}': registry is sealed")
        if name in self._tools:
            raise DuplicateToolError(name)

        operation = operation or name.replace("_", " ")
        definition = ToolDefinition(
            name=name,
            description=description,
            operation=operation,
            input_model=input_model,
            handler=with_error_envelope(operation, handler, logger=self.logger),
        )
        self._tools[name] = definition
        return definition

    def get(self, name: str) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    def names(self) -> List[str]:
        return list(self._tools)

    def list_tools(self) -> List[Tool]:
        return [definition.to_tool() for definition in self._tools.values()]

    async def dispatch(self, invocation: ToolInvocation) -> ToolResult:
        name = invocation.tool_name
        self.logger.info(
            "Tool invocation started",
            tool=name,
            correlation_id=invocation.correlation_id,
        )

        definition = self._tools.get(name)
        if definition is None:
            self.logger.error("Unknown tool requested", tool=name, available_tools=self.names())
            return _error(f"Unknown tool: {name}. Available tools: {', '.join(self.names())}")

        try:
            payload = definition.input_model.model_validate(invocation.arguments or {})
        except PydanticValidationError as exc:
            error = ValidationError.from_pydantic(exc)
            self.logger.warning(
                "Validation error",
                tool=name,
                correlation_id=invocation.correlation_id,
                errors=error.errors,
            )
            return _error(failure_message(definition.operation, error))

        result = await definition.handler(payload)
        self.logger.info(
            "Tool completed",
            tool=name,
            correlation_id=invocation.correlation_id,
            is_error=result.isError,
        )
        return result
