"""
API Models for MCP Server

This module defines the Pydantic models shared by the tool layer and both
inbound transports (MCP stdio and HTTP).

Design Goals
------------
- Strong typing
- Immutable tool descriptors
- A reply shape that is well-formed by construction
"""

from __future__ import annotations

from typing import List, Dict, Any, Literal, Tuple
from pydantic import BaseModel, Field, ConfigDict


# ---------------------------------------------------------------------
# Tool Catalog Models
# ---------------------------------------------------------------------

class ToolParameter(BaseModel):
    """
    A single named input field of a tool.
    """
    type: str = "string"
    description: str

    model_config = ConfigDict(frozen=True, extra="forbid")


class ToolDescriptor(BaseModel):
    """
    Declarative description of one tool: its name, purpose, and inputs.
    """
    name: str = Field(..., min_length=1)
    description: str
    properties: Dict[str, ToolParameter] = Field(default_factory=dict)
    required: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")

    def input_schema(self) -> Dict[str, Any]:
        """Render the inputs as a JSON Schema object."""
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": {
                name: param.model_dump() for name, param in self.properties.items()
            },
        }
        if self.required:
            schema["required"] = list(self.required)
        return schema

    def as_listing(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


# ---------------------------------------------------------------------
# Tool Call Models
# ---------------------------------------------------------------------

class ToolCallRequest(BaseModel):
    """
    A request to invoke one tool by name.
    """
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class TextContent(BaseModel):
    """
    One text item of a tool reply.
    """
    type: Literal["text"] = "text"
    text: str

    model_config = ConfigDict(extra="forbid")


class ToolReply(BaseModel):
    """
    Uniform result of a tool call. Always carries at least one text item,
    whether or not the underlying operation succeeded.
    """
    content: List[TextContent] = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def text(cls, text: str) -> "ToolReply":
        return cls(content=[TextContent(text=text)])
