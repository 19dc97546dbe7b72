"""Common shape of an agent tool.

A tool is anything with a name, a description, a pydantic model for its
parameters (None when it takes none), a pydantic model for its output and
an async `call`. Tools satisfy the protocol structurally; none of them
inherit from it.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


@runtime_checkable
class Tool(Protocol):
    name: str
    description: str
    parameters: Optional[type[BaseModel]]
    output: type[BaseModel]

    async def call(self, params: Any = None) -> BaseModel: ...


class ToolModel(BaseModel):
    """Base for tool parameters and outputs; camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def dump_output(result: BaseModel) -> dict:
    """Serialize a tool result the way agents receive it."""
    return result.model_dump(mode="json", by_alias=True)
