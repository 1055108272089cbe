"""Hook payloads read from the host assistant on stdin."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from skillrules.errors import HookInputError

EDIT_TOOLS = frozenset({"Edit", "MultiEdit", "Write"})


class _ToolParameters(BaseModel):
    model_config = ConfigDict(extra="ignore")

    file_path: str | None = None


class ToolUse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tool: str
    parameters: _ToolParameters | None = None


class HookPayload(BaseModel):
    """One hook invocation: a working directory plus a prompt or tool uses."""

    model_config = ConfigDict(extra="ignore")

    cwd: str
    prompt: str = ""
    session_id: str | None = None
    tool_uses: list[ToolUse] = Field(default_factory=list)
    # Single-tool shape sent by PostToolUse hooks
    tool_name: str | None = None
    tool_input: dict[str, Any] | None = None

    @property
    def edited_files(self) -> list[str]:
        """Paths written by Edit/Write tool uses, in order, without blanks."""
        files = [
            use.parameters.file_path
            for use in self.tool_uses
            if use.tool in EDIT_TOOLS and use.parameters and use.parameters.file_path
        ]
        if self.tool_name in EDIT_TOOLS and self.tool_input:
            path = self.tool_input.get("file_path")
            if isinstance(path, str) and path:
                files.append(path)
        return files


def parse_payload(raw: str) -> HookPayload:
    """Parse the JSON hook payload, raising HookInputError on bad input."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise HookInputError(f"hook input is not JSON: {e}") from None
    try:
        return HookPayload.model_validate(data)
    except ValidationError as e:
        raise HookInputError(f"unexpected hook input: {e.error_count()} problem(s)") from None
