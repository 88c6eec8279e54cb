from enum import Enum
from typing import Dict, List, NewType, Optional

from pydantic import BaseModel, Field

# Byte offset into one UTF-8 encoded source buffer. Never a line/column pair.
Offset = NewType("Offset", int)


class ListStyle(str, Enum):
    """How a parameter list delimits its parameters."""
    POSITIONAL = "positional"
    NAMED = "named"
    OPTIONAL_POSITIONAL = "optional_positional"

    @property
    def opener(self) -> str:
        return {"named": "{", "optional_positional": "["}.get(self.value, "")

    @property
    def closer(self) -> str:
        return {"named": "}", "optional_positional": "]"}.get(self.value, "")


class Parameter(BaseModel):
    """
    One constructor parameter as it will be rendered.

    type_text already carries the "required " prefix for mandatory
    named parameters.
    """
    decorators: List[str] = Field(default_factory=list)
    type_text: str
    name: str
    required: bool = False
    comments: List[str] = Field(default_factory=list)


class ColumnWidths(BaseModel):
    """
    Padding targets for one constructor.
    """
    per_decorator_position: Dict[int, int] = Field(default_factory=dict)
    max_decorator_count: int = 0
    max_type_width: int = 0


class ReplacementSpan(BaseModel):
    """
    A half-open byte range [start, end) of the original buffer and its new text.
    """
    start: Offset
    end: Offset
    text: str


class FileResult(BaseModel):
    """
    Outcome of formatting a single file.
    """
    path: str
    changed: bool = False
    formatted: bool = True
    error: Optional[str] = None
    constructors_formatted: int = 0
    constructors_skipped: int = 0


class FormatSummary(BaseModel):
    """
    Summary of a formatting run over one file or a directory.
    """
    files_visited: int = 0
    files_changed: int = 0
    results: List[FileResult] = Field(default_factory=list)
