"""Shape evaluated queries into list, table or error results."""

import json
from dataclasses import dataclass, field

from .evaluator import OutputShape, QueryState


@dataclass
class ListItem:
    """One row of a list result."""

    name: str
    info: str | None = None

    def to_dict(self) -> dict:
        return {"name": self.name, "info": self.info}


@dataclass
class ListOutput:
    items: list[ListItem] = field(default_factory=list)

    @property
    def names(self) -> list[str]:
        return [item.name for item in self.items]

    def to_dict(self) -> dict:
        return {"type": "list", "items": [item.to_dict() for item in self.items]}


@dataclass
class TableOutput:
    headers: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"type": "table", "headers": self.headers, "rows": self.rows}


@dataclass
class ErrorOutput:
    """A failed query. ``messages`` holds one line per diagnostic."""

    messages: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"type": "error", "messages": self.messages}


QueryOutput = ListOutput | TableOutput | ErrorOutput


def build_list(matches: list[str] | None) -> ListOutput:
    return ListOutput(items=[ListItem(name=name) for name in matches or []])


def build_table(matches: list[str] | None) -> TableOutput:
    return TableOutput(headers=["File"], rows=[[name] for name in matches or []])


def build_output(state: QueryState) -> QueryOutput:
    """Convert an evaluated state into the output its declaration asks for."""
    if state.shape == OutputShape.TABLE:
        return build_table(state.matches)
    if state.shape == OutputShape.LIST:
        return build_list(state.matches)
    return ErrorOutput(messages=["Query has no output declaration"])


def output_as_json(output: QueryOutput) -> str:
    return json.dumps(output.to_dict(), ensure_ascii=False)
