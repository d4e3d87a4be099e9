"""Data models for notebook documents, cells and outputs."""

from typing import Any, Literal, Optional, Union

import nbformat
from nbformat import NotebookNode
from pydantic import BaseModel, ConfigDict, Field, field_validator


def join_text(value: Any) -> str:
    """Join a list-of-strings notebook field (or return a string as-is)."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return "".join(str(part) for part in value)
    return str(value)


def coerce_count(value: Any) -> Optional[int]:
    """Execution count as an int; anything else means "not run"."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def as_mapping(value: Any) -> dict:
    """Copy a mapping field, replacing malformed values with an empty dict."""
    return dict(value) if isinstance(value, dict) else {}


class StreamOutput(BaseModel):
    """Text written to stdout or stderr while a cell ran.

    Attributes:
        name: Stream name (stdout or stderr)
        text: Stream content
    """

    output_type: Literal["stream"] = "stream"
    name: str = "stdout"
    text: str = ""

    model_config = ConfigDict(frozen=True)

    @field_validator("text", mode="before")
    @classmethod
    def join_fragments(cls, v: Any) -> str:
        """Concatenate text stored as a list of lines."""
        return join_text(v)


class DisplayOutput(BaseModel):
    """Rich display data or an execution result.

    Attributes:
        output_type: display_data or execute_result
        data: MIME bundle mapping MIME type to content
        metadata: Output metadata
        execution_count: Execution number (execute_result only)
    """

    output_type: Literal["display_data", "execute_result"] = "display_data"
    data: dict[str, Any] = Field(default_factory=dict)
    metadata: dict = Field(default_factory=dict)
    execution_count: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("execution_count", mode="before")
    @classmethod
    def check_count(cls, v: Any) -> Optional[int]:
        return coerce_count(v)

    def text_for(self, mime_type: str) -> Optional[str]:
        """Return the joined content for a MIME type, or None if absent or empty."""
        value = self.data.get(mime_type)
        if not value:
            return None
        return join_text(value)


class ErrorOutput(BaseModel):
    """An exception raised while a cell ran.

    Attributes:
        ename: Exception class name
        evalue: Exception message
        traceback: Traceback lines, in order
    """

    output_type: Literal["error"] = "error"
    ename: str = ""
    evalue: str = ""
    traceback: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @field_validator("traceback", mode="before")
    @classmethod
    def coerce_traceback(cls, v: Any) -> list[str]:
        """Accept a missing traceback or a single string."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return [str(line) for line in v]


class UnknownOutput(BaseModel):
    """Any output type nbembed does not know how to render."""

    output_type: str
    raw: dict = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


Output = Union[StreamOutput, DisplayOutput, ErrorOutput, UnknownOutput]


def output_from_dict(output: Any) -> Output:
    """Build the output variant matching a raw output's output_type.

    Entries that are not objects, or whose fields do not fit their
    output_type, become UnknownOutput and render as nothing.
    """
    if not isinstance(output, dict):
        return UnknownOutput(output_type="invalid")

    output_type = output.get("output_type")
    try:
        if output_type == "stream":
            return StreamOutput(
                name=str(output.get("name") or "stdout"),
                text=output.get("text"),
            )
        elif output_type in ("display_data", "execute_result"):
            return DisplayOutput(
                output_type=output_type,
                data=as_mapping(output.get("data")),
                metadata=as_mapping(output.get("metadata")),
                execution_count=output.get("execution_count"),
            )
        elif output_type == "error":
            return ErrorOutput(
                ename=str(output.get("ename") or ""),
                evalue=str(output.get("evalue") or ""),
                traceback=output.get("traceback"),
            )
    except (TypeError, ValueError):
        pass

    return UnknownOutput(output_type=str(output_type), raw=dict(output))


class MarkdownCell(BaseModel):
    """A markdown cell.

    Attributes:
        source: Markdown text
        metadata: Cell metadata
    """

    cell_type: Literal["markdown"] = "markdown"
    source: str = ""
    metadata: dict = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("source", mode="before")
    @classmethod
    def join_fragments(cls, v: Any) -> str:
        """Concatenate source stored as a list of lines."""
        return join_text(v)


class CodeCell(BaseModel):
    """A code cell and its recorded outputs.

    execution_count is None both when the key is absent and when it is null;
    either way the cell is shown as not run.

    Attributes:
        source: Cell source code
        execution_count: Execution number, or None if the cell was not run
        outputs: Recorded outputs, in order
        metadata: Cell metadata
    """

    cell_type: Literal["code"] = "code"
    source: str = ""
    execution_count: Optional[int] = None
    outputs: list[Output] = Field(default_factory=list)
    metadata: dict = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("source", mode="before")
    @classmethod
    def join_fragments(cls, v: Any) -> str:
        """Concatenate source stored as a list of lines."""
        return join_text(v)

    @field_validator("outputs", mode="before")
    @classmethod
    def build_outputs(cls, v: Any) -> list:
        """Turn raw output entries into output variants."""
        if not isinstance(v, (list, tuple)):
            return []
        return [o if isinstance(o, BaseModel) else output_from_dict(o) for o in v]

    @field_validator("execution_count", mode="before")
    @classmethod
    def check_count(cls, v: Any) -> Optional[int]:
        """Treat a count that is not a whole number as not run."""
        return coerce_count(v)


class OtherCell(BaseModel):
    """A raw cell or any other cell type; rendered as an empty cell.

    Attributes:
        cell_type: Original cell type (e.g. raw)
        source: Cell content
        metadata: Cell metadata
    """

    cell_type: str = "raw"
    source: str = ""
    metadata: dict = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("source", mode="before")
    @classmethod
    def join_fragments(cls, v: Any) -> str:
        """Concatenate source stored as a list of lines."""
        return join_text(v)


Cell = Union[MarkdownCell, CodeCell, OtherCell]


def cell_from_dict(cell: dict) -> Cell:
    """Build the cell variant matching a raw cell's cell_type."""
    cell_type = cell.get("cell_type")
    metadata = as_mapping(cell.get("metadata"))

    if cell_type == "markdown":
        return MarkdownCell(source=cell.get("source"), metadata=metadata)
    elif cell_type == "code":
        return CodeCell(
            source=cell.get("source"),
            execution_count=cell.get("execution_count"),
            outputs=cell.get("outputs"),
            metadata=metadata,
        )

    return OtherCell(
        cell_type=str(cell_type or "raw"),
        source=cell.get("source"),
        metadata=metadata,
    )


class NotebookDocument(BaseModel):
    """A complete notebook, immutable once built.

    Attributes:
        cells: Cells in rendering order
        metadata: Notebook metadata dictionary
        nbformat: Major format version
        nbformat_minor: Minor format version
    """

    cells: list[Cell] = Field(default_factory=list)
    metadata: dict = Field(default_factory=dict)
    nbformat: int = 4
    nbformat_minor: int = 5

    model_config = ConfigDict(frozen=True)

    @field_validator("cells", mode="before")
    @classmethod
    def build_cells(cls, v: Any) -> list:
        """Turn raw cell dictionaries into cell variants."""
        if v is None:
            return []
        return [cell_from_dict(c) if isinstance(c, dict) else c for c in v]

    def to_node(self) -> NotebookNode:
        """Convert back to an nbformat v4 notebook for persistence.

        Unknown outputs are dropped and non-markdown, non-code cells are
        stored as raw cells.

        Returns:
            NotebookNode: Notebook ready for nbformat.writes
        """
        nb = nbformat.v4.new_notebook(metadata=dict(self.metadata))

        for cell in self.cells:
            if isinstance(cell, MarkdownCell):
                nb.cells.append(
                    nbformat.v4.new_markdown_cell(cell.source, metadata=dict(cell.metadata))
                )
            elif isinstance(cell, CodeCell):
                nb.cells.append(
                    nbformat.v4.new_code_cell(
                        cell.source,
                        execution_count=cell.execution_count,
                        outputs=[
                            node
                            for node in (_output_to_node(o) for o in cell.outputs)
                            if node is not None
                        ],
                        metadata=dict(cell.metadata),
                    )
                )
            else:
                nb.cells.append(
                    nbformat.v4.new_raw_cell(cell.source, metadata=dict(cell.metadata))
                )

        return nb


def _output_to_node(output: Output) -> Optional[NotebookNode]:
    if isinstance(output, StreamOutput):
        return nbformat.v4.new_output("stream", name=output.name, text=output.text)
    elif isinstance(output, DisplayOutput):
        if output.output_type == "execute_result":
            return nbformat.v4.new_output(
                "execute_result",
                data=dict(output.data),
                metadata=dict(output.metadata),
                execution_count=output.execution_count,
            )
        return nbformat.v4.new_output(
            "display_data", data=dict(output.data), metadata=dict(output.metadata)
        )
    elif isinstance(output, ErrorOutput):
        return nbformat.v4.new_output(
            "error",
            ename=output.ename,
            evalue=output.evalue,
            traceback=list(output.traceback),
        )
    return None
