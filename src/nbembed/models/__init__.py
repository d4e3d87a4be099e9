"""Data models for nbembed."""

from nbembed.models.icon import IconCandidate
from nbembed.models.notebook import (
    Cell,
    CodeCell,
    DisplayOutput,
    ErrorOutput,
    MarkdownCell,
    NotebookDocument,
    OtherCell,
    Output,
    StreamOutput,
    UnknownOutput,
    as_mapping,
    cell_from_dict,
    coerce_count,
    output_from_dict,
)

__all__ = [
    "Cell",
    "CodeCell",
    "MarkdownCell",
    "OtherCell",
    "Output",
    "StreamOutput",
    "DisplayOutput",
    "ErrorOutput",
    "UnknownOutput",
    "NotebookDocument",
    "IconCandidate",
    "as_mapping",
    "cell_from_dict",
    "coerce_count",
    "output_from_dict",
]
