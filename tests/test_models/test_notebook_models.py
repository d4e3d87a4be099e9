"""Tests for notebook and icon data models."""

import nbformat
import pytest
from pydantic import ValidationError

from nbembed.models import (
    CodeCell,
    DisplayOutput,
    ErrorOutput,
    IconCandidate,
    MarkdownCell,
    NotebookDocument,
    OtherCell,
    StreamOutput,
    UnknownOutput,
    cell_from_dict,
    output_from_dict,
)


class TestCells:
    """Tests for cell variants."""

    def test_source_fragments_are_joined(self):
        """Test that list sources are concatenated."""
        cell = MarkdownCell(source=["# Title\n", "\n", "Body"])

        assert cell.source == "# Title\n\nBody"

    def test_cell_from_dict_markdown(self):
        """Test building a markdown cell."""
        cell = cell_from_dict({"cell_type": "markdown", "source": "Hello"})

        assert isinstance(cell, MarkdownCell)
        assert cell.source == "Hello"

    def test_cell_from_dict_code(self):
        """Test building a code cell with outputs."""
        cell = cell_from_dict(
            {
                "cell_type": "code",
                "source": ["x = 1\n", "x"],
                "execution_count": 3,
                "outputs": [{"output_type": "stream", "name": "stdout", "text": "1\n"}],
            }
        )

        assert isinstance(cell, CodeCell)
        assert cell.source == "x = 1\nx"
        assert cell.execution_count == 3
        assert isinstance(cell.outputs[0], StreamOutput)

    def test_execution_count_absent_and_null_are_not_run(self):
        """Test that a missing and a null execution count both mean not run."""
        absent = cell_from_dict({"cell_type": "code", "source": ""})
        null = cell_from_dict({"cell_type": "code", "source": "", "execution_count": None})

        assert absent.execution_count is None
        assert null.execution_count is None

    def test_unknown_cell_type_becomes_other_cell(self):
        """Test that raw and unknown cells keep their type."""
        raw = cell_from_dict({"cell_type": "raw", "source": "text"})
        heading = cell_from_dict({"cell_type": "heading", "source": "Old"})

        assert isinstance(raw, OtherCell)
        assert raw.cell_type == "raw"
        assert isinstance(heading, OtherCell)
        assert heading.cell_type == "heading"

    def test_missing_outputs_default_to_empty(self):
        """Test that a code cell without outputs has an empty list."""
        cell = cell_from_dict({"cell_type": "code", "source": "x", "outputs": None})

        assert cell.outputs == []

    def test_cells_are_frozen(self):
        """Test that cells cannot be modified after construction."""
        cell = MarkdownCell(source="text")

        with pytest.raises(ValidationError):
            cell.source = "changed"


class TestOutputs:
    """Tests for output variants."""

    def test_stream_output(self):
        """Test building a stream output from fragments."""
        output = output_from_dict(
            {"output_type": "stream", "name": "stderr", "text": ["a\n", "b\n"]}
        )

        assert isinstance(output, StreamOutput)
        assert output.name == "stderr"
        assert output.text == "a\nb\n"

    def test_display_outputs(self):
        """Test that display_data and execute_result share a variant."""
        display = output_from_dict({"output_type": "display_data", "data": {"text/plain": "x"}})
        result = output_from_dict(
            {"output_type": "execute_result", "data": {}, "execution_count": 4}
        )

        assert isinstance(display, DisplayOutput)
        assert isinstance(result, DisplayOutput)
        assert result.output_type == "execute_result"
        assert result.execution_count == 4

    def test_text_for_joins_and_skips_empty(self):
        """Test MIME lookup on display data."""
        output = DisplayOutput(data={"text/plain": ["a", "b"], "text/html": ""})

        assert output.text_for("text/plain") == "ab"
        assert output.text_for("text/html") is None
        assert output.text_for("image/png") is None

    def test_error_output(self):
        """Test building an error output."""
        output = output_from_dict(
            {
                "output_type": "error",
                "ename": "ValueError",
                "evalue": "bad",
                "traceback": ["line 1", "line 2"],
            }
        )

        assert isinstance(output, ErrorOutput)
        assert output.traceback == ["line 1", "line 2"]

    def test_error_output_without_traceback(self):
        """Test that a missing traceback becomes an empty list."""
        output = output_from_dict({"output_type": "error"})

        assert output.traceback == []

    def test_unknown_output(self):
        """Test that unknown output types are kept as UnknownOutput."""
        output = output_from_dict({"output_type": "widget", "model_id": "abc"})

        assert isinstance(output, UnknownOutput)
        assert output.output_type == "widget"
        assert output.raw["model_id"] == "abc"


class TestNotebookDocument:
    """Tests for NotebookDocument."""

    def test_builds_cells_in_order(self, sample_notebook_data):
        """Test that raw cell dicts become variants in the same order."""
        document = NotebookDocument(cells=sample_notebook_data["cells"])

        assert [cell.cell_type for cell in document.cells] == ["markdown", "code", "code"]
        assert document.cells[1].source == "import numpy as np\nprint(np.pi)"

    def test_to_node_produces_valid_notebook(self, sample_notebook_data):
        """Test conversion back to an nbformat notebook."""
        document = NotebookDocument(
            cells=sample_notebook_data["cells"]
            + [{"cell_type": "raw", "source": "raw"}],
            metadata=sample_notebook_data["metadata"],
        )

        node = document.to_node()
        nbformat.validate(node)

        assert node.nbformat == 4
        assert [c.cell_type for c in node.cells] == ["markdown", "code", "code", "raw"]
        assert node.cells[1].execution_count == 1
        assert node.cells[1].outputs[0].output_type == "stream"
        assert node.cells[2].outputs[0].data["image/png"]
        assert node.metadata["kernelspec"]["name"] == "python3"

    def test_to_node_drops_unknown_outputs(self):
        """Test that unknown outputs are not persisted."""
        document = NotebookDocument(
            cells=[
                {
                    "cell_type": "code",
                    "source": "x",
                    "execution_count": 1,
                    "outputs": [
                        {"output_type": "widget"},
                        {"output_type": "execute_result", "data": {"text/plain": "1"},
                         "metadata": {}, "execution_count": 1},
                    ],
                }
            ]
        )

        node = document.to_node()

        assert [o.output_type for o in node.cells[0].outputs] == ["execute_result"]


class TestIconCandidate:
    """Tests for IconCandidate size hints."""

    @pytest.mark.parametrize(
        "sizes,expected",
        [
            ("32x32", 32),
            ("192X192", 192),
            ("16x16 48x48", 16),
            (None, 16),
            ("", 16),
            ("any", 16),
            ("0x0", 16),
        ],
    )
    def test_size_hint(self, sizes, expected):
        """Test parsing of the first declared dimension."""
        candidate = IconCandidate(href="https://example.org/icon.png", sizes=sizes)

        assert candidate.size_hint == expected
