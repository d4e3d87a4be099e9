"""Jupyter notebook parsing functionality."""

import json
import logging
from pathlib import Path
from typing import Any

import nbformat

from nbembed import NotebookParseError
from nbembed.models import Cell, NotebookDocument, OtherCell, as_mapping, cell_from_dict

logger = logging.getLogger(__name__)

# Documents that do not declare a format are read as current v4 notebooks
DEFAULT_NBFORMAT = 4
DEFAULT_NBFORMAT_MINOR = 4


class NotebookParser:
    """Parser for Jupyter notebooks.

    Turns notebook JSON (downloaded, cached or on disk) into a
    NotebookDocument using nbformat. Older notebook formats are upgraded
    to v4 before the cells are extracted.
    """

    def parse(self, content: str | bytes, source: str = "<string>") -> NotebookDocument:
        """Parse notebook JSON text.

        Args:
            content: Notebook JSON as text or UTF-8 bytes
            source: Where the content came from, used in error messages

        Returns:
            NotebookDocument: Parsed notebook

        Raises:
            NotebookParseError: If the content is not a readable notebook
        """
        try:
            if isinstance(content, bytes):
                content = content.decode("utf-8")
            nb_dict = json.loads(content)
        except (UnicodeDecodeError, ValueError) as e:
            raise NotebookParseError(f"Notebook {source} is not valid JSON: {e}") from e

        if not isinstance(nb_dict, dict):
            raise NotebookParseError(f"Notebook {source} is not a JSON object")

        nb_dict.setdefault("nbformat", DEFAULT_NBFORMAT)
        nb_dict.setdefault("nbformat_minor", DEFAULT_NBFORMAT_MINOR)

        try:
            nb = nbformat.convert(nbformat.from_dict(nb_dict), DEFAULT_NBFORMAT)
        except Exception as e:
            raise NotebookParseError(f"Failed to read notebook {source}: {e}") from e

        if not isinstance(nb.get("cells"), list):
            raise NotebookParseError(f"Notebook {source} has no cell list")

        try:
            return NotebookDocument(
                cells=[self._extract_cell(cell, index) for index, cell in enumerate(nb.cells)],
                metadata=as_mapping(nb.get("metadata")),
                nbformat=nb.get("nbformat", DEFAULT_NBFORMAT),
                nbformat_minor=nb.get("nbformat_minor", DEFAULT_NBFORMAT_MINOR),
            )
        except Exception as e:
            raise NotebookParseError(f"Failed to parse notebook {source}: {e}") from e

    def parse_file(self, filepath: Path | str) -> NotebookDocument:
        """Parse a Jupyter notebook file.

        Args:
            filepath: Path to the .ipynb file

        Returns:
            NotebookDocument: Parsed notebook

        Raises:
            NotebookParseError: If the file is missing or parsing fails
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise NotebookParseError(f"Notebook file not found: {filepath}")

        if not filepath.suffix == ".ipynb":
            raise NotebookParseError(f"File is not a Jupyter notebook: {filepath}")

        try:
            content = filepath.read_text(encoding="utf-8")
        except OSError as e:
            raise NotebookParseError(f"Failed to read notebook {filepath}: {e}") from e

        return self.parse(content, source=str(filepath))

    def _extract_cell(self, cell: Any, index: int) -> Cell:
        """Build a cell variant.

        A cell that cannot be read keeps its position as an empty cell so the
        rest of the notebook still renders.
        """
        if not isinstance(cell, dict):
            logger.warning("Notebook cell %d is not an object; rendering it empty", index)
            return OtherCell()

        try:
            return cell_from_dict(cell)
        except (TypeError, ValueError) as e:
            logger.warning("Failed to read notebook cell %d: %s", index, e)
            return OtherCell(cell_type=str(cell.get("cell_type") or "raw"))
