"""Decode uploaded delimited-text and spreadsheet files into dataset records."""

import io
import logging
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, Dict, List, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)

# None means "sniff the delimiter".
DELIMITED_SUFFIXES: Dict[str, Optional[str]] = {".csv": ",", ".tsv": "\t", ".txt": None}
SPREADSHEET_SUFFIXES = frozenset({".xlsx", ".xlsm", ".xls"})


class DatasetLoadError(ValueError):
    """Raised when an upload cannot be decoded into records."""


@dataclass
class Dataset:
    """Decoded upload: header order plus one mapping per data row."""

    name: str
    columns: List[str] = field(default_factory=list)
    records: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.records)


def _as_text(content: Union[bytes, str]) -> str:
    if isinstance(content, bytes):
        return content.decode("utf-8-sig", errors="replace")
    return content


def _read_delimited(content: Union[bytes, str], separator: Optional[str]) -> pd.DataFrame:
    text = _as_text(content)
    if not text.strip():
        return pd.DataFrame()
    try:
        # Cells stay raw strings; empty cells become "" rather than NaN.
        return pd.read_csv(
            io.StringIO(text),
            sep=separator,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python" if separator is None else "c",
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except (pd.errors.ParserError, ValueError) as exc:
        raise DatasetLoadError(f"Could not parse delimited file: {exc}") from exc


def _read_spreadsheet(content: Union[bytes, str]) -> pd.DataFrame:
    if isinstance(content, str):
        raise DatasetLoadError("Spreadsheet uploads must be binary content")
    try:
        return pd.read_excel(io.BytesIO(content), sheet_name=0)
    except Exception as exc:
        raise DatasetLoadError(f"Could not read spreadsheet: {exc}") from exc


def _frame_records(frame: pd.DataFrame) -> List[Dict[str, Any]]:
    if frame.empty:
        return []
    boxed = frame.astype(object)
    return boxed.where(boxed.notna(), None).to_dict(orient="records")


def load_records(content: Union[bytes, str], filename: str) -> Dataset:
    """Decode an upload by file extension.

    Delimited files keep every cell as a string; spreadsheets keep native cell
    types from the first sheet with empty cells as None.

    Raises:
        DatasetLoadError: Unsupported extension or undecodable content.
    """
    suffix = PurePath(filename or "").suffix.lower()
    if suffix in DELIMITED_SUFFIXES:
        frame = _read_delimited(content, DELIMITED_SUFFIXES[suffix])
    elif suffix in SPREADSHEET_SUFFIXES:
        frame = _read_spreadsheet(content)
    else:
        raise DatasetLoadError(f"Unsupported file type: '{suffix or filename}'")

    columns = [str(column) for column in frame.columns]
    frame.columns = columns
    dataset = Dataset(name=filename, columns=columns, records=_frame_records(frame))
    logger.info(
        "Loaded %s: %d rows, %d columns", filename, dataset.row_count, len(dataset.columns)
    )
    return dataset
