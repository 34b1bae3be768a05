# autocleanx/agents/data_agent.py
import asyncio
import csv
import io
import logging
import math
import re
from pathlib import Path
from typing import IO, Any, Dict, List, Optional, Union

import pandas as pd

from autocleanx.config import Config, get_config
from autocleanx.types import (
    MISSING, Cell, CSVParsingError, Dataset, EmptyDatasetError, Flag, Number, Text
)

logger = logging.getLogger(__name__)

DataSource = Union[str, Path, IO[bytes], IO[str]]

_NUMBER_PATTERN = re.compile(r'^\s*-?(\d+\.?|\.\d+|\d+\.\d+)([eE][-+]?\d+)?\s*$')
_TRUE_VALUES = {'true', 'True', 'TRUE'}
_FALSE_VALUES = {'false', 'False', 'FALSE'}

def type_field(value: str) -> Cell:
    """Type one raw field on its own: empty, boolean, finite number or text"""
    if value == '':
        return MISSING
    if value in _TRUE_VALUES:
        return Flag(True)
    if value in _FALSE_VALUES:
        return Flag(False)
    if _NUMBER_PATTERN.match(value):
        number = float(value)
        if not math.isfinite(number):
            return Text(value)
        if not any(ch in value for ch in '.eE'):
            return Number(int(value))
        return Number(number)
    return Text(value)

class DataIngestionAgent:
    """Agent responsible for turning a delimited file into an ordered list of rows"""

    def __init__(self, config: Optional[Config] = None):
        config = config or get_config()
        self.supported_formats = config.ingestion.SUPPORTED_FILE_FORMATS
        self.max_file_size_mb = config.ingestion.MAX_FILE_SIZE_MB
        self.encodings = config.ingestion.ENCODINGS
        self.separators = config.ingestion.SEPARATORS

    async def process(self, state: dict) -> dict:
        """Main processing function for data ingestion"""
        logger.info(f"Starting data ingestion for: {state['file_name']}")

        raw_data = await self.load_rows(state['source'])
        if not raw_data:
            raise EmptyDatasetError()

        headers = list(raw_data[0].keys())

        state.update({
            'raw_data': raw_data,
            'headers': headers,
            'current_step': 'data_ingestion'
        })
        state['execution_log'].append(
            f"Data loaded successfully: {len(raw_data)} rows, {len(headers)} columns"
        )
        return state

    async def load_rows(self, source: DataSource) -> Dataset:
        """Read and parse the whole source before any column is processed"""
        frame = await asyncio.to_thread(self._load_data, source)
        return self._frame_to_rows(frame)

    def _load_data(self, source: DataSource) -> pd.DataFrame:
        text = self._read_text(source)
        if not text.strip():
            raise EmptyDatasetError()
        return self._parse_frame(text)

    def _read_text(self, source: DataSource) -> str:
        """Read the source fully and decode it"""
        if isinstance(source, (str, Path)):
            path = Path(source)

            if not path.exists():
                raise FileNotFoundError(f"Data file not found: {source}")

            extension = path.suffix.lower()
            if extension not in self.supported_formats:
                raise CSVParsingError(f"Unsupported file format: {extension}")

            raw = path.read_bytes()
        else:
            if hasattr(source, 'seek'):
                source.seek(0)
            raw = source.read()

        size_mb = len(raw) / (1024 * 1024)
        if size_mb > self.max_file_size_mb:
            raise CSVParsingError(f"File too large: {size_mb:.1f}MB > {self.max_file_size_mb}MB")

        if isinstance(raw, str):
            return raw.lstrip('\ufeff')

        for encoding in self.encodings:
            try:
                return raw.decode(encoding).lstrip('\ufeff')
            except UnicodeDecodeError:
                logger.debug(f"Could not decode input as {encoding}")
                continue

        raise CSVParsingError(f"Could not decode file with any of: {self.encodings}")

    def _parse_frame(self, text: str) -> pd.DataFrame:
        """Try each separator; the first yielding more than one column wins"""
        first_error = None
        single_column = None

        for sep in self.separators:
            try:
                self._check_field_counts(text, sep)
                data = pd.read_csv(
                    io.StringIO(text),
                    sep=sep,
                    header=0,
                    index_col=False,
                    dtype=str,
                    skip_blank_lines=True,
                    keep_default_na=False,
                    na_filter=False,
                )
            except pd.errors.EmptyDataError:
                raise EmptyDatasetError()
            except pd.errors.ParserError as e:
                logger.debug(f"Separator {sep!r} failed: {e}")
                if first_error is None:
                    first_error = e
                continue

            if data.shape[1] > 1:
                logger.debug(f"Parsed with separator {sep!r}: {data.shape}")
                return data
            if single_column is None:
                single_column = data

        # A single-column reading is only trusted when no separator failed to tokenize
        if first_error is not None:
            raise CSVParsingError(f"CSV Parsing Error: {first_error}") from first_error

        return single_column

    def _check_field_counts(self, text: str, sep: str):
        """Every record must carry exactly as many fields as the header"""
        expected = None
        reader = csv.reader(io.StringIO(text), delimiter=sep, strict=True)
        try:
            for fields in reader:
                if not fields or (len(fields) == 1 and not fields[0].strip()):
                    continue
                if expected is None:
                    expected = len(fields)
                elif len(fields) != expected:
                    problem = "Too few fields" if len(fields) < expected else "Too many fields"
                    raise pd.errors.ParserError(
                        f"{problem}: expected {expected} fields but parsed {len(fields)} on line {reader.line_num}"
                    )
        except csv.Error as e:
            raise pd.errors.ParserError(f"{e} on line {reader.line_num}") from e

    def _frame_to_rows(self, data: pd.DataFrame) -> Dataset:
        records: List[Dict[Any, str]] = data.to_dict('records')
        return [
            {str(column): type_field(value) for column, value in record.items()}
            for record in records
        ]
