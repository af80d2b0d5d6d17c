import logging
import os
import re

import pandas as pd

logger = logging.getLogger(__name__)

_IS_NOT_NULL = re.compile(r"([A-Za-z_][A-Za-z0-9_]*|`[^`]+`)\s+IS\s+NOT\s+NULL\b", re.IGNORECASE)
_IS_NULL = re.compile(r"([A-Za-z_][A-Za-z0-9_]*|`[^`]+`)\s+IS\s+NULL\b", re.IGNORECASE)
_KEYWORDS = re.compile(r"\b(AND|OR|NOT|IN)\b", re.IGNORECASE)


def to_query_expression(expression: str) -> str:
    """Map the filter keywords onto DataFrame.query syntax."""
    expr = _IS_NOT_NULL.sub(r"\1.notna()", expression)
    expr = _IS_NULL.sub(r"\1.isna()", expr)
    return _KEYWORDS.sub(lambda m: m.group(1).lower(), expr)


class RecordSource:
    SUPPORTED_EXTS = {".csv", ".parquet", ".xlsx", ".h5"}
    NULL_TEXT = "NULL"

    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

        if self.ext not in self.SUPPORTED_EXTS:
            raise ValueError("Unsupported file type (use .csv, .parquet, .xlsx, or .h5)")

        self._frame: pd.DataFrame | None = None
        self._view: pd.DataFrame | None = None
        self.filter_expression = ""

    @classmethod
    def from_frame(cls, df: pd.DataFrame, name: str = "<frame>.csv") -> "RecordSource":
        source = cls(name)
        source._set_frame(df)
        return source

    # ---------- loading ----------
    def load(self) -> "RecordSource":
        if not os.path.exists(self.path):
            raise FileNotFoundError(self.path)

        if os.path.getsize(self.path) == 0:
            df = pd.DataFrame()
        elif self.ext == ".csv":
            try:
                df = pd.read_csv(self.path)
            except pd.errors.EmptyDataError:
                df = pd.DataFrame()
        elif self.ext == ".parquet":
            self._ensure_parquet_engine()
            df = pd.read_parquet(self.path)
        elif self.ext == ".xlsx":
            df = self._load_excel()
        else:
            df = self._load_hdf()

        self._set_frame(df)
        logger.info("Loaded %s: %d rows, %d columns", self.path, *df.shape)
        return self

    def _set_frame(self, df: pd.DataFrame):
        self._frame = df.reset_index(drop=True)
        self._view = self._frame
        self.filter_expression = ""

    def _load_excel(self) -> pd.DataFrame:
        self._ensure_excel_engine()
        sheets = pd.read_excel(self.path, sheet_name=None)
        for name, df in sheets.items():
            if isinstance(df, pd.DataFrame):
                logger.debug("Using sheet %r of %s", name, self.path)
                return df
        return pd.DataFrame()

    def _load_hdf(self) -> pd.DataFrame:
        self._ensure_hdf_engine()
        with pd.HDFStore(self.path, mode="r") as store:
            for key in store.keys():
                obj = store.get(key)
                if isinstance(obj, pd.DataFrame):
                    logger.debug("Using key %r of %s", key, self.path)
                    return obj
        return pd.DataFrame()

    def _ensure_parquet_engine(self):
        try:
            import pyarrow  # noqa: F401
        except ImportError:
            raise RuntimeError(
                "Parquet support requires pyarrow. Install via: pip install pyarrow"
            ) from None

    def _ensure_excel_engine(self):
        try:
            import openpyxl  # noqa: F401
        except ImportError:
            raise RuntimeError(
                "XLSX support requires openpyxl. Install via: pip install openpyxl"
            ) from None

    def _ensure_hdf_engine(self):
        try:
            import tables  # type: ignore  # noqa: F401
        except ImportError:
            raise RuntimeError(
                "HDF5 support requires tables. Install via: pip install tables"
            ) from None

    # ---------- records ----------
    def _require_view(self) -> pd.DataFrame:
        if self._view is None:
            raise RuntimeError(f"{self.path} has not been loaded")
        return self._view

    @property
    def headers(self) -> list[str]:
        return [str(col) for col in self._require_view().columns]

    @property
    def total_rows(self) -> int:
        return len(self._require_view())

    def _cell_text(self, value) -> str:
        if value is None or (not isinstance(value, (list, tuple, dict)) and pd.isna(value)):
            return self.NULL_TEXT
        return str(value)

    def fetch(self, offset: int, limit: int) -> list[list[str]]:
        view = self._require_view()
        chunk = view.iloc[max(0, offset) : max(0, offset) + max(0, limit)]
        return [
            [self._cell_text(value) for value in row]
            for row in chunk.itertuples(index=False, name=None)
        ]

    def apply_filter(self, expression: str):
        """Narrow the rows to `expression`; an empty expression shows everything."""
        if self._frame is None:
            raise RuntimeError(f"{self.path} has not been loaded")
        expression = (expression or "").strip()
        if not expression:
            self._view = self._frame
            self.filter_expression = ""
            return
        query = to_query_expression(expression)
        logger.debug("Filter %r -> %r", expression, query)
        view = self._frame.query(query, engine="python")
        self._view = view.reset_index(drop=True)
        self.filter_expression = expression
