# activity_eda/analysis/engines/dataset_load_engine.py
from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd

from activity_eda import logs
from activity_eda.analysis.dataset import Dataset
from activity_eda.utils.errors import LoadError

# pandas 对空白表头列的命名
_BLANK_HEADER = "Unnamed: 0"
_INDEX_COLUMN = "X"


class DatasetLoadEngine:
    """
    DatasetLoadEngine

    Responsibility:
    - Parse delimited text into typed columns
    - ONLY `missing_tokens` are missing values (any column)
    - Label column → Categorical over the observed values

    Contract:
    - LoadError on unreadable / empty file, absent or incomplete label
    """

    def __init__(
            self,
            *,
            label_column: str = "classe",
            missing_tokens: Sequence[str] = ("", "#DIV/0!", "NA"),
    ):
        self.label_column = label_column
        self.missing_tokens = list(missing_tokens)

    @logs.catch("dataset load failed")
    def load(self, path: str | Path) -> Dataset:
        path = Path(path)

        if not path.is_file():
            raise LoadError(f"dataset file not found: {path}")

        try:
            frame = pd.read_csv(
                path,
                na_values=self.missing_tokens,
                keep_default_na=False,
                low_memory=False,
            )
        except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise LoadError(f"cannot read dataset {path}: {e}") from e

        if _BLANK_HEADER in frame.columns and _INDEX_COLUMN not in frame.columns:
            frame = frame.rename(columns={_BLANK_HEADER: _INDEX_COLUMN})

        return self.to_dataset(frame, source=str(path))

    def to_dataset(self, frame: pd.DataFrame, *, source: str = "<frame>") -> Dataset:
        """
        Validate the label column and coerce it to a categorical.
        """
        if self.label_column not in frame.columns:
            raise LoadError(
                f"label column {self.label_column!r} not found in {source}"
            )

        if len(frame) == 0:
            raise LoadError(f"dataset {source} has no rows")

        n_missing = int(frame[self.label_column].isna().sum())
        if n_missing:
            raise LoadError(
                f"{n_missing} rows of {source} have no {self.label_column!r} value"
            )

        frame = frame.copy()
        observed = sorted(pd.unique(frame[self.label_column]))
        frame[self.label_column] = pd.Categorical(
            frame[self.label_column], categories=observed
        )

        return Dataset(frame=frame, label_column=self.label_column)
