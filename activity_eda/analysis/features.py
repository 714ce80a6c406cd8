# activity_eda/analysis/features.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Literal, Sequence

import pandas as pd

from activity_eda.analysis.dataset import Dataset
from activity_eda.utils.errors import SchemaError


@dataclass(frozen=True)
class FeatureFormula:
    """
    Which columns a model sees.

    - all()           : every non-label column          (classe ~ .)
    - without(names)  : all minus a drop list            (classe ~ . - a - b)
    - only(names)     : explicit keep list               (classe ~ a + b)
    """

    mode: Literal["all", "without", "only"] = "all"
    names: tuple = ()

    @classmethod
    def all(cls) -> "FeatureFormula":
        return cls(mode="all")

    @classmethod
    def without(cls, names: Iterable[str]) -> "FeatureFormula":
        return cls(mode="without", names=tuple(names))

    @classmethod
    def only(cls, names: Iterable[str]) -> "FeatureFormula":
        return cls(mode="only", names=tuple(names))

    def resolve(self, dataset: Dataset) -> List[str]:
        """
        Ordered feature columns (dataset order) for this formula.
        """
        features = dataset.feature_columns

        if self.mode == "all":
            return list(features)

        wanted = set(self.names)
        if self.mode == "without":
            return [c for c in features if c not in wanted]

        unknown = sorted(wanted.difference(features))
        if unknown:
            raise SchemaError(f"formula names not in dataset: {unknown}")
        return [c for c in features if c in wanted]

    def describe(self, label_column: str = "classe") -> str:
        if self.mode == "all":
            return f"{label_column} ~ ."
        if self.mode == "without":
            if not self.names:
                return f"{label_column} ~ ."
            return f"{label_column} ~ . - " + " - ".join(self.names)
        return f"{label_column} ~ " + (" + ".join(self.names) if self.names else "1")


# ----------------------------------------------------------------------
# Feature matrix
# ----------------------------------------------------------------------
def build_feature_matrix(frame: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    """
    Select columns; one-hot encode non-numeric ones.

    NaN in numeric columns is passed through (sklearn trees route
    missing values natively).
    """
    X = frame[list(columns)].copy()

    categorical = [
        c for c in X.columns
        if not (pd.api.types.is_numeric_dtype(X[c]) or pd.api.types.is_bool_dtype(X[c]))
    ]
    if categorical:
        X = pd.get_dummies(X, columns=categorical, dtype=float)

    X.columns = [str(c) for c in X.columns]
    return X.astype(float)


def align_feature_matrix(
        frame: pd.DataFrame,
        input_columns: Sequence[str],
        feature_names: Sequence[str],
) -> pd.DataFrame:
    """
    Feature matrix in exactly the training-time feature order.
    Dummy columns unseen here are filled with 0; unknown ones dropped.
    """
    missing = [c for c in input_columns if c not in frame.columns]
    if missing:
        raise SchemaError(f"evaluation data lacks feature columns: {missing}")

    X = build_feature_matrix(frame, input_columns)
    return X.reindex(columns=list(feature_names), fill_value=0.0)


def source_column(feature_name: str, input_columns: Sequence[str]) -> str:
    """
    Map an encoded feature name back to its input column
    (get_dummies names are '<column>_<value>').
    """
    if feature_name in input_columns:
        return feature_name

    # longest prefix wins ('a_b' before 'a')
    for col in sorted(input_columns, key=len, reverse=True):
        if feature_name.startswith(f"{col}_"):
            return col

    raise KeyError(f"no input column for feature {feature_name!r}")
