#!filepath: tests/analysis/test_dataset_load_engine.py
import math

import pandas as pd
import pytest

from activity_eda.analysis.engines.dataset_load_engine import DatasetLoadEngine
from activity_eda.utils.errors import LoadError

from tests.conftest import make_raw_activity_frame


RAW_CSV = (
    ',user_name,roll_belt,kurtosis_yaw,note,classe\n'
    '1,carlitos,1.5,#DIV/0!,ok,A\n'
    '2,pedro,,NA,N/A,B\n'
    '3,pedro,2.5,2,null,A\n'
)


@pytest.fixture
def engine():
    return DatasetLoadEngine()


def test_blank_header_becomes_x(tmp_path, engine):
    p = tmp_path / "raw.csv"
    p.write_text(RAW_CSV, encoding="utf-8")

    ds = engine.load(p)

    assert ds.columns[0] == "X"
    assert ds.frame["X"].tolist() == [1, 2, 3]
    assert ds.n_rows == 3


def test_only_configured_tokens_are_missing(tmp_path, engine):
    p = tmp_path / "raw.csv"
    p.write_text(RAW_CSV, encoding="utf-8")

    df = engine.load(p).frame

    # "", "#DIV/0!", "NA" → missing
    assert math.isnan(df["roll_belt"].iloc[1])
    assert df["kurtosis_yaw"].isna().tolist() == [True, True, False]
    assert df["kurtosis_yaw"].iloc[2] == 2

    # pandas 默认 NA 字面量不再生效
    assert df["note"].tolist() == ["ok", "N/A", "null"]


def test_label_is_categorical_over_observed_values(tmp_path, engine):
    p = tmp_path / "raw.csv"
    p.write_text(RAW_CSV, encoding="utf-8")

    ds = engine.load(p)

    assert isinstance(ds.labels.dtype, pd.CategoricalDtype)
    assert ds.label_domain == ["A", "B"]
    assert "classe" not in ds.feature_columns


def test_raw_export_roundtrip(write_csv, engine):
    df = make_raw_activity_frame(n_per_class=20)
    ds = engine.load(write_csv(df))

    assert ds.n_rows == len(df)
    assert ds.label_domain == ["A", "B", "C", "D", "E"]
    assert ds.frame["kurtosis_roll_belt"].isna().all()
    assert ds.frame["roll_belt"].notna().all()


def test_missing_file(tmp_path, engine):
    with pytest.raises(LoadError):
        engine.load(tmp_path / "missing.csv")


def test_empty_file(tmp_path, engine):
    p = tmp_path / "empty.csv"
    p.write_text("", encoding="utf-8")

    with pytest.raises(LoadError):
        engine.load(p)


def test_header_only(tmp_path, engine):
    p = tmp_path / "header.csv"
    p.write_text("a,b,classe\n", encoding="utf-8")

    with pytest.raises(LoadError):
        engine.load(p)


def test_label_absent(tmp_path, engine):
    p = tmp_path / "nolabel.csv"
    p.write_text("a,b\n1,2\n3,4\n", encoding="utf-8")

    with pytest.raises(LoadError, match="classe"):
        engine.load(p)


def test_missing_label_value(tmp_path, engine):
    p = tmp_path / "holes.csv"
    p.write_text("a,classe\n1,A\n2,#DIV/0!\n3,B\n", encoding="utf-8")

    with pytest.raises(LoadError):
        engine.load(p)


def test_custom_label_column():
    frame = pd.DataFrame({"x": [1, 2, 3], "activity": ["up", "down", "up"]})
    ds = DatasetLoadEngine(label_column="activity").to_dataset(frame)

    assert ds.label_column == "activity"
    assert ds.label_domain == ["down", "up"]
    assert ds.feature_columns == ["x"]
