#!filepath: tests/analysis/test_dataset.py
import dataclasses

import numpy as np
import pandas as pd
import pytest

from activity_eda.analysis.dataset import Dataset, Partition
from activity_eda.utils.errors import SchemaError

from tests.conftest import to_dataset


@pytest.fixture
def ds():
    frame = pd.DataFrame(
        {
            "a": [1.0, 2.0, 3.0, 4.0],
            "b": ["x", "y", "x", "y"],
            "classe": ["A", "B", "A", "B"],
        }
    )
    return to_dataset(frame)


def test_dataset_is_frozen(ds):
    with pytest.raises(dataclasses.FrozenInstanceError):
        ds.label_column = "other"


def test_drop_columns_returns_new_dataset(ds):
    out = ds.drop_columns(["a", "classe", "not_there"])

    assert out is not ds
    assert out.columns == ["b", "classe"]
    assert ds.columns == ["a", "b", "classe"]


def test_take_resets_index(ds):
    sub = ds.take([3, 1])

    assert sub.n_rows == 2
    assert sub.frame.index.tolist() == [0, 1]
    assert sub.frame["a"].tolist() == [4.0, 2.0]
    assert sub.label_domain == ["A", "B"]


def test_label_array_is_plain(ds):
    y = ds.label_array()
    assert y.dtype == object
    assert y.tolist() == ["A", "B", "A", "B"]


def test_require_label():
    ds = Dataset(frame=pd.DataFrame({"a": [1, 2]}))

    assert not ds.has_label
    with pytest.raises(SchemaError):
        ds.require_label()


def test_partition_arrays_read_only(ds):
    part = Partition(
        train=np.array([0, 1]), test=np.array([2, 3]), seed=1, train_fraction=0.5, n_rows=4
    )

    with pytest.raises(ValueError):
        part.train[0] = 5


def test_partition_summary(ds):
    part = Partition(
        train=np.array([0, 1]), test=np.array([2, 3]), seed=1, train_fraction=0.5, n_rows=4
    )

    summary = part.summary(ds)

    assert summary.index.tolist() == ["A", "B"]
    assert summary["full_n"].tolist() == [2, 2]
    assert summary["train_n"].tolist() == [1, 1]
    assert summary["test_pct"].tolist() == [50.0, 50.0]
