# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Callable

import numpy as np
import pandas as pd
import pytest
from loguru import logger

from activity_eda.analysis.dataset import Dataset
from activity_eda.analysis.engines.dataset_load_engine import DatasetLoadEngine

CLASSES = ["A", "B", "C", "D", "E"]


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


def to_dataset(frame: pd.DataFrame, label_column: str = "classe") -> Dataset:
    """DataFrame → Dataset through the real label coercion."""
    return DatasetLoadEngine(label_column=label_column).to_dataset(frame)


# ============================================================
# synthetic data
# ============================================================
def make_even_frame(
        *,
        n_per_class: int = 200,
        n_features: int = 10,
        constant_feature: bool = True,
        seed: int = 0,
) -> pd.DataFrame:
    """
    Evenly distributed classes, numeric features f0..f{n-1};
    the last feature is constant when `constant_feature`.
    """
    rng = np.random.default_rng(seed)
    n = n_per_class * len(CLASSES)
    labels = np.repeat(CLASSES, n_per_class)
    class_idx = np.repeat(np.arange(len(CLASSES)), n_per_class)

    data = {}
    for j in range(n_features):
        data[f"f{j}"] = class_idx * 0.5 + rng.normal(0.0, 1.0, n)
    if constant_feature:
        data[f"f{n_features - 1}"] = np.ones(n)

    df = pd.DataFrame(data)
    df["classe"] = labels
    return df.sample(frac=1.0, random_state=seed).reset_index(drop=True)


def make_weak_signal_frame(*, n_per_class: int = 200, n_weak: int = 20, seed: int = 7) -> pd.DataFrame:
    """
    `sep` perfectly separates A from B and is noise for C/D/E;
    the remaining classes differ only through many weak features.
    """
    rng = np.random.default_rng(seed)
    n = n_per_class * len(CLASSES)
    class_idx = np.repeat(np.arange(len(CLASSES)), n_per_class)

    means = rng.normal(0.0, 0.6, size=(len(CLASSES), n_weak))
    weak = means[class_idx] + rng.normal(0.0, 1.0, size=(n, n_weak))

    sep = rng.normal(0.0, 1.0, n)
    sep[class_idx == 0] = rng.uniform(5.0, 6.0, n_per_class)
    sep[class_idx == 1] = rng.uniform(-6.0, -5.0, n_per_class)

    df = pd.DataFrame(weak, columns=[f"w{j}" for j in range(n_weak)])
    df.insert(0, "sep", sep)
    df["classe"] = np.array(CLASSES)[class_idx]
    return df.sample(frac=1.0, random_state=seed).reset_index(drop=True)


def make_concentrated_frame(*, n_per_class: int = 300, n_noise: int = 12, seed: int = 11) -> pd.DataFrame:
    """
    Three informative features (k0, k1, k2), `n_noise` pure-noise features.
    """
    rng = np.random.default_rng(seed)
    centers = np.array(
        [
            [0.0, 0.0, 0.0],  # A
            [3.0, 0.0, 0.0],  # B
            [0.0, 3.0, 0.0],  # C
            [0.0, 0.0, 3.0],  # D
            [3.0, 3.0, 3.0],  # E
        ]
    )
    n = n_per_class * len(CLASSES)
    class_idx = np.repeat(np.arange(len(CLASSES)), n_per_class)

    informative = centers[class_idx] + rng.normal(0.0, 0.5, size=(n, 3))
    noise = rng.normal(0.0, 1.0, size=(n, n_noise))

    df = pd.DataFrame(informative, columns=["k0", "k1", "k2"])
    for j in range(n_noise):
        df[f"z{j}"] = noise[:, j]
    df["classe"] = np.array(CLASSES)[class_idx]
    return df.sample(frac=1.0, random_state=seed).reset_index(drop=True)


def make_raw_activity_frame(*, n_per_class: int = 60, seed: int = 3) -> pd.DataFrame:
    """
    Shape of the raw accelerometer export: identifiers, timestamps,
    window flags, mostly-empty summary columns, a constant column.
    Missing cells hold "", "NA" or "#DIV/0!".
    """
    rng = np.random.default_rng(seed)
    n = n_per_class * len(CLASSES)
    class_idx = np.repeat(np.arange(len(CLASSES)), n_per_class)

    df = pd.DataFrame(
        {
            "user_name": rng.choice(["adelmo", "carlitos", "pedro"], n),
            "raw_timestamp_part_1": 1322489600 + np.arange(n),
            "raw_timestamp_part_2": rng.integers(0, 999999, n),
            "cvtd_timestamp": "05/12/2011 11:23",
            "new_window": rng.choice(["no", "yes"], n, p=[0.98, 0.02]),
            "num_window": rng.integers(1, 800, n),
            "roll_belt": class_idx * 2.0 + rng.normal(0.0, 0.5, n),
            "pitch_belt": class_idx * -1.5 + rng.normal(0.0, 0.5, n),
            "yaw_belt": rng.normal(0.0, 1.0, n),
            "total_accel_belt": rng.integers(0, 30, n),
            "amplitude_yaw_belt": np.where(rng.random(n) < 0.97, "", "0.00"),
            "kurtosis_roll_belt": np.where(rng.random(n) < 0.97, "NA", "#DIV/0!"),
            "skewness_roll_belt": np.where(rng.random(n) < 0.97, "", "-0.5"),
            "gyros_belt_x": np.zeros(n),
        }
    )
    df["classe"] = np.array(CLASSES)[class_idx]
    return df.sample(frac=1.0, random_state=seed).reset_index(drop=True)


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """
    Write a frame the way the raw export looks: blank first header cell
    (row index), missing values as given.
    """

    def _write(df: pd.DataFrame, name: str = "data.csv", index: bool = True) -> Path:
        path = tmp_path / name
        out = df.copy()
        if index:
            out.index = np.arange(1, len(out) + 1)
        out.to_csv(path, index=index)
        return path

    return _write
