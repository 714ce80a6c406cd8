#!filepath: tests/base_test/test_logger.py
import pytest
from loguru import logger

from activity_eda import logs
from activity_eda.analysis.engines.dataset_load_engine import DatasetLoadEngine
from activity_eda.utils.errors import LoadError


@pytest.fixture
def captured():
    lines = []
    sink_id = logger.add(lambda msg: lines.append(str(msg)))
    yield lines
    logger.remove(sink_id)


def test_catch_logs_and_reraises(captured):
    @logs.catch("split failed")
    def split(n):
        raise ValueError(f"bad n={n}")

    with pytest.raises(ValueError, match="bad n=3"):
        split(3)

    output = "\n".join(captured)
    assert "[ERROR] split: split failed" in output


def test_catch_logs_elapsed_time(captured):
    @logs.catch("never")
    def double(x):
        return 2 * x

    assert double(21) == 42
    assert any("[TIME] double took" in line for line in captured)


def test_catch_without_timing(captured):
    @logs.catch(log_time=False)
    def noop():
        return None

    noop()
    assert not any("[TIME]" in line for line in captured)


def test_dataset_load_failure_is_logged(captured, tmp_path):
    with pytest.raises(LoadError):
        DatasetLoadEngine().load(tmp_path / "missing.csv")

    assert any("[ERROR] load: dataset load failed" in line for line in captured)
