import logging

import pytest

from imputekit.utils.constants import Dims
from imputekit.utils.logging import get_logger
from imputekit.utils.performance import timed_execution


def test_timed_execution_logs_elapsed_time(caplog):
    @timed_execution
    def add(a, b):
        return a + b

    with caplog.at_level(logging.DEBUG, logger="imputekit.utils.performance"):
        assert add(1, 2) == 3
    assert "executed in" in caplog.text
    assert add.__name__ == "add"


def test_timed_execution_logs_on_failure(caplog):
    @timed_execution
    def fail():
        raise RuntimeError("boom")

    with caplog.at_level(logging.DEBUG, logger="imputekit.utils.performance"):
        with pytest.raises(RuntimeError):
            fail()
    assert "executed in" in caplog.text


def test_get_logger_uses_module_name():
    assert get_logger("imputekit.test").name == "imputekit.test"


@pytest.mark.parametrize(
    "value, expected",
    [("rows", Dims.ROWS), ("COLS", Dims.COLS), ("columns", Dims.COLS), (Dims.ROWS, Dims.ROWS)],
)
def test_dims_parse(value, expected):
    assert Dims.parse(value) is expected
