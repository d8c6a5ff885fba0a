# tests/test_logger.py

import logging

from utils.logger import LOGGER_NAMES, LoopIndexFilter, set_loop_index, setup_logging
from utils.profiler import CodeProfiler


def test_setup_logging_writes_one_file_per_component(tmp_path, restore_loggers):
    (tmp_path / "logic.log.1").write_text("stale")

    setup_logging(log_dir=str(tmp_path))
    set_loop_index(42)
    logging.getLogger("logic").debug("stitched")
    for name in LOGGER_NAMES:
        for h in logging.getLogger(name).handlers:
            h.flush()

    assert {p.name for p in tmp_path.iterdir()} == {f"{n}.log" for n in LOGGER_NAMES}
    assert "000042 | DEBUG | logic | stitched" in (tmp_path / "logic.log").read_text()
    assert "Logging system initialized" in (tmp_path / "main.log").read_text()


def test_loop_index_filter_stamps_records(restore_loggers):
    record = logging.LogRecord("logic", logging.INFO, __file__, 1, "msg", None, None)
    set_loop_index(7)
    assert LoopIndexFilter().filter(record)
    assert record.i == 7


# ------------------------------------------------------------
# Profiler
# ------------------------------------------------------------
def test_profiler_measures_elapsed_time(caplog):
    with caplog.at_level(logging.DEBUG, logger="profiler"):
        with CodeProfiler("tick", budget_ms=1e6) as prof:
            sum(range(1000))
    assert prof.elapsed_ms >= 0.0
    assert "'tick' execution time" in caplog.text
    assert "latency budget" not in caplog.text


def test_profiler_warns_over_budget(caplog):
    with caplog.at_level(logging.DEBUG, logger="profiler"):
        with CodeProfiler("tick", budget_ms=-1.0):
            pass
    assert "exceeded" in caplog.text
