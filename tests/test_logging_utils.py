import csv
import json

import pytest

from swingby.core.logging_utils import LAST_RUN_MARKER, RunLogger


def test_creates_run_folder_and_marker(tmp_path):
    logger = RunLogger(tmp_path, run_id="demo")
    logger.close()
    assert logger.run_dir == tmp_path / "demo"
    assert (tmp_path / LAST_RUN_MARKER).read_text(encoding="utf-8") == "demo"


def test_existing_run_id_gets_a_suffix(tmp_path):
    RunLogger(tmp_path, run_id="demo").close()
    second = RunLogger(tmp_path, run_id="demo")
    second.close()
    assert second.run_id == "demo_01"


def test_timeseries_rows(tmp_path):
    with RunLogger(tmp_path, run_id="ts", timeseries_flush_threshold=2) as logger:
        for i in range(3):
            logger.log_ts([i * 17520.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, -8.0, 1])
        with pytest.raises(ValueError):
            logger.log_ts([1.0, 2.0])
    assert logger.closed

    with logger.timeseries_path.open(newline="") as fh:
        rows = list(csv.DictReader(fh))
    assert len(rows) == 3
    assert rows[2]["t"] == "35040"
    assert rows[0]["energy"] == "-8"
    assert rows[0]["substeps"] == "1"


def test_event_details_survive_csv(tmp_path):
    with RunLogger(tmp_path, run_id="ev") as logger:
        logger.log_event(0.0, "launch", 1e7, 10.0)
        logger.log_event(100.0, "escape", 2e7, 17.5, grade="B", out_of_bounds=True)

    with logger.events_path.open(newline="") as fh:
        rows = list(csv.DictReader(fh))
    assert [row["type"] for row in rows] == ["launch", "escape"]
    assert rows[0]["details"] == ""
    assert json.loads(rows[1]["details"]) == {"grade": "B", "out_of_bounds": True}


def test_close_is_idempotent(tmp_path):
    logger = RunLogger(tmp_path)
    logger.write_meta({"profile": "classic"})
    logger.close()
    logger.close()
    assert json.loads(logger.meta_path.read_text(encoding="utf-8")) == {"profile": "classic"}
