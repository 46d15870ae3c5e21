import pytest

from gaugelog.config import LogConfig
from gaugelog.log import Log
from gaugelog.records import LogRecord, PauseBuffer, RecordBuffer


def _record(i: int) -> LogRecord:
    return LogRecord(id=i, level="info", prefix="", message=f"m{i}")


def test_no_truncation_within_ten_percent() -> None:
    buffer = RecordBuffer(max_size=10)
    for i in range(11):
        buffer.append(_record(i))
    assert len(buffer) == 11


def test_truncates_to_ninety_percent_past_threshold() -> None:
    buffer = RecordBuffer(max_size=10)
    for i in range(12):
        buffer.append(_record(i))
    assert len(buffer) == 9
    assert [r.id for r in buffer] == list(range(3, 12))


def test_length_never_exceeds_bound() -> None:
    buffer = RecordBuffer(max_size=50)
    for i in range(500):
        buffer.append(_record(i))
        assert len(buffer) <= 55


def test_max_size_validation() -> None:
    with pytest.raises(ValueError):
        RecordBuffer(max_size=0)
    buffer = RecordBuffer()
    with pytest.raises(ValueError):
        buffer.max_size = -1


def test_buffer_access() -> None:
    buffer = RecordBuffer(max_size=10)
    assert buffer.last() is None
    assert not buffer
    for i in range(3):
        buffer.append(_record(i))
    assert buffer.last().id == 2
    assert buffer[0].id == 0
    assert [r.id for r in buffer[1:]] == [1, 2]
    buffer.clear()
    assert len(buffer) == 0


def test_record_first_line() -> None:
    record = LogRecord(id=0, level="info", prefix="", message="one\r\ntwo\nthree")
    assert record.first_line == "one"


def test_pause_buffer_drains_in_order() -> None:
    queue = PauseBuffer()
    for i in range(3):
        queue.enqueue(_record(i))
    assert len(queue) == 3
    assert [r.id for r in queue.drain()] == [0, 1, 2]
    assert len(queue) == 0
    assert queue.drain() == []


def test_log_history_with_default_bound(gauge) -> None:
    log = Log(stream=None, gauge=gauge, config=LogConfig())
    for i in range(11001):
        log.info("", "message %d", i)

    records = log.record
    assert len(records) == 9000
    assert records[0].id == 2001
    assert records.last().id == 11000
    assert records[0].message == "message 2001"
