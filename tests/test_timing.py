import logging

from fastmatch.core.timing import SplitTimer


def test_splits_dumped_at_debug(caplog):
    log = logging.getLogger("fastmatch.test.timing")
    timer = SplitTimer("fast_tm", log, enabled=True)
    timer.add_split("select_pyramid_level:2")
    timer.add_split("level:2 point:None")
    assert [name for name, _ in timer.splits] == ["select_pyramid_level:2", "level:2 point:None"]
    assert all(ms >= 0.0 for _, ms in timer.splits)

    with caplog.at_level(logging.DEBUG, logger="fastmatch.test.timing"):
        timer.dump()
    messages = [r.getMessage() for r in caplog.records]
    assert messages[0] == "fast_tm: begin"
    assert any("select_pyramid_level:2" in m for m in messages)
    assert messages[-1].startswith("fast_tm: end")
    # dump resets
    assert timer.splits == []


def test_disabled_timer_records_nothing(caplog):
    log = logging.getLogger("fastmatch.test.timing_off")
    timer = SplitTimer("fast_tm", log, enabled=False)
    timer.add_split("anything")
    with caplog.at_level(logging.DEBUG, logger="fastmatch.test.timing_off"):
        timer.dump()
    assert timer.splits == []
    assert not caplog.records


def test_enabled_follows_logger_level():
    log = logging.getLogger("fastmatch.test.timing_level")
    log.setLevel(logging.DEBUG)
    try:
        assert SplitTimer("x", log).enabled
    finally:
        log.setLevel(logging.NOTSET)
