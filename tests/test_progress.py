import asyncio

from gaugelog.display.themes import DEFAULT_THEMESET


def test_enable_and_disable_are_idempotent(log, gauge) -> None:
    log.enable_progress()
    log.enable_progress()
    assert log.progress_enabled
    log.disable_progress()
    log.disable_progress()
    assert not log.progress_enabled
    assert gauge.names() == ["enable", "disable"]


def test_write_is_wrapped_by_hide_and_show(log, gauge, stream) -> None:
    log.enable_progress()
    log.info("fetch", "got it")

    assert gauge.names() == ["enable", "pulse", "hide", "show"]
    assert gauge.calls[1] == ("pulse", "fetch")
    assert gauge.shown()[-1] == {
        "subsection": "fetch",
        "logline": "info fetch got it",
        "completed": 0.0,
    }
    assert stream.getvalue() == "info fetch got it\n"


def test_filtered_record_still_pulses(log, gauge, stream) -> None:
    log.enable_progress()
    log.verbose("quiet", "below minimum")
    assert gauge.names() == ["enable", "pulse"]
    assert stream.getvalue() == ""


def test_no_gauge_traffic_while_disabled(log, gauge) -> None:
    log.info("", "a")
    log.show_progress("section", 0.5)
    assert gauge.calls == []


def test_show_values(log, gauge) -> None:
    log.enable_progress()
    log.show_progress("section", 0.25)
    assert gauge.shown()[-1] == {"section": "section", "completed": 0.25}

    log.warn("pfx", "first\nsecond")
    log.show_progress(completed=0)
    assert gauge.shown()[-1] == {
        "subsection": "pfx",
        "logline": "WARN pfx first",
        "completed": 0,
    }


def test_tracker_changes_redraw(log, gauge) -> None:
    log.enable_progress()
    item = log.new_item("download", todo=4)
    item.complete_work(1)

    assert gauge.shown()[-1] == {"section": "download", "completed": 0.25}

    log.disable_progress()
    item.complete_work(1)
    assert gauge.shown()[-1]["completed"] == 0.25


def test_pause_and_resume_replay_in_order(log, gauge, stream) -> None:
    log.enable_progress()
    log.pause()
    assert log.paused
    assert gauge.names()[-1] == "disable"

    for i in range(3):
        log.info("", f"queued {i}")
    assert stream.getvalue() == ""
    assert len(log.record) == 3

    log.resume()
    assert not log.paused
    assert stream.getvalue().splitlines() == ["info queued 0", "info queued 1", "info queued 2"]
    assert gauge.names()[-1] == "enable"
    assert log.progress_enabled


def test_enable_while_paused_is_ignored(log, gauge) -> None:
    log.pause()
    log.enable_progress()
    assert not log.progress_enabled
    log.resume()
    assert gauge.calls == []


def test_resume_without_pause_is_noop(log, stream) -> None:
    log.resume()
    log.info("", "direct")
    assert stream.getvalue() == "info direct\n"


def test_progress_display_context(log, gauge) -> None:
    with log.progress_display() as active:
        assert active is log
        assert log.progress_enabled
    assert not log.progress_enabled
    assert gauge.names() == ["enable", "disable"]


def test_clear_progress_when_disabled_runs_callback(log, gauge) -> None:
    calls = []
    log.clear_progress(lambda: calls.append("done"))
    assert calls == ["done"]
    assert gauge.calls == []


def test_clear_progress_when_enabled_hides(log, gauge) -> None:
    calls = []
    log.enable_progress()
    log.clear_progress(lambda: calls.append("done"))
    assert gauge.names()[-1] == "hide"
    assert calls == ["done"]


def test_clear_progress_callback_waits_for_next_loop_tick(log) -> None:
    calls = []

    async def main():
        log.clear_progress(lambda: calls.append("done"))
        assert calls == []
        await asyncio.sleep(0)
        assert calls == ["done"]

    asyncio.run(main())


def test_appearance_forwarded_to_gauge(log, gauge) -> None:
    template = ["[", {"type": "section"}, "]"]
    log.set_gauge_template(template)
    log.set_gauge_themeset(DEFAULT_THEMESET)
    assert ("set_template", template) in gauge.calls
    assert ("set_themeset", DEFAULT_THEMESET) in gauge.calls
