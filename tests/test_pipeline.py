from thingstodo.services.pipeline import FilterPipeline


def _pipeline(records, scheduler, settled, **kwargs):
    return FilterPipeline(records, scheduler, on_settled=settled.append, debounce=0.3, **kwargs)


def test_keystrokes_coalesce_into_one_recompute(records, scheduler):
    settled = []
    pipeline = _pipeline(records, scheduler, settled)

    for text in ("t", "te", "tem", "temp", "templ", "temple"):
        pipeline.set_search_text(text)
        scheduler.advance(0.1)

    assert settled == []
    assert pipeline.is_settling

    scheduler.advance(0.3)
    assert pipeline.settle_count == 1
    assert [r.id for r in settled[0]] == ["act-1", "act-5"]
    assert not pipeline.is_settling


def test_rapid_location_changes_settle_on_last_value(records, scheduler):
    settled = []
    pipeline = _pipeline(records, scheduler, settled)

    pipeline.set_location("Bali")
    scheduler.advance(0.1)
    pipeline.set_location("Jakarta")
    scheduler.advance(0.3)

    assert pipeline.settle_count == 1
    assert pipeline.state.selected_location == "Jakarta"
    assert {r.city for r in settled[0]} == {"Jakarta"}


def test_superseded_timers_are_cancelled(records, scheduler):
    pipeline = _pipeline(records, scheduler, [])
    pipeline.set_search_text("a")
    pipeline.set_search_text("ab")
    pipeline.set_search_text("abc")
    assert len(scheduler.pending) == 1


def test_unchanged_value_does_not_schedule(records, scheduler):
    settled = []
    pipeline = _pipeline(records, scheduler, settled)
    pipeline.set_duration("Full day")
    scheduler.advance(0.3)

    pipeline.set_duration("Full day")
    assert not pipeline.is_settling
    scheduler.advance(1)
    assert pipeline.settle_count == 1


def test_settling_callback_runs_after_timer_is_pending(records, scheduler):
    observed = []
    pipeline = FilterPipeline(records, scheduler, on_settled=lambda _: None)
    pipeline._on_settling = lambda: observed.append(pipeline.is_settling)
    pipeline.set_search_text("temple")
    assert observed == [True]


def test_cancel_drops_pending_recompute(records, scheduler):
    settled = []
    pipeline = _pipeline(records, scheduler, settled)
    pipeline.set_search_text("temple")
    pipeline.cancel()
    scheduler.advance(1)
    assert settled == []
