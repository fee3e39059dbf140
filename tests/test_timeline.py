import logging

from sublingo.timeline import TimelineRepairer


def test_gaps_are_closed_and_last_cue_untouched(make_cue):
    cues = [
        make_cue(1, 1000, 2000, "a"),
        make_cue(2, 3000, 3500, "b"),
        make_cue(3, 5000, 6000, "c"),
    ]

    TimelineRepairer().repair(cues)

    assert [cue.end_time for cue in cues] == [3000, 5000, 6000]
    for current, following in zip(cues, cues[1:]):
        assert current.end_time == following.start_time


def test_overlaps_are_trimmed_to_next_start(make_cue):
    cues = [make_cue(1, 1000, 4000, "a"), make_cue(2, 2000, 3000, "b")]

    TimelineRepairer().repair(cues)

    assert cues[0].end_time == 2000


def test_out_of_order_cues_are_left_alone_and_reported(make_cue, caplog):
    cues = [
        make_cue(1, 5000, 6000, "a"),
        make_cue(2, 4000, 4500, "b"),
        make_cue(3, 4000, 4800, "c"),
        make_cue(4, 7000, 8000, "d"),
    ]

    with caplog.at_level(logging.WARNING, logger="test.timeline"):
        TimelineRepairer(logger=logging.getLogger("test.timeline")).repair(cues)

    assert [cue.end_time for cue in cues] == [6000, 4500, 7000, 8000]
    assert any("Timeline anomaly" in record.getMessage() for record in caplog.records)


def test_short_sequences_are_ignored(make_cue):
    single = [make_cue(1, 1000, 2000, "a")]

    TimelineRepairer().repair(single)
    TimelineRepairer().repair([])

    assert single[0].end_time == 2000


def test_inverted_cue_is_reported_after_repair(make_cue, caplog):
    cues = [make_cue(1, 5000, 1000, "a")]

    with caplog.at_level(logging.WARNING, logger="test.timeline"):
        TimelineRepairer(logger=logging.getLogger("test.timeline")).repair(cues)

    assert cues[0].end_time == 1000
    assert "Cue 1 ends before it starts (5000ms -> 1000ms)" in [record.getMessage() for record in caplog.records]


def test_inverted_cue_before_later_cue_is_reported(make_cue, caplog):
    cues = [make_cue(1, 0, 500, "a"), make_cue(2, 5000, 1000, "b")]

    with caplog.at_level(logging.WARNING, logger="test.timeline"):
        TimelineRepairer(logger=logging.getLogger("test.timeline")).repair(cues)

    assert cues[0].end_time == 5000
    assert any("Cue 2 ends before it starts" in record.getMessage() for record in caplog.records)
