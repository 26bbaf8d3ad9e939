"""Tests for watch time, seasonal highlight and community agreement."""
from datetime import date

from conftest import make_entry, make_raw_anime
from mal_wrapped.metrics import (
    community_agreement_percent,
    seasonal_highlight,
    total_units,
    total_watch_minutes,
)
from mal_wrapped.normalizer import EntryNormalizer

YEAR_2025 = range(2025, 2026)


def test_watch_time_counts_every_status_and_zero_units():
    entries = [
        make_entry(1, units_consumed=12, unit_length_minutes=24),
        make_entry(2, units_consumed=0, unit_length_minutes=24),
        make_entry(3, units_consumed=3, unit_length_minutes=23.5),
    ]
    assert total_watch_minutes(entries) == 288 + 0 + 70
    assert total_units(entries) == 15


def test_watch_time_is_linear_over_disjoint_lists():
    a = [make_entry(1, units_consumed=5, unit_length_minutes=23.7),
         make_entry(2, units_consumed=1, unit_length_minutes=0.4)]
    b = [make_entry(3, units_consumed=7, unit_length_minutes=11.3)]
    assert total_watch_minutes(a + b) == total_watch_minutes(a) + total_watch_minutes(b)


def test_watch_time_keeps_whole_minutes_from_second_durations():
    # 1209 s episodes are 20.15 min, and 100 * 20.15 is 2014.9999999999998 as a float
    raw = make_raw_anime(node={"average_episode_duration": 1209},
                         list_status={"num_episodes_watched": 100})
    entry = EntryNormalizer().normalize(raw)

    assert entry.watch_minutes == 2015
    assert total_watch_minutes([entry]) == 2015


def test_seasonal_highlight_picks_busiest_bucket():
    entries = [
        make_entry(1, finish_date=date(2025, 1, 5)),
        make_entry(2, finish_date=date(2025, 7, 1), community_mean=7.0),
        make_entry(3, finish_date=date(2025, 8, 1), community_mean=8.5),
        make_entry(4, finish_date=date(2025, 6, 20)),
    ]
    highlight = seasonal_highlight(entries, YEAR_2025)

    assert highlight.label == "Summer 2025"
    assert highlight.count == 3
    assert highlight.entry.id == 3


def test_seasonal_highlight_ties_go_to_first_seen_bucket_and_entry():
    entries = [
        make_entry(1, finish_date=date(2025, 10, 1), community_mean=8.0),
        make_entry(2, finish_date=date(2025, 4, 1), community_mean=9.0),
        make_entry(3, finish_date=date(2025, 11, 1), community_mean=8.0),
        make_entry(4, finish_date=date(2025, 5, 1), community_mean=9.0),
    ]
    highlight = seasonal_highlight(entries, YEAR_2025)

    assert highlight.label == "Fall 2025"
    assert highlight.entry.id == 1


def test_seasonal_highlight_representative_prefers_known_mean():
    entries = [
        make_entry(1, finish_date=date(2025, 4, 1)),
        make_entry(2, finish_date=date(2025, 4, 2), community_mean=6.1),
    ]
    assert seasonal_highlight(entries, YEAR_2025).entry.id == 2


def test_seasonal_highlight_none_without_finishes_in_window():
    entries = [make_entry(1), make_entry(2, finish_date=date(2023, 4, 1))]
    assert seasonal_highlight(entries, YEAR_2025) is None
    assert seasonal_highlight([], YEAR_2025) is None


def test_community_agreement():
    entries = [
        make_entry(1, user_score=9, community_mean=8.0),
        make_entry(2, user_score=5, community_mean=8.0),
        make_entry(3, user_score=7, community_mean=8.5),
        make_entry(4, user_score=0, community_mean=8.0),
        make_entry(5, user_score=9),
    ]
    # entries 1 and 3 agree (distance 1.0 and 1.5), entry 2 does not
    assert community_agreement_percent(entries, 1.5) == 67


def test_community_agreement_rounds_half_up():
    entries = [
        make_entry(1, user_score=8, community_mean=8.0),
        make_entry(2, user_score=2, community_mean=8.0),
        make_entry(3, user_score=2, community_mean=8.0),
        make_entry(4, user_score=2, community_mean=8.0),
        make_entry(5, user_score=2, community_mean=8.0),
        make_entry(6, user_score=2, community_mean=8.0),
        make_entry(7, user_score=2, community_mean=8.0),
        make_entry(8, user_score=2, community_mean=8.0),
    ]
    # 1/8 = 12.5%
    assert community_agreement_percent(entries, 1.5) == 13


def test_community_agreement_undefined_without_comparable_entries():
    assert community_agreement_percent([], 1.5) is None
    assert community_agreement_percent([make_entry(1, user_score=9)], 1.5) is None
    assert community_agreement_percent([make_entry(1, community_mean=7.0)], 1.5) is None
