import random
from collections import Counter
from itertools import permutations

import pytest

from flashdrill.domain.entities.session import SessionConfig
from flashdrill.domain.errors import (
    InsufficientCardsError,
    NoSectionsSelectedError,
    SessionCompleteError,
)
from flashdrill.domain.services import session_queue
from flashdrill.domain.value_objects.rating import Rating
from flashdrill.domain.value_objects.reinsertion_policy import ReinsertionPolicy
from tests.factories import make_card, make_deck


def test_available_sections_is_sorted_union_of_tags(mixed_deck):
    assert session_queue.available_sections(mixed_deck) == ["history", "math", "science"]


def test_filter_keeps_cards_sharing_any_selected_tag(mixed_deck):
    filtered = session_queue.filter_cards(mixed_deck, {"science"})

    assert [card.id for card in filtered] == ["26", "27"]


def test_fixed_session_draws_exactly_size_distinct_cards(rng):
    deck = make_deck(20, "math")

    state = session_queue.start(deck, SessionConfig.fixed({"math"}, 15), rng)

    assert len(state.queue) == 15
    assert len({card.id for card in state.queue}) == 15
    assert state.position == 0
    assert state.history == ()
    assert state.easy_count == 0


def test_fixed_session_with_too_few_cards_reports_counts(rng):
    deck = make_deck(5, "history")

    with pytest.raises(InsufficientCardsError) as exc_info:
        session_queue.start(deck, SessionConfig.fixed({"history"}, 15), rng)

    assert exc_info.value.requested == 15
    assert exc_info.value.available == 5
    assert "15 requested, 5 available" in str(exc_info.value)


@pytest.mark.parametrize("size", [20, 21, 22])
def test_fixed_start_fails_only_when_filtered_count_is_below_size(mixed_deck, rng, size):
    # 21 cards carry the math tag
    config = SessionConfig.fixed({"math"}, size)

    if size <= 21:
        assert len(session_queue.start(mixed_deck, config, rng).queue) == size
    else:
        with pytest.raises(InsufficientCardsError):
            session_queue.start(mixed_deck, config, rng)


def test_start_without_sections_fails(mixed_deck, rng):
    with pytest.raises(NoSectionsSelectedError):
        session_queue.start(mixed_deck, SessionConfig.unlimited(set()), rng)


def test_unlimited_queue_is_a_permutation_of_matching_cards(mixed_deck, rng):
    state = session_queue.start(mixed_deck, SessionConfig.unlimited({"history", "science"}), rng)

    expected = {c.id for c in session_queue.filter_cards(mixed_deck, {"history", "science"})}
    assert len(state.queue) == len(expected)
    assert {card.id for card in state.queue} == expected


def test_unlimited_session_over_no_matching_cards_is_already_complete(mixed_deck, rng):
    config = SessionConfig.unlimited({"art"})

    state = session_queue.start(mixed_deck, config, rng)

    assert state.queue == ()
    assert session_queue.is_complete(state, config)


def test_shuffle_does_not_touch_input(rng):
    cards = make_deck(10, "math")
    original = list(cards)

    session_queue.shuffle_cards(cards, rng)

    assert cards == original


def test_shuffle_is_uniform_over_permutations():
    cards = make_deck(3, "math")
    rng = random.Random(7)

    counts = Counter(
        tuple(card.id for card in session_queue.shuffle_cards(cards, rng)) for _ in range(6000)
    )

    assert set(counts) == {tuple(p) for p in permutations(["1", "2", "3"])}
    assert all(850 < n < 1150 for n in counts.values())


def test_rate_records_history_and_advances(rng):
    config = SessionConfig.fixed({"math"}, 3)
    state = session_queue.start(make_deck(3, "math"), config, rng)
    first = state.queue[0]

    rated = session_queue.rate(state, config, Rating.MEDIUM, rng)

    assert rated.position == 1
    assert rated.history[-1].card_id == first.id
    assert rated.history[-1].rating is Rating.MEDIUM
    assert rated.easy_count == 0
    # the original value is untouched
    assert state.position == 0
    assert state.history == ()


def test_fixed_mode_never_reinserts(rng):
    config = SessionConfig.fixed({"math"}, 5)
    state = session_queue.start(make_deck(10, "math"), config, rng)

    for rating in (Rating.HARD, Rating.MEDIUM, Rating.EASY):
        state = session_queue.rate(state, config, rating, rng)
        assert len(state.queue) == 5


def test_unlimited_hard_rating_in_short_queue_is_appended(rng):
    config = SessionConfig.unlimited({"math"})
    state = session_queue.start(make_deck(10, "math"), config, rng)
    first = state.queue[0]

    rated = session_queue.rate(state, config, Rating.HARD, rng)

    assert len(rated.queue) == 11
    assert rated.queue[10] == first
    assert rated.queue[:10] == state.queue


@pytest.mark.parametrize(
    "rating,low,high",
    [(Rating.HARD, 10, 15), (Rating.MEDIUM, 25, 30), (Rating.EASY, 45, 50)],
)
def test_unlimited_reinsertion_lands_within_rating_range(rating, low, high):
    config = SessionConfig.unlimited({"math"})

    for seed in range(25):
        rng = random.Random(seed)
        state = session_queue.start(make_deck(60, "math"), config, rng)
        rated_card = state.queue[0]

        rated = session_queue.rate(state, config, rating, rng)

        indices = [i for i, card in enumerate(rated.queue) if card == rated_card]
        assert len(rated.queue) == 61
        assert len(indices) == 2
        assert indices[0] == 0
        assert low <= indices[1] <= high


def test_reinsertion_is_relative_to_cursor():
    config = SessionConfig.unlimited({"math"})
    policy = ReinsertionPolicy(hard=(3, 3), medium=(4, 4), easy=(5, 5))
    rng = random.Random(0)
    state = session_queue.start(make_deck(20, "math"), config, rng)
    state = session_queue.rate(state, config, Rating.EASY, rng, policy)
    state = session_queue.rate(state, config, Rating.EASY, rng, policy)
    card = state.queue[2]

    rated = session_queue.rate(state, config, Rating.HARD, rng, policy)

    assert rated.queue[5] == card
    assert rated.position == 3


def test_reinsertion_index_equal_to_length_appends():
    config = SessionConfig.unlimited({"math"})
    policy = ReinsertionPolicy(hard=(4, 4))
    rng = random.Random(0)
    state = session_queue.start(make_deck(4, "math"), config, rng)

    rated = session_queue.rate(state, config, Rating.HARD, rng, policy)

    assert rated.queue[-1] == state.queue[0]
    assert len(rated.queue) == 5


def test_position_is_monotonic_and_bounded(rng):
    config = SessionConfig.unlimited({"math"})
    state = session_queue.start(make_deck(12, "math"), config, rng)
    ratings = [Rating.HARD, Rating.EASY, Rating.MEDIUM] * 10

    positions = []
    for rating in ratings:
        state = session_queue.rate(state, config, rating, rng)
        positions.append(state.position)
        assert state.position <= len(state.queue)

    assert positions == sorted(positions)
    assert positions[-1] == len(ratings)


def test_rate_on_complete_session_fails(rng):
    config = SessionConfig.fixed({"math"}, 1)
    state = session_queue.start(make_deck(3, "math"), config, rng)
    state = session_queue.rate(state, config, Rating.EASY, rng)

    assert session_queue.is_complete(state, config)
    with pytest.raises(SessionCompleteError):
        session_queue.rate(state, config, Rating.EASY, rng)


def test_fixed_progress_tracks_position_and_is_idempotent(rng):
    config = SessionConfig.fixed({"math"}, 4)
    state = session_queue.start(make_deck(4, "math"), config, rng)

    assert session_queue.progress(state, config) == 0.0
    state = session_queue.rate(state, config, Rating.HARD, rng)
    assert session_queue.progress(state, config) == 25.0
    assert session_queue.progress(state, config) == 25.0


def test_unlimited_progress_is_always_full(rng):
    config = SessionConfig.unlimited({"math"})
    state = session_queue.start(make_deck(4, "math"), config, rng)

    assert session_queue.progress(state, config) == 100.0
    state = session_queue.rate(state, config, Rating.HARD, rng)
    assert session_queue.progress(state, config) == 100.0


def test_fixed_session_all_easy_summary(rng):
    config = SessionConfig.fixed({"math"}, 3)
    state = session_queue.start(make_deck(3, "math"), config, rng)
    for _ in range(3):
        state = session_queue.rate(state, config, Rating.EASY, rng)

    summary = session_queue.complete(state, config)

    assert summary.easy_count == 3
    assert summary.total_considered == 3
    assert summary.message == "You marked 3 of 3 cards as Easy!"


def test_unlimited_summary_counts_ratings_given(rng):
    config = SessionConfig.unlimited({"math"})
    state = session_queue.start(make_deck(5, "math"), config, rng)
    ratings = [Rating.EASY, Rating.HARD, Rating.EASY, Rating.MEDIUM, Rating.HARD, Rating.EASY]
    for rating in ratings:
        state = session_queue.rate(state, config, rating, rng)

    summary = session_queue.complete(state, config)

    easy_in_history = sum(1 for record in state.history if record.rating is Rating.EASY)
    assert summary.easy_count == easy_in_history == 3
    assert summary.total_considered == len(state.history) == 6


def test_fixed_summary_uses_size_even_when_ended_early(rng):
    config = SessionConfig.fixed({"math"}, 3)
    state = session_queue.start(make_deck(3, "math"), config, rng)
    state = session_queue.rate(state, config, Rating.EASY, rng)

    assert session_queue.complete(state, config).total_considered == 3


def test_card_tags_intersection_is_used_for_filtering():
    card = make_card(1, "a", "b")

    assert card.has_any_tag({"b", "c"})
    assert not card.has_any_tag({"c"})
