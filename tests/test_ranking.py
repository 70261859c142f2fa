from festival.models import Artist
from festival.ranking import PopularityRanking


def _ranking(*popularities):
    ranking = PopularityRanking()
    artists = [Artist(f"artist-{value}", "pop", value) for value in popularities]
    for artist in artists:
        ranking.add(artist)
    return ranking, artists


def test_top_two_are_highest_popularity_first():
    ranking, _ = _ranking(95, 100, 80, 70)
    assert [artist.popularity for artist in ranking.top_n(2)] == [100, 95]


def test_top_n_is_descending_and_bounded_by_size():
    ranking, _ = _ranking(40, 90, 10, 60)
    top = ranking.top_n(10)
    assert [artist.popularity for artist in top] == [90, 60, 40, 10]
    assert len(ranking.top_n(3)) == 3


def test_non_positive_n_returns_nothing():
    ranking, _ = _ranking(50, 60)
    assert ranking.top_n(0) == []
    assert ranking.top_n(-3) == []


def test_top_n_does_not_consume_entries():
    ranking, _ = _ranking(50, 60, 70)
    first = ranking.top_n(3)
    second = ranking.top_n(3)
    assert first == second
    assert len(ranking) == 3


def test_ties_follow_insertion_order():
    ranking = PopularityRanking()
    first = Artist("First", "pop", 80)
    second = Artist("Second", "pop", 80)
    ranking.add(first)
    ranking.add(second)
    top = ranking.top_n(2)
    assert top[0] is first
    assert top[1] is second


def test_popularity_changes_after_insertion_do_not_rerank():
    ranking, artists = _ranking(95, 100, 80)
    low = artists[2]
    low.popularity = 500

    entries = ranking.entries(3)
    assert [entry.artist.name for entry in entries] == ["artist-100", "artist-95", "artist-80"]
    assert entries[2].popularity == 80


def test_each_add_is_its_own_entry():
    ranking = PopularityRanking()
    artist = Artist("Encore", "rock", 70)
    ranking.add(artist)
    ranking.add(artist)
    assert len(ranking) == 2
    assert ranking.top_n(5) == [artist, artist]
