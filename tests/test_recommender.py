from services.recommender import PreferenceRecommender, preference_match
from conftest import ids


def test_no_preferences_is_catalog_order(catalog):
    rec = PreferenceRecommender(catalog)
    assert ids(rec.recommend([])) == [1, 2, 3, 4]
    assert ids(rec.recommend(None)) == [1, 2, 3, 4]


def test_no_preferences_excludes_product(catalog):
    rec = PreferenceRecommender(catalog)
    assert ids(rec.recommend([], exclude_product_id=1)) == [2, 3, 4, 5]
    assert ids(rec.recommend([], exclude_product_id=999)) == [1, 2, 3, 4]


def test_matching_products_first_in_catalog_order(catalog):
    rec = PreferenceRecommender(catalog)
    assert ids(rec.recommend(["electronics"])) == [1, 2, 5, 3]
    assert ids(rec.recommend(["electronics", "books"])) == [1, 2, 5, 3]


def test_tag_preferences(catalog):
    rec = PreferenceRecommender(catalog)
    assert ids(rec.recommend(["health"])) == [2, 6, 1, 3]
    assert ids(rec.recommend(["organic"], exclude_product_id=6)) == [3, 1, 2, 4]


def test_preference_is_substring_match(catalog):
    assert preference_match(catalog.get(5), ["charg"]) == 1
    assert preference_match(catalog.get(5), ["Charging"]) == 0
    assert preference_match(catalog.get(4), ["books"]) == 0


def test_full_ranking_groups_matches_first(catalog):
    rec = PreferenceRecommender(catalog)
    ranked = rec.recommend(["electronics"], k=len(catalog))
    flags = [preference_match(p, ["electronics"]) for p in ranked]
    assert flags == sorted(flags, reverse=True)
    assert ids(ranked) == [1, 2, 5, 3, 4, 6]


def test_at_most_four(catalog):
    rec = PreferenceRecommender(catalog)
    assert len(rec.recommend(["o"])) == 4


def test_frequently_bought_with(catalog):
    rec = PreferenceRecommender(catalog)
    assert ids(rec.frequently_bought_with(1)) == [2, 5]
    assert ids(rec.frequently_bought_with(5)) == [1, 2]
    assert ids(rec.frequently_bought_with(3)) == [6]
    assert rec.frequently_bought_with(4) == []
    assert rec.frequently_bought_with(12345) == []
