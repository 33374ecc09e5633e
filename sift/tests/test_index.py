"""Unit tests for the weighted fuzzy index."""

from sift.core.index import FIELD_WEIGHTS, FuzzyIndex, field_distance
from sift.core.models import EntityType

from .helpers import make_action, make_inbox, make_waiting


class TestFieldDistance:
    """Test per-field distance scoring."""

    def test_exact_substring_is_zero(self):
        assert field_distance("report", "write quarterly report") == 0.0

    def test_unrelated_is_far(self):
        assert field_distance("zebra", "quarterly report") > 0.4

    def test_typo_is_close(self):
        assert field_distance("reprot", "write quarterly report") < 0.4

    def test_short_value_not_aligned_inside_pattern(self):
        # "re" is contained in "report" but should not count as a match
        assert field_distance("report", "re") > 0.4

    def test_empty_value(self):
        assert field_distance("report", "") == 1.0


class TestFuzzyIndex:
    """Test index search and scoring."""

    def test_weights(self):
        assert FIELD_WEIGHTS["title"] == 0.4
        assert FIELD_WEIGHTS["content"] == 0.4
        assert FIELD_WEIGHTS["waiting_for"] == 0.3
        assert FIELD_WEIGHTS["location"] == 0.1

    def test_hits_report_matched_fields(self):
        index = FuzzyIndex(EntityType.ACTION, [
            make_action("a", "Call plumber", tags=["home"]),
            make_action("b", "Email accountant"),
        ])
        hits = index.search("plumber")
        assert [h.item.id for h in hits] == ["a"]
        assert hits[0].matches == ["title"]
        assert 0 < hits[0].score < 0.01

    def test_more_fields_rank_better(self):
        index = FuzzyIndex(EntityType.ACTION, [
            make_action("title-only", "Budget review"),
            make_action("title-and-notes", "Budget review", notes="budget numbers"),
        ])
        hits = index.search("budget")
        assert [h.item.id for h in hits] == ["title-and-notes", "title-only"]

    def test_heavier_field_ranks_better(self):
        index = FuzzyIndex(EntityType.ACTION, [
            make_action("tag", "Something else", tags=["garden"]),
            make_action("title", "Garden cleanup"),
        ])
        hits = index.search("garden")
        assert [h.item.id for h in hits] == ["title", "tag"]
        assert hits[1].matches == ["tags"]

    def test_below_min_match_length(self):
        index = FuzzyIndex(EntityType.ACTION, [make_action("a", "a b c")])
        assert index.search("a") == []
        assert index.search("!!") == []

    def test_threshold_zero_requires_exact(self):
        index = FuzzyIndex(EntityType.ACTION, [make_action("a", "write report")], threshold=0.0)
        assert index.search("reprot") == []
        assert len(index.search("report")) == 1

    def test_case_insensitive(self):
        index = FuzzyIndex(EntityType.INBOX, [make_inbox("i", "Renew PASSPORT")])
        hits = index.search("passport")
        assert hits and hits[0].matches == ["content"]

    def test_waiting_for_is_indexed(self):
        index = FuzzyIndex(EntityType.WAITING, [make_waiting("w", "Invoice", waiting_for="Bob Smith")])
        hits = index.search("smith")
        assert hits[0].matches == ["waiting_for"]

    def test_len(self):
        assert len(FuzzyIndex(EntityType.PROJECT, [])) == 0
