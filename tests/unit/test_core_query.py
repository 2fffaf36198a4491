"""Unit tests for directory_console/core/query.py"""
import pytest

from directory_console.core.query import (
    ASC,
    DESC,
    SortSpec,
    derive_view,
    matches_filters,
    matches_search,
    sort_users,
)


def ids(users):
    return [user["id"] for user in users]


class TestSearch:
    def test_matches_name_even_when_email_does_not(self, user_factory):
        john = user_factory(1, "John Doe", username="jdoe", email="jd@corp.io")
        assert matches_search(john, "doe")

    def test_case_insensitive_and_trimmed(self, user_factory):
        john = user_factory(1, "John Doe", username="jdoe")
        assert matches_search(john, "  JOHN ")

    @pytest.mark.parametrize("query", ["sales", "jdoe", "john@example"])
    def test_any_field_matches(self, user_factory, query):
        john = user_factory(1, "John Doe", username="jdoe", email="john@example.com", department="Sales")
        assert matches_search(john, query)

    def test_no_field_matches(self, user_factory):
        john = user_factory(1, "John Doe", username="jdoe")
        assert not matches_search(john, "zzz")

    def test_blank_query_matches_everything(self, user_factory):
        assert matches_search(user_factory(1, "A B"), "   ")


class TestFilters:
    def test_first_and_last_name_split_on_first_space(self, user_factory):
        mary = user_factory(1, "Mary Ann Smith")
        assert matches_filters(mary, {"firstName": "mary", "lastName": "ann smith"})
        assert not matches_filters(mary, {"firstName": "ann"})

    def test_every_criterion_must_match(self, user_factory):
        john = user_factory(1, "John Doe", email="john@example.com", department="Sales")
        assert matches_filters(john, {"firstName": "jo", "department": "sal"})
        assert not matches_filters(john, {"firstName": "jo", "department": "eng"})

    def test_blank_and_unknown_criteria_do_not_constrain(self, user_factory):
        john = user_factory(1, "John Doe")
        assert matches_filters(john, {"firstName": "", "email": "   ", "phone": "555"})

    def test_missing_company_reads_as_empty_department(self, user_factory):
        user = user_factory(1, "John Doe")
        del user["company"]
        assert not matches_filters(user, {"department": "a"})


class TestSort:
    def test_default_is_id_ascending(self, user_factory):
        users = [user_factory(3, "C c"), user_factory(1, "A a"), user_factory(2, "B b")]
        assert ids(sort_users(users)) == [1, 2, 3]

    def test_id_compares_numerically(self, user_factory):
        users = [user_factory(10, "A a"), user_factory(9, "B b")]
        assert ids(sort_users(users, SortSpec("id", ASC))) == [9, 10]

    def test_strings_compare_case_insensitively(self, user_factory):
        users = [user_factory(1, "bob B"), user_factory(2, "Alice A"), user_factory(3, "carol C")]
        assert ids(sort_users(users, SortSpec("name", ASC))) == [2, 1, 3]
        assert ids(sort_users(users, SortSpec("name", DESC))) == [3, 1, 2]

    def test_sort_is_stable_in_both_directions(self, user_factory):
        users = [
            user_factory(1, "Same One", username="x1", email="same@example.com"),
            user_factory(2, "Other", username="x2", email="a@example.com"),
            user_factory(3, "Same Two", username="x3", email="SAME@example.com"),
        ]
        assert ids(sort_users(users, SortSpec("email", ASC))) == [2, 1, 3]
        assert ids(sort_users(users, SortSpec("email", DESC))) == [1, 3, 2]

    def test_generic_field_with_missing_values(self, user_factory):
        users = [
            user_factory(1, "A a", phone="555-2"),
            user_factory(2, "B b", phone=""),
            user_factory(3, "C c", phone="555-1"),
        ]
        assert ids(sort_users(users, SortSpec("phone", ASC))) == [3, 1, 2]

    def test_invalid_order_rejected(self):
        with pytest.raises(ValueError):
            SortSpec("id", "sideways")

    def test_toggled_twice_is_identity(self):
        spec = SortSpec("name", ASC)
        assert spec.toggled().order == DESC
        assert spec.toggled().toggled() == spec


class TestDeriveView:
    def test_output_is_subset_without_loss_or_duplication(self, sample_users):
        view = derive_view(sample_users, {"department": "eng"}, "", SortSpec("name", DESC))
        expected = [u for u in sample_users if "eng" in u["company"]["name"].lower()]
        assert sorted(ids(view)) == sorted(ids(expected))
        assert len(view) == len(set(ids(view)))

    def test_search_and_filters_combine_with_and(self, sample_users):
        view = derive_view(sample_users, {"firstName": "john"}, "doe")
        assert ids(view) == [1]

    def test_filter_then_search_gives_same_set(self, sample_users):
        filters = {"lastName": "doe"}
        by_view = derive_view(sample_users, filters, "example")
        manual = [u for u in sample_users if matches_filters(u, filters)]
        manual = [u for u in manual if matches_search(u, "example")]
        assert ids(by_view) == ids(sort_users(manual))

    def test_is_pure(self, sample_users):
        snapshot = [dict(u) for u in sample_users]
        first = derive_view(sample_users, {"email": "example"}, "j", SortSpec("username", DESC))
        second = derive_view(sample_users, {"email": "example"}, "j", SortSpec("username", DESC))
        assert first == second
        assert sample_users == snapshot
