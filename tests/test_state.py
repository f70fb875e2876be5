"""Pruebas de ListState y del filtro de búsqueda."""

from dataclasses import fields

from conftest import make_user

from gestor_usuarios.core.state import ListState, filter_users


class TestFilterUsers:
    def setup_method(self):
        self.users = [
            make_user(1, "Janet", "Weaver", "janet.weaver@reqres.in"),
            make_user(2, "George", "Bluth", "george.bluth@reqres.in"),
            make_user(3, "Tracey", "Ramos", "tracey.ramos@reqres.in"),
        ]

    def test_empty_term_returns_all_in_order(self):
        assert filter_users(self.users, "") == self.users

    def test_blank_term_returns_all(self):
        assert filter_users(self.users, "   ") == self.users

    def test_first_name_match(self):
        assert filter_users(self.users, "jan") == [self.users[0]]

    def test_last_name_match_is_case_insensitive(self):
        assert filter_users(self.users, "BLUTH") == [self.users[1]]

    def test_email_match(self):
        assert filter_users(self.users, "ramos@") == [self.users[2]]

    def test_result_preserves_order(self):
        result = filter_users(self.users, "e")
        assert [u.id for u in result] == [1, 2, 3]

    def test_no_match(self):
        assert filter_users(self.users, "zzz") == []


class TestListState:
    def test_initial_state(self):
        state = ListState()
        assert state.accumulated == []
        assert state.current_page == 1
        assert state.has_more is True
        assert state.filtered_view == []

    def test_fields_cover_only_list_concerns(self):
        assert {f.name for f in fields(ListState)} == {
            "accumulated",
            "current_page",
            "total_pages",
            "has_more",
            "search_term",
            "loading",
            "error",
        }

    def test_filtered_view_follows_search_term(self):
        state = ListState(accumulated=[make_user(1, "Janet"), make_user(2, "George")])
        state.search_term = "geo"
        assert [u.id for u in state.filtered_view] == [2]

        state.search_term = ""
        assert state.filtered_view == state.accumulated
