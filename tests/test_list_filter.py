import pytest

from api.models import ReplacementEvent
from services.list_filter import (
    DerivedFilter,
    EqualityFilter,
    ListQuery,
    count_rights,
    replacement_history_query,
    rma_query,
    user_rights_query,
    users_query,
)


def names(records):
    return [r.user.full_name for r in records]


class TestUserRightsScenario:
    def test_has_rights_filter(self, alice_and_bob):
        query = user_rights_query()
        query.set_filter("rights", "has-rights")
        assert names(query.apply(alice_and_bob)) == ["Bob"]
        assert query.active_filter_count == 1

    def test_no_rights_filter(self, alice_and_bob):
        query = user_rights_query()
        query.set_filter("rights", "no-rights")
        assert names(query.apply(alice_and_bob)) == ["Alice"]

    def test_most_rights_sort(self, alice_and_bob):
        query = user_rights_query()
        query.set_sort("most-rights")
        assert names(query.apply(alice_and_bob)) == ["Bob", "Alice"]

    def test_clear_all_restores_defaults(self, alice_and_bob):
        query = user_rights_query()
        query.set_search("bob")
        query.set_filter("rights", "has-rights")
        query.set_filter("role", "L1Engineer")
        query.set_sort("name-desc")
        query.clear_all()
        assert query.active_filter_count == 0
        assert query.sort_key == "name-asc"
        assert names(query.apply(list(reversed(alice_and_bob)))) == ["Alice", "Bob"]

    def test_search_is_case_insensitive_over_email_and_role(self, alice_and_bob):
        query = user_rights_query()
        query.set_search("ADMIN")
        assert names(query.apply(alice_and_bob)) == ["Alice"]
        query.set_search("bob@EXAMPLE")
        assert names(query.apply(alice_and_bob)) == ["Bob"]

    def test_accented_names_sort_with_their_base_letter(self, rights_record):
        records = [rights_record("u1", "Zoe"), rights_record("u2", "Émile"), rights_record("u3", "alice")]
        assert names(user_rights_query().apply(records)) == ["alice", "Émile", "Zoe"]

        query = user_rights_query()
        query.set_sort("name-desc")
        assert names(query.apply(records)) == ["Zoe", "Émile", "alice"]

    def test_role_filter(self, alice_and_bob):
        query = user_rights_query()
        query.set_filter("role", "Admin")
        assert names(query.apply(alice_and_bob)) == ["Alice"]


class TestListQuery:
    def test_empty_search_matches_everything(self, alice_and_bob):
        query = user_rights_query()
        query.set_search("   ")
        assert len(query.apply(alice_and_bob)) == 2

    def test_empty_filter_value_is_no_constraint(self, alice_and_bob):
        query = user_rights_query()
        query.set_filter("role", "")
        query.set_filter("rights", None)
        assert query.active_filter_count == 0
        assert len(query.apply(alice_and_bob)) == 2

    def test_unknown_slot(self):
        with pytest.raises(KeyError):
            user_rights_query().set_filter("colour", "red")

    def test_unknown_derived_value(self):
        with pytest.raises(ValueError):
            user_rights_query().set_filter("rights", "some-rights")

    def test_unknown_sort(self):
        with pytest.raises(ValueError):
            user_rights_query().set_sort("newest")

    def test_sort_is_stable(self, rights_record):
        records = [
            rights_record("u1", "Zed", global_rights=["VIEW_IP"]),
            rights_record("u2", "Amy", global_rights=["VIEW_MAC"]),
            rights_record("u3", "Max", global_rights=["VIEW_IP", "VIEW_MAC"]),
        ]
        query = user_rights_query()
        query.set_sort("least-rights")
        assert names(query.apply(records)) == ["Zed", "Amy", "Max"]

    def test_multi_criterion_sort(self):
        users = [
            {"fullName": "Cara", "role": "L1Engineer"},
            {"fullName": "Abe", "role": "L1Engineer"},
            {"fullName": "Bea", "role": "Admin"},
        ]
        query = users_query()
        query.set_sort("role")
        assert [u["fullName"] for u in query.apply(users)] == ["Bea", "Abe", "Cara"]

    def test_no_sort_keeps_input_order(self):
        query = ListQuery(
            search_fields=[lambda r: r["name"]],
            filters={
                "kind": EqualityFilter(lambda r: r["kind"]),
                "big": DerivedFilter({"yes": lambda r: r["size"] > 5}),
            },
        )
        rows = [
            {"name": "b", "kind": "x", "size": 9},
            {"name": "a", "kind": "x", "size": 7},
            {"name": "c", "kind": "y", "size": 8},
            {"name": "d", "kind": "x", "size": 1},
        ]
        query.set_filter("kind", "x")
        query.set_filter("big", "yes")
        assert [r["name"] for r in query.apply(rows)] == ["b", "a"]
        assert query.active_filter_count == 2


class TestCountRights:
    def test_duplicate_site_entries_count_twice(self, rights_record):
        record = rights_record("u1", "Dup", global_rights=["VIEW_IP"], site_rights=[
            {"site": "site-1", "rights": ["EDIT_TICKET", "VIEW_MAC"]},
            {"site": "site-1", "rights": ["EDIT_TICKET", "VIEW_MAC"]},
        ])
        assert count_rights(record) == 5

    def test_no_rights(self, rights_record):
        assert count_rights(rights_record("u1", "None")) == 0


class TestPreconfiguredQueries:
    def test_users_active_filter(self):
        users = [{"fullName": "A", "isActive": True}, {"fullName": "B", "isActive": False}, {"fullName": "C"}]
        query = users_query()
        query.set_filter("active", "inactive")
        assert [u["fullName"] for u in query.apply(users)] == ["B"]

    def test_rma_search_by_ip_and_site(self, rma):
        records = [rma("Requested", "RMA-1"), rma("Installed", "RMA-2", site_name="South Depot")]
        query = rma_query()
        query.set_search("south")
        assert [r.rma_number for r in query.apply(records)] == ["RMA-2"]
        query.set_search("10.0.0.5")
        assert len(query.apply(records)) == 2

    def test_replacement_history_search(self):
        events = [
            ReplacementEvent.from_api({"id": "1", "type": "Stock", "ticketNumber": "TKT-9",
                                       "oldDetails": {"serialNumber": "OLD-1"},
                                       "newDetails": {"serialNumber": "NEW-1"}, "performedBy": "Kim"}),
            ReplacementEvent.from_api({"id": "2", "type": "RMA", "ticketNumber": "TKT-10",
                                       "oldDetails": {"serialNumber": "OLD-2"},
                                       "newDetails": {"serialNumber": "NEW-2"}, "performedBy": "Lee"}),
        ]
        query = replacement_history_query()
        query.set_search("new-2")
        assert [e.id for e in query.apply(events)] == ["2"]
        query.set_search("")
        query.set_filter("type", "Stock")
        assert [e.id for e in query.apply(events)] == ["1"]
