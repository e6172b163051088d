"""
Search, filter and sort engine shared by the list pages.

A ListQuery holds a free-text search term, named filter slots and a sort key.
Applying it to a sequence of records returns the matching records in sort
order. Sorting is stable, so records that compare equal keep their input
order.
"""

import unicodedata
from collections import namedtuple

# One sort step: key function plus direction
SortCriterion = namedtuple("SortCriterion", ["key", "reverse"])


def collation_key(value) -> tuple:
    """Case- and accent-insensitive sort key for display strings.

    Accented letters sort next to their base letter ("Émile" before "Zoe").
    Strings that fold to the same text are ordered by their raw form.
    """
    text = value or ""
    decomposed = unicodedata.normalize("NFKD", text)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    return folded, text


class EqualityFilter:
    """Slot that passes records whose extracted field equals the slot value."""

    def __init__(self, extractor):
        self.extractor = extractor

    def validate(self, value):
        return value

    def matches(self, record, value) -> bool:
        return self.extractor(record) == value


class DerivedFilter:
    """Slot whose values name boolean classifications of a record."""

    def __init__(self, predicates: dict):
        self.predicates = dict(predicates)

    def validate(self, value):
        if value not in self.predicates:
            raise ValueError(f"Unknown filter value {value!r}; expected one of {sorted(self.predicates)}")
        return value

    def matches(self, record, value) -> bool:
        return bool(self.predicates[value](record))


def _is_empty(value) -> bool:
    return value is None or value == ""


class ListQuery:
    """
    Search + filter slots + sort selection over a list of records.

    Args:
        search_fields: Callables extracting the strings the search box matches
        filters: Slot name -> EqualityFilter / DerivedFilter
        sorts: Sort key -> list of SortCriterion, applied first-to-last priority
        default_sort: Sort key restored by clear_all(); None keeps input order
    """

    def __init__(self, search_fields=(), filters: dict = None, sorts: dict = None,
                 default_sort: str = None):
        self.search_fields = list(search_fields)
        self.filters = dict(filters or {})
        self.sorts = dict(sorts or {})
        self.default_sort = default_sort
        self.search = ""
        self.values = {name: None for name in self.filters}
        self.sort_key = default_sort

    # ============================================
    # STATE
    # ============================================

    def set_search(self, term: str):
        self.search = term or ""

    def set_filter(self, name: str, value):
        if name not in self.filters:
            raise KeyError(f"Unknown filter slot: {name}")
        self.values[name] = None if _is_empty(value) else self.filters[name].validate(value)

    def set_sort(self, key: str):
        if key is not None and key not in self.sorts:
            raise ValueError(f"Unknown sort option: {key}")
        self.sort_key = key

    @property
    def active_filter_count(self) -> int:
        """Filter slots holding a value; the search box and sort don't count."""
        return sum(1 for value in self.values.values() if not _is_empty(value))

    def clear_all(self):
        self.search = ""
        self.values = {name: None for name in self.filters}
        self.sort_key = self.default_sort

    # ============================================
    # EVALUATION
    # ============================================

    def matches_search(self, record) -> bool:
        term = self.search.strip().lower()
        if not term:
            return True
        for extract in self.search_fields:
            value = extract(record)
            if value and term in str(value).lower():
                return True
        return False

    def matches(self, record) -> bool:
        if not self.matches_search(record):
            return False
        for name, value in self.values.items():
            if not _is_empty(value) and not self.filters[name].matches(record, value):
                return False
        return True

    def apply(self, records) -> list:
        result = [record for record in records if self.matches(record)]
        criteria = self.sorts.get(self.sort_key) or []
        # Stable sorts applied lowest-priority first give a multi-key ordering
        for criterion in reversed(criteria):
            result.sort(key=criterion.key, reverse=criterion.reverse)
        return result


# ============================================
# USER RIGHTS
# ============================================

def count_rights(record) -> int:
    """Global rights plus every site entry's rights; duplicate site entries count twice."""
    return len(record.global_rights) + sum(len(entry.rights) for entry in record.site_rights)


USER_RIGHTS_SORT_LABELS = {
    "name-asc": "Name A-Z",
    "name-desc": "Name Z-A",
    "role": "Role",
    "most-rights": "Most Rights",
    "least-rights": "Least Rights",
}

RIGHTS_FILTER_LABELS = {
    "has-rights": "Has Rights",
    "no-rights": "No Rights",
}


def user_rights_query() -> ListQuery:
    def name(record):
        return collation_key(record.user.full_name)

    return ListQuery(
        search_fields=[
            lambda r: r.user.full_name,
            lambda r: r.user.email,
            lambda r: r.user.role,
        ],
        filters={
            "role": EqualityFilter(lambda r: r.user.role),
            "rights": DerivedFilter({
                "has-rights": lambda r: count_rights(r) > 0,
                "no-rights": lambda r: count_rights(r) == 0,
            }),
        },
        sorts={
            "name-asc": [SortCriterion(name, False)],
            "name-desc": [SortCriterion(name, True)],
            "role": [SortCriterion(lambda r: collation_key(r.user.role), False)],
            "most-rights": [SortCriterion(count_rights, True)],
            "least-rights": [SortCriterion(count_rights, False)],
        },
        default_sort="name-asc",
    )


# ============================================
# USERS (raw dict rows from /users)
# ============================================

def users_query() -> ListQuery:
    return ListQuery(
        search_fields=[
            lambda u: u.get("fullName"),
            lambda u: u.get("email"),
            lambda u: u.get("username"),
        ],
        filters={
            "role": EqualityFilter(lambda u: u.get("role")),
            "active": DerivedFilter({
                "active": lambda u: u.get("isActive", True),
                "inactive": lambda u: not u.get("isActive", True),
            }),
        },
        sorts={
            "name-asc": [SortCriterion(lambda u: collation_key(u.get("fullName")), False)],
            "role": [
                SortCriterion(lambda u: collation_key(u.get("role")), False),
                SortCriterion(lambda u: collation_key(u.get("fullName")), False),
            ],
        },
        default_sort="name-asc",
    )


# ============================================
# RMA RECORDS & REPLACEMENT HISTORY
# ============================================

def rma_query() -> ListQuery:
    """Status and site slots mirror the server-side filters sent with the list request."""
    return ListQuery(
        search_fields=[
            lambda r: r.ticket_number,
            lambda r: r.original_asset.asset_code,
            lambda r: r.original_asset.ip_address,
            lambda r: r.site.name,
        ],
        filters={
            "status": EqualityFilter(lambda r: r.status),
            "site": EqualityFilter(lambda r: r.site.id),
        },
    )


def replacement_history_query() -> ListQuery:
    return ListQuery(
        search_fields=[
            lambda e: e.ticket_number,
            lambda e: e.old_details.serial_number,
            lambda e: e.new_details.serial_number,
            lambda e: e.performed_by,
        ],
        filters={"type": EqualityFilter(lambda e: e.type)},
    )
