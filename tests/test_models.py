from api.models import ApiEnvelope, Pagination, RmaRecord, SiteRef, UserRightsRecord, ref_id


def test_ref_id_shapes():
    assert ref_id({"_id": "abc"}) == "abc"
    assert ref_id({"id": 7}) == "7"
    assert ref_id({"value": "v-1", "label": "Site"}) == "v-1"
    assert ref_id("raw") == "raw"
    assert ref_id("") is None
    assert ref_id({}) is None


def test_envelope_keeps_extra_keys():
    envelope = ApiEnvelope.from_api({"success": True, "data": [1, 2], "typeCounts": {"all": 2}})
    assert envelope.data == [1, 2]
    assert envelope.extra == {"typeCounts": {"all": 2}}
    assert envelope.pagination is None


def test_envelope_pagination_fallback_total():
    envelope = ApiEnvelope.from_api({"success": True, "data": [1, 2, 3], "pagination": None})
    assert envelope.pagination == Pagination(page=1, pages=1, total=3)


def test_pagination_total_pages_alias():
    assert Pagination.from_api({"page": 2, "totalPages": 4, "total": 80}).pages == 4


def test_site_ref_from_raw_id():
    assert SiteRef.from_api("s-1") == SiteRef(id="s-1", name="")
    assert SiteRef.from_api({"value": "s-2", "label": "South"}).name == "South"


def test_rights_record_keeps_duplicate_site_entries():
    record = UserRightsRecord.from_api({
        "user": {"userId": "u-9", "fullName": "Dup"},
        "globalRights": None,
        "siteRights": [{"site": "s-1", "rights": ["VIEW_IP"]}, {"site": "s-1", "rights": ["VIEW_MAC"]}],
    })
    assert record.user.id == "u-9"
    assert record.global_rights == frozenset()
    assert len(record.site_rights) == 2
    assert record.rights_for_scope("s-1") == frozenset({"VIEW_IP"})
    assert record.rights_for_scope("global") == frozenset()


def test_rma_record_defaults():
    record = RmaRecord.from_api({"_id": "r-1", "status": "Requested", "ticketId": "t-1"})
    assert record.ticket_ref == "t-1"
    assert record.ticket_number == ""
    assert record.replacement_source == "RepairOnly"
    assert record.site.id is None
    assert record.timeline == ()
