"""Profile normalization against the provider payload variants we have seen."""
from leadfinder.services.profile_normalizer import (
    EMAIL_VALUE_KEYS,
    PHONE_VALUE_KEYS,
    build_summary,
    extract_string_list,
    normalize_profile,
)


class TestChannelExtraction:
    def test_phone_shaped_object_is_not_an_email(self):
        contact = normalize_profile(
            {"id": "1", "name": "A", "emails": [{"email": "a@b.com"}, "c@d.com", {"number": "x"}]}
        )
        assert contact.emails == ["a@b.com", "c@d.com"]

    def test_phone_keys_in_priority_order(self):
        items = [{"number": "1"}, {"value": "2"}, {"raw_number": "3"}, "4", {"number": "5", "value": "6"}]
        assert extract_string_list(items, PHONE_VALUE_KEYS) == ["1", "2", "3", "4", "5"]

    def test_drops_empty_and_non_string_entries(self):
        items = ["", "  ", None, 42, {"email": ""}, {"email": "ok@acme.io"}, ["nested"]]
        assert extract_string_list(items, EMAIL_VALUE_KEYS) == ["ok@acme.io"]

    def test_non_list_input(self):
        assert extract_string_list("a@b.com", EMAIL_VALUE_KEYS) == []
        assert extract_string_list(None, EMAIL_VALUE_KEYS) == []

    def test_legacy_lists_used_when_primary_missing(self):
        contact = normalize_profile(
            {
                "id": "1",
                "telesign_emails": [{"value": "legacy@acme.io"}],
                "telesign_phones": [{"raw_number": "+1 555 0100"}],
            }
        )
        assert contact.emails == ["legacy@acme.io"]
        assert contact.phones == ["+1 555 0100"]

    def test_primary_list_wins_over_legacy(self):
        contact = normalize_profile(
            {"id": "1", "emails": ["new@acme.io"], "telesign_emails": ["old@acme.io"]}
        )
        assert contact.emails == ["new@acme.io"]


class TestFieldFallbacks:
    def test_current_fields_preferred(self):
        contact = normalize_profile(
            {
                "id": "1",
                "current_title": "CTO",
                "title": "Engineer",
                "current_employer": "Acme",
                "employer": "OldCo",
                "linkedin_url": "https://linkedin.com/in/a",
                "li_url": "https://linkedin.com/in/b",
                "profile_pic": "https://img/a.png",
                "photo_url": "https://img/b.png",
            }
        )
        assert contact.title == "CTO"
        assert contact.company == "Acme"
        assert contact.linkedin_url == "https://linkedin.com/in/a"
        assert contact.profile_image_url == "https://img/a.png"

    def test_legacy_field_names(self):
        contact = normalize_profile(
            {
                "id": "1",
                "title": "Engineer",
                "employer": "OldCo",
                "li_url": "https://linkedin.com/in/b",
                "photo_url": "https://img/b.png",
            }
        )
        assert contact.title == "Engineer"
        assert contact.company == "OldCo"
        assert contact.linkedin_url == "https://linkedin.com/in/b"
        assert contact.profile_image_url == "https://img/b.png"

    def test_name_from_first_and_last(self):
        contact = normalize_profile({"id": "1", "first_name": "Ada", "last_name": "Lovelace"})
        assert contact.name == "Ada Lovelace"
        assert contact.first_name == "Ada"
        assert contact.last_name == "Lovelace"

    def test_location_from_parts(self):
        contact = normalize_profile({"id": "1", "city": "Austin", "region": "TX", "country": "US"})
        assert contact.location == "Austin, TX, US"

    def test_location_parts_skip_missing(self):
        contact = normalize_profile({"id": "1", "city": "Berlin", "country": "Germany"})
        assert contact.location == "Berlin, Germany"

    def test_relevance(self):
        assert normalize_profile({"id": "1"}).relevance_score == 90
        assert normalize_profile({"id": "1", "relevance": 72}).relevance_score == 72
        assert normalize_profile({"id": "1", "relevance": "n/a"}).relevance_score == 90

    def test_out_of_range_relevance_uses_default(self):
        assert normalize_profile({"id": "1", "name": "A", "relevance": 10**400}).relevance_score == 90
        assert normalize_profile({"id": "1", "relevance": float("inf")}).relevance_score == 90
        assert normalize_profile({"id": "1", "relevance": "nan"}).relevance_score == 90

    def test_empty_record(self):
        contact = normalize_profile({})
        assert contact.name == ""
        assert contact.emails == []
        assert contact.summary == "Professional"


class TestIdentity:
    def test_provider_id_kept(self):
        assert normalize_profile({"id": 12345}).id == "12345"

    def test_missing_id_synthesized_and_unique(self):
        a = normalize_profile({"name": "A"})
        b = normalize_profile({"name": "A"})
        assert a.id.startswith("rr-")
        assert a.id != b.id

    def test_idempotent(self):
        raw = {
            "id": 7,
            "first_name": "Ada",
            "last_name": "Lovelace",
            "current_title": "CTO",
            "current_employer": "Acme",
            "city": "London",
            "emails": [{"email": "ada@acme.io"}, "ada.l@acme.io"],
            "phones": [{"number": "+44 20 0000 0000"}],
            "relevance": 88,
        }
        assert normalize_profile(raw).model_dump_json() == normalize_profile(raw).model_dump_json()


class TestSummary:
    def test_full(self):
        assert build_summary("CTO", "Acme", "Austin", "Software") == "CTO at Acme in Austin | Software"

    def test_title_only_default(self):
        assert build_summary("", "", "", "") == "Professional"

    def test_partial(self):
        assert build_summary("Agent", "", "Dubai", "") == "Agent in Dubai"
