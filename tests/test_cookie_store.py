import pytest

from app.core.constants import ATTRIBUTION_COOKIES
from app.core.exceptions import CookieWriteError

NINETY_DAYS = 90 * 24 * 60 * 60


class TestRead:
    def test_reads_all_six_values(self, make_store):
        store, _ = make_store(
            {"utmsource": "Google", "utmmedium": "cpc", "srd": "r1", "other": "x"}
        )
        record = store.read()

        assert record.source == "Google"
        assert record.medium == "cpc"
        assert record.srd == "r1"
        assert record.campaign is None

    def test_encoded_values_are_decoded(self, make_store):
        store, _ = make_store(
            {
                "utmterm": "3bhk%20flats",
                "utmcampaign": "%E0%A4%A6%E0%A4%BF%E0%A4%B5%E0%A4%BE%E0%A4%B2%E0%A5%80_offer",
            }
        )
        record = store.read()

        assert record.term == "3bhk flats"
        assert record.campaign == "दिवाली_offer"

    def test_blank_cookie_reads_as_absent(self, make_store):
        store, _ = make_store({"utmsource": "  ", "utmcampaign": ""})
        assert store.read().is_empty


class TestWrite:
    def test_writes_only_given_fields(self, make_store, written_cookies):
        store, response = make_store()
        store.write({"utmsource": "Google", "srd": "abc"}, NINETY_DAYS)

        assert set(written_cookies(response)) == {"utmsource", "srd"}

    def test_cookie_attributes_in_development(self, make_store, written_cookies):
        store, response = make_store()
        store.write({"utmcampaign": "summer_sale"}, NINETY_DAYS)

        header = written_cookies(response)["utmcampaign"]
        lowered = header.lower()
        assert header.startswith("utmcampaign=summer_sale")
        assert f"max-age={NINETY_DAYS}" in lowered
        assert "path=/" in lowered
        assert "samesite=lax" in lowered
        assert "httponly" not in lowered
        assert "secure" not in lowered
        assert "domain=" not in lowered

    def test_cookie_attributes_in_production(
        self, make_store, written_cookies, prod_settings
    ):
        store, response = make_store(settings=prod_settings)
        store.write({"utmsource": "Google"}, NINETY_DAYS)

        lowered = written_cookies(response)["utmsource"].lower()
        assert "domain=.example.com" in lowered
        assert "secure" in lowered
        assert "httponly" not in lowered

    def test_all_cookies_share_one_expiry(self, make_store, written_cookies):
        store, response = make_store()
        store.write(
            {"utmsource": "Google", "utmmedium": "cpc", "utmcampaign": "q4"},
            NINETY_DAYS,
        )

        expiries = {
            part.strip()
            for header in written_cookies(response).values()
            for part in header.split(";")
            if part.strip().lower().startswith("expires=")
        }
        assert len(expiries) == 1

    def test_values_are_percent_encoded(self, make_store, written_cookies):
        store, response = make_store()
        store.write(
            {"utmterm": "3bhk flats", "utmcampaign": "दिवाली_offer"}, NINETY_DAYS
        )

        headers = written_cookies(response)
        assert headers["utmterm"].startswith("utmterm=3bhk%20flats;")
        assert headers["utmcampaign"].startswith(
            "utmcampaign=%E0%A4%A6%E0%A4%BF%E0%A4%B5%E0%A4%BE%E0%A4%B2%E0%A5%80_offer;"
        )

    def test_empty_write_emits_nothing(self, make_store, written_cookies):
        store, response = make_store()
        store.write({}, NINETY_DAYS)

        assert written_cookies(response) == {}

    def test_write_after_commit_is_rejected(self, make_store, written_cookies):
        store, response = make_store()
        assert store.committed is False
        store.commit()
        assert store.committed is True

        with pytest.raises(CookieWriteError, match="already sent"):
            store.write({"utmsource": "Google"}, NINETY_DAYS)
        assert written_cookies(response) == {}

    def test_rejected_cookie_writes_nothing(self, make_store, written_cookies):
        """A failure part-way through staging leaves the response untouched."""
        store, response = make_store()

        with pytest.raises(CookieWriteError):
            store.write({"utmsource": "Google", "bad name;": "x"}, NINETY_DAYS)
        assert written_cookies(response) == {}


class TestClearAll:
    def test_deletes_all_six_cookies(self, make_store, written_cookies):
        store, response = make_store({"utmsource": "Google"})
        cleared = store.clear_all()

        headers = written_cookies(response)
        assert cleared == list(ATTRIBUTION_COOKIES)
        assert set(headers) == set(ATTRIBUTION_COOKIES)
        for header in headers.values():
            assert "max-age=0" in header.lower()

    def test_clear_after_commit_is_rejected(self, make_store):
        store, _ = make_store()
        store.commit()

        with pytest.raises(CookieWriteError):
            store.clear_all()
