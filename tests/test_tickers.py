"""
Unit tests for insider_filings/sec/tickers.py and CIK padding.
"""
import pytest

from conftest import TICKERS_URL, FakeResponse
from insider_filings.errors import CompanyNotFound
from insider_filings.models import CompanyInfo
from insider_filings.sec.tickers import CompanyDirectory, match_companies, parse_company_tickers
from insider_filings.util.normalization import accession_nodash, cik_path_component, pad_cik


SNAPSHOT = {
    "0": {"cik_str": 50863, "ticker": "INTC", "title": "Intel Corp"},
    "1": {"cik_str": 320193, "ticker": "AAPL", "title": "Apple Inc."},
    "2": {"cik_str": 2488, "ticker": "AMD", "title": "ADVANCED MICRO DEVICES INC"},
    "3": {"cik_str": 1234567, "ticker": "INTL", "title": "International Widgets Co"},
}


# =============================================================================
# CIK padding
# =============================================================================


class TestPadCik:
    @pytest.mark.parametrize("value", [50863, "50863", "0000050863", " 50863 ", "CIK50863", 0, "9999999999"])
    def test_always_ten_digits_and_idempotent(self, value):
        once = pad_cik(value)
        assert len(once) == 10
        assert once.isdigit()
        assert pad_cik(once) == once

    def test_pads_integer(self):
        assert pad_cik(50863) == "0000050863"

    def test_rejects_no_digits(self):
        with pytest.raises(ValueError):
            pad_cik("abc")

    def test_rejects_too_long(self):
        with pytest.raises(ValueError):
            pad_cik("12345678901")

    def test_rejects_none(self):
        with pytest.raises(ValueError):
            pad_cik(None)

    def test_archive_path_drops_leading_zeros(self):
        assert cik_path_component("0000050863") == "50863"

    def test_accession_nodash(self):
        assert accession_nodash("0000050863-24-000012") == "000005086324000012"


# =============================================================================
# Snapshot parsing / matching
# =============================================================================


class TestParseCompanyTickers:
    def test_parses_and_pads(self):
        companies = parse_company_tickers(SNAPSHOT)
        assert companies[0] == CompanyInfo(cik="0000050863", ticker="INTC", company_name="Intel Corp")
        assert [c.ticker for c in companies] == ["INTC", "AAPL", "AMD", "INTL"]

    def test_skips_malformed_entries(self):
        data = {
            "0": "not a dict",
            "1": {"ticker": "NOCIK", "title": "Missing Cik"},
            "2": {"cik_str": "n/a", "ticker": "BAD", "title": "Bad Cik"},
            "3": {"cik_str": 1, "ticker": "OK", "title": "Fine"},
        }
        assert [c.ticker for c in parse_company_tickers(data)] == ["OK"]

    def test_empty_snapshot(self):
        assert parse_company_tickers({}) == []
        assert parse_company_tickers(None) == []


class TestMatchCompanies:
    def setup_method(self):
        self.companies = parse_company_tickers(SNAPSHOT)

    def test_exact_ticker_case_insensitive(self):
        assert [c.ticker for c in match_companies(self.companies, "intc")] == ["INTC"]

    def test_ticker_must_match_exactly(self):
        # "AAP" is a prefix of a ticker but neither a ticker nor part of a title
        assert match_companies(self.companies, "AAP") == []

    def test_title_substring_case_insensitive(self):
        assert [c.ticker for c in match_companies(self.companies, "micro dev")] == ["AMD"]

    def test_match_on_both_paths_returned_once(self):
        companies = [CompanyInfo(cik="0000000003", ticker="META", company_name="Meta Platforms")]
        assert match_companies(companies, "meta") == companies

    def test_ticker_and_title_paths_union(self):
        companies = [
            CompanyInfo(cik="0000000001", ticker="CORP", company_name="Alpha Inc"),
            CompanyInfo(cik="0000000002", ticker="BETA", company_name="Beta Corp"),
        ]
        assert [c.ticker for c in match_companies(companies, "corp")] == ["CORP", "BETA"]

    def test_blank_query_matches_every_title(self):
        assert match_companies(self.companies, "") == self.companies
        assert match_companies(self.companies, "  ") == self.companies


# =============================================================================
# CompanyDirectory
# =============================================================================


class TestCompanyDirectory:
    def test_resolve_intc(self, client, session):
        session.routes[TICKERS_URL] = FakeResponse(json_data={"0": {"cik_str": 50863, "ticker": "INTC", "title": "Intel Corp"}})
        result = CompanyDirectory(client).resolve("INTC")
        assert result == [CompanyInfo(cik="0000050863", ticker="INTC", company_name="Intel Corp")]

    def test_fetches_snapshot_from_www_host(self, client, session):
        session.routes[TICKERS_URL] = FakeResponse(json_data=SNAPSHOT)
        CompanyDirectory(client).resolve("apple")
        assert session.calls[0]["url"] == TICKERS_URL
        assert session.calls[0]["headers"]["Host"] == "www.sec.gov"

    def test_no_cache_between_calls(self, client, session):
        session.routes[TICKERS_URL] = FakeResponse(json_data=SNAPSHOT)
        d = CompanyDirectory(client)
        d.resolve("INTC")
        d.resolve("AAPL")
        assert len(session.calls) == 2

    def test_no_match_raises_not_found(self, client, session):
        session.routes[TICKERS_URL] = FakeResponse(json_data=SNAPSHOT)
        with pytest.raises(CompanyNotFound) as exc:
            CompanyDirectory(client).resolve("ZZZZ")
        assert 'No companies found matching "ZZZZ"' in str(exc.value)

    def test_blank_query_returns_whole_snapshot(self, client, session):
        session.routes[TICKERS_URL] = FakeResponse(json_data=SNAPSHOT)
        result = CompanyDirectory(client).resolve("")
        assert [c.ticker for c in result] == ["INTC", "AAPL", "AMD", "INTL"]

    def test_blank_query_on_empty_snapshot_is_not_found(self, client, session):
        session.routes[TICKERS_URL] = FakeResponse(json_data={})
        with pytest.raises(CompanyNotFound):
            CompanyDirectory(client).resolve("")
