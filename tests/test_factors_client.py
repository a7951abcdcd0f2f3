"""HTTP factors/trends adapters against a mocked transport."""

import httpx
import pytest

from homescout.core.cache import Cache
from homescout.data.base import InvalidMetric, MetricsRecord, PlaceNotFound
from homescout.data.factors_client import HttpFactors, project_payload
from homescout.data.trends_client import HttpTrends, SeededTrends
from homescout.services.resolver import PlaceResolver


def _payload(**context_overrides):
    context = {
        "income": {"median_household": 98000},
        "demographics": {"race_ethnicity": {"White": 41.2, "Hispanic": 35.0, "Asian": 23.8}},
    }
    context.update(context_overrides)
    return {
        "location": {"lat": 33.87, "lon": -117.92, "formatted_address": "Fullerton, CA, USA"},
        "scores": {"school": {"value": 7.8}, "crime": {"index": 42}, "walk": {"walkScore": 68}},
        "context": context,
    }


class FakeTrends:
    def __init__(self, value=6.2):
        self.value = value

    def growth_5y(self, key):
        return self.value


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_projects_payload_into_record():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=_payload())

    provider = HttpFactors("http://factors.test/", trends=FakeTrends(), client=_client(handler), cache=Cache(ttl=60))
    record = provider.lookup("Fullerton, CA", "Fullerton", "CA")

    assert isinstance(record, MetricsRecord)
    assert (record.walkability, record.school_score, record.crime_index) == (68, 7.8, 42)
    assert record.median_income == 98000
    assert record.price_growth_5y == 6.2
    assert [d.group for d in record.demographics] == ["White", "Hispanic", "Asian"]
    assert calls[0].url.path == "/factors"
    assert calls[0].url.params["city"] == "Fullerton"
    assert calls[0].url.params["state"] == "CA"


def test_records_are_cached_per_key():
    hits = []

    def handler(request):
        hits.append(request)
        return httpx.Response(200, json=_payload())

    provider = HttpFactors("http://factors.test", trends=FakeTrends(), client=_client(handler), cache=Cache(ttl=60))
    assert provider.lookup("Fullerton, CA", "Fullerton", "CA") == provider.lookup("Fullerton, CA", "Fullerton", "CA")
    assert len(hits) == 1


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(404),
        httpx.Response(404, json={"error": {"code": "ADDRESS_NOT_FOUND"}}),
        httpx.Response(200, json={"error": {"code": "ADDRESS_NOT_FOUND", "message": "no match"}}),
        httpx.Response(422, json={"error": "ADDRESS_NOT_FOUND"}),
    ],
)
def test_address_not_found_becomes_place_not_found(response):
    provider = HttpFactors("http://factors.test", trends=FakeTrends(), client=_client(lambda r: response), cache=Cache(ttl=60))
    resolver = PlaceResolver(provider, normalize_keys=False)
    assert resolver.resolve("Nowhere", "ZZ") == PlaceNotFound("Nowhere, ZZ")


def test_missing_trend_means_not_found():
    provider = HttpFactors("http://factors.test", trends=FakeTrends(None),
                           client=_client(lambda r: httpx.Response(200, json=_payload())), cache=Cache(ttl=60))
    assert provider.lookup("Fullerton, CA", "Fullerton", "CA") is None


def test_upstream_failure_propagates():
    provider = HttpFactors("http://factors.test", trends=FakeTrends(),
                           client=_client(lambda r: httpx.Response(500, text="boom")), cache=Cache(ttl=60))
    with pytest.raises(httpx.HTTPStatusError):
        provider.lookup("Fullerton, CA", "Fullerton", "CA")


def test_missing_field_is_invalid_metric():
    payload = _payload()
    del payload["scores"]["walk"]
    with pytest.raises(InvalidMetric) as exc:
        project_payload(payload, 6.2)
    assert exc.value.field_name == "scores.walk.walkScore"


def test_out_of_range_field_is_invalid_metric():
    payload = _payload()
    payload["scores"]["school"]["value"] = 14
    with pytest.raises(InvalidMetric):
        project_payload(payload, 6.2)


def test_demographics_list_and_age_fallback():
    listed = project_payload(_payload(demographics={"race_ethnicity": [{"group": "A", "share": 60}, {"group": "B", "share": 40}]}), 1.0)
    assert [(d.group, d.share) for d in listed.demographics] == [("A", 60), ("B", 40)]

    aged = project_payload(_payload(demographics={"age": {"Under 18": 20, "55+": 30}}), 1.0)
    assert [d.group for d in aged.demographics] == ["Under 18", "55+"]

    none = project_payload(_payload(demographics={}), 1.0)
    assert none.demographics == ()


def test_http_trends():
    def handler(request):
        assert request.url.params["place"] == "Fullerton, CA"
        return httpx.Response(200, json={"growth_5y": 6.2})

    assert HttpTrends("http://trends.test", client=_client(handler)).growth_5y("Fullerton, CA") == 6.2
    assert HttpTrends("http://trends.test", client=_client(lambda r: httpx.Response(404))).growth_5y("X, Y") is None


def test_seeded_trends():
    trends = SeededTrends()
    assert trends.growth_5y("Anaheim, CA") == 5.1
    assert trends.growth_5y("Nowhere, ZZ") is None


def test_city_containing_comma_is_sent_intact():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=_payload())

    provider = HttpFactors("http://factors.test", trends=FakeTrends(), client=_client(handler), cache=Cache(ttl=60))
    resolver = PlaceResolver(provider, normalize_keys=False)
    record = resolver.resolve("Washington, D.C.", "DC")

    assert isinstance(record, MetricsRecord)
    assert calls[0].url.params["city"] == "Washington, D.C."
    assert calls[0].url.params["state"] == "DC"


def test_quick_pick_key_with_comma_splits_on_last_separator():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=_payload())

    provider = HttpFactors("http://factors.test", trends=FakeTrends(), client=_client(handler), cache=Cache(ttl=60))
    PlaceResolver(provider, normalize_keys=False).resolve_key("Washington, D.C., DC")

    assert calls[0].url.params["city"] == "Washington, D.C."
    assert calls[0].url.params["state"] == "DC"
