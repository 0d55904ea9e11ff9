# ABOUTME: Contract tests for the tide extremes adapter and its per-location cache.
# ABOUTME: Validates parsing, the next-two selection, cache lifetime and the empty result on failure.

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from helpers import NOW, json_response, make_deps, mock_client, tide_payload
from weatherdash.deps import TideCache
from weatherdash.models import Tide
from weatherdash.tides import fetch_tides, next_tides, parse_tides


class TestParseTides:
    def test_sorted_and_lowercased(self):
        """parse_tides orders extremes by time and normalizes the type.

        Implementation: Parses the canned payload, which is out of order with one "High".
        Passing implies: Callers can slice the result without sorting.
        """
        tides = parse_tides(tide_payload())

        assert [t.time.hour for t in tides] == [8, 14, 20, 2]
        assert [t.type for t in tides] == ["low", "high", "low", "high"]
        assert tides[1].height == 0.92
        assert tides[1].time.tzinfo is not None

    def test_non_object_raises(self):
        """A response that is not an object is a parse error.

        Implementation: Parses a JSON list.
        Passing implies: The adapter turns it into an empty result.
        """
        with pytest.raises(ValueError):
            parse_tides([])

    def test_naive_provider_times_are_utc(self):
        """Extremes without an offset are read as UTC.

        Implementation: Parses a row whose time has no offset.
        Passing implies: Comparisons against an aware now never fail.
        """
        tides = parse_tides({"data": [{"time": "2025-06-15T14:25:00", "type": "high", "height": 1}]})

        assert tides[0].time == datetime(2025, 6, 15, 14, 25, tzinfo=timezone.utc)


class TestNextTides:
    def test_next_two_after_now(self):
        """Only extremes at or after now are kept, at most two.

        Implementation: NOW is 10:30 UTC; the 08:10 low is already past.
        Passing implies: The dashboard shows the upcoming high and low.
        """
        upcoming = next_tides(parse_tides(tide_payload()), NOW)

        assert [(t.type, t.time.hour) for t in upcoming] == [("high", 14), ("low", 20)]


class TestTideCache:
    def test_entry_expires_after_ttl(self):
        """Entries are served until the TTL has passed.

        Implementation: Stores one tide and reads it before and after a one hour TTL.
        Passing implies: Stale tide data is refetched.
        """
        cache = TideCache()
        tides = (Tide(time=NOW, type="high", height=1.0),)
        cache.put(52.37, 4.89, NOW, tides)

        assert cache.get(52.37, 4.89, NOW + timedelta(minutes=59), 3600) == tides
        assert cache.get(52.37, 4.89, NOW + timedelta(hours=1), 3600) is None

    def test_nearby_points_share_an_entry(self):
        """Coordinates are rounded to two decimals for the cache key.

        Implementation: Stores at 52.371 and reads at 52.369.
        Passing implies: Small GPS jitter does not defeat the cache.
        """
        cache = TideCache()
        cache.put(52.371, 4.891, NOW, ())

        assert cache.get(52.369, 4.889, NOW, 3600) == ()
        assert cache.get(52.40, 4.89, NOW, 3600) is None


class TestFetchTides:
    @pytest.mark.asyncio
    async def test_without_key_skips_request(self):
        """No tide key means no tides and no HTTP call.

        Implementation: Default test settings carry no tide key.
        Passing implies: Tides are optional configuration.
        """
        client = mock_client(get=json_response(tide_payload()))

        assert await fetch_tides(make_deps(client), 52.37, 4.89, NOW) == ()
        client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_sends_key_and_window(self):
        """fetch_tides authenticates with the key header and asks for a window from now.

        Implementation: Inspects the mock client's get call.
        Passing implies: The request matches the extremes endpoint's contract.
        """
        client = mock_client(get=json_response(tide_payload()))

        tides = await fetch_tides(make_deps(client, stormglass_api_key="sg"), 52.37, 4.89, NOW)

        assert [t.type for t in tides] == ["high", "low"]
        kwargs = client.get.call_args.kwargs
        assert kwargs["headers"] == {"Authorization": "sg"}
        assert kwargs["params"]["lat"] == 52.37
        assert kwargs["params"]["lng"] == 4.89
        assert datetime.fromisoformat(kwargs["params"]["start"]) == NOW

    @pytest.mark.asyncio
    async def test_cached_within_a_day(self):
        """A second lookup inside the cache lifetime reuses the stored extremes.

        Implementation: Fetches twice, six hours apart, then again after 24 hours.
        Passing implies: The tide provider is hit at most once a day per location.
        """
        client = mock_client(get=json_response(tide_payload()))
        deps = make_deps(client, stormglass_api_key="sg")

        await fetch_tides(deps, 52.37, 4.89, NOW)
        later = await fetch_tides(deps, 52.37, 4.89, NOW + timedelta(hours=6))

        assert client.get.call_count == 1
        assert [(t.type, t.time.hour) for t in later] == [("low", 20), ("high", 2)]

        await fetch_tides(deps, 52.37, 4.89, NOW + timedelta(hours=24))
        assert client.get.call_count == 2

    @pytest.mark.asyncio
    async def test_failure_is_empty_and_not_cached(self):
        """A failed lookup yields () and is retried on the next fetch.

        Implementation: Mocks a connection error, then a good response.
        Passing implies: Failures never poison the cache.
        """
        client = mock_client(get=httpx.ConnectError("down"))
        deps = make_deps(client, stormglass_api_key="sg")

        assert await fetch_tides(deps, 52.37, 4.89, NOW) == ()

        client.get.side_effect = None
        client.get.return_value = json_response(tide_payload())
        assert len(await fetch_tides(deps, 52.37, 4.89, NOW)) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [[], {"data": [{"time": "2025-06-15T14:25:00+00:00"}]}])
    async def test_unexpected_body_is_empty(self, body):
        """Bodies that are not extremes objects yield ().

        Implementation: Mocks a JSON list and an extreme without type or height.
        Passing implies: Parse errors stay inside the adapter.
        """
        client = mock_client(get=json_response(body))

        assert await fetch_tides(make_deps(client, stormglass_api_key="sg"), 52.37, 4.89, NOW) == ()
