# ABOUTME: Shared pytest fixtures for the weather dashboard test suite.
# ABOUTME: Wires the canned provider payloads from helpers into a URL-routed mock client.

import pytest

from helpers import (
    air_quality_payload,
    json_response,
    make_deps,
    marine_payload,
    mock_client,
    pollen_payload,
    reverse_payload,
    timeline_payload,
)


@pytest.fixture
def provider_routes():
    """URL fragment -> response mapping used by the routed client; tests may override entries."""
    return {
        "timeline": json_response(timeline_payload()),
        "reverse": json_response(reverse_payload()),
        "pollen": json_response(pollen_payload()),
        "marine": json_response(marine_payload()),
        "airquality": json_response(air_quality_payload()),
    }


@pytest.fixture
def routed_deps(provider_routes):
    """Deps whose client answers each provider URL from ``provider_routes``."""

    def route(url):
        for fragment, response in provider_routes.items():
            if fragment in url:
                if isinstance(response, Exception):
                    raise response
                return response
        raise AssertionError(f"Unexpected URL {url}")

    return make_deps(mock_client(get=route, post=route))
