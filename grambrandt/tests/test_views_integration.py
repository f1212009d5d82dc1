"""
Integration tests for the feed pages and the JSON API.

Tests the full flow: view → feed controller → AIC search client, with the
HTTP session to the AIC API mocked.
"""

from unittest.mock import patch

import pytest
import requests
from django.test import Client
from django.urls import reverse

from grambrandt.src.global_services import get_feed_controller
from grambrandt.src.services.aic_search_client import AICSearchClient
from grambrandt.tests.factories import make_http_session, make_item, make_payload


@pytest.fixture
def mock_http_session():
    """
    Feed every session's controller from a mocked AIC API. Tests fill in
    http_session.post.side_effect.
    """
    http_session = make_http_session()
    search_client = AICSearchClient(http_session=http_session)
    with patch(
        "grambrandt.src.global_services.get_search_client",
        return_value=search_client,
    ):
        yield http_session


def set_payloads(http_session, *payloads):
    http_session.post.side_effect = make_http_session(*payloads).post.side_effect


def excluded_ids_in_call(http_session, call_index):
    body = http_session.post.call_args_list[call_index].kwargs["json"]
    return body["query"]["bool"]["must_not"][0]["terms"]["id"]


# ---- Home ----


@pytest.mark.integration
def test_home_renders_shell_with_initial_loader(mock_http_session):
    client = Client()
    response = client.get(reverse("home"))

    assert response.status_code == 200
    assert response.context["is_initial_load"] is True
    assert reverse("get-posts") in response.content.decode()
    mock_http_session.post.assert_not_called()


# ---- Posts ----


@pytest.mark.integration
def test_first_posts_request_is_initial_load(mock_http_session):
    set_payloads(mock_http_session, make_payload([make_item(i) for i in range(12)]))

    client = Client()
    response = client.get(reverse("get-posts"))

    assert response.status_code == 200
    assert len(response.context["posts"]) == 12
    assert response.context["is_initial_load"] is True
    assert response.context["show_sentinel"] is True
    content = response.content.decode()
    assert 'class="sentinel"' in content
    assert "vvgogh" in content


@pytest.mark.integration
def test_scrolling_loads_more_without_repeats(mock_http_session):
    set_payloads(
        mock_http_session,
        make_payload([make_item(1), make_item(2)]),
        make_payload([make_item(3)]),
    )

    client = Client()
    client.get(reverse("get-posts"))
    response = client.get(reverse("get-posts"))

    assert response.context["is_initial_load"] is False
    assert [post["id"] for post in response.context["posts"]] == [3]
    assert excluded_ids_in_call(mock_http_session, 1) == [1, 2]


@pytest.mark.integration
def test_too_tall_artworks_are_not_rendered(mock_http_session):
    set_payloads(
        mock_http_session,
        make_payload(
            [
                make_item(1),
                make_item(2, dimensions_detail=[{"height": 300, "width": 100}]),
            ]
        ),
    )

    client = Client()
    response = client.get(reverse("get-posts"))

    assert [post["id"] for post in response.context["posts"]] == [1]


@pytest.mark.integration
def test_failed_batch_shows_message_and_keeps_sentinel(mock_http_session):
    http_session = make_http_session(make_payload([make_item(1)]))
    http_session.responses[0].raise_for_status.side_effect = requests.HTTPError(
        "500 Server Error"
    )
    mock_http_session.post.side_effect = http_session.post.side_effect

    client = Client()
    response = client.get(reverse("get-posts"))

    assert response.status_code == 200
    assert response.context["posts"] == []
    assert response.context["error_message"]
    assert response.context["show_sentinel"] is True


@pytest.mark.integration
def test_scroll_while_a_batch_is_loading_retries(mock_http_session):
    set_payloads(mock_http_session, make_payload([make_item(1)]))

    client = Client()
    client.get(reverse("get-posts"))
    # Another tab of the same session has a batch in flight
    controller = get_feed_controller(client.session.session_key)
    controller.signal.disarm()

    response = client.get(reverse("get-posts"))

    assert response.context["is_busy"] is True
    assert response.context["posts"] == []
    content = response.content.decode()
    assert f'hx-get="{reverse("get-posts")}"' in content
    assert 'hx-trigger="load delay:500ms"' in content
    assert mock_http_session.post.call_count == 1


@pytest.mark.integration
def test_sessions_have_separate_feeds(mock_http_session):
    set_payloads(
        mock_http_session,
        make_payload([make_item(1)]),
        make_payload([make_item(2)]),
    )

    Client().get(reverse("get-posts"))
    response = Client().get(reverse("get-posts"))

    assert response.context["is_initial_load"] is True
    assert excluded_ids_in_call(mock_http_session, 1) == []


# ---- Config ----


@pytest.mark.integration
def test_config_modal_shows_current_filters(mock_http_session):
    client = Client()
    response = client.get(reverse("config"))

    assert response.status_code == 200
    checked = {t["id"]: t["checked"] for t in response.context["artwork_types"]}
    assert checked == {1: True, 2: False}
    assert response.context["show_obscure"] is False


@pytest.mark.integration
def test_config_change_resets_feed(mock_http_session):
    set_payloads(
        mock_http_session,
        make_payload([make_item(1), make_item(2)]),
        make_payload([make_item(1)]),
    )

    client = Client()
    client.get(reverse("get-posts"))
    response = client.post(
        reverse("config"),
        {
            "artwork_types": ["1", "2"],
            "show_obscure": "on",
            "require_short_description": "on",
            "min_year": "1850",
            "max_year": "",
        },
    )

    assert response.status_code == 302
    assert response.url == reverse("home")

    response = client.get(reverse("get-posts"))
    assert response.context["is_initial_load"] is True
    body = mock_http_session.post.call_args_list[1].kwargs["json"]
    must = body["query"]["bool"]["must"]
    assert {"term": {"has_not_been_viewed_much": True}} in must
    assert {"terms": {"artwork_type_id": [1, 2]}} in must
    assert {"range": {"date_start": {"gte": 1850}}} in must
    assert excluded_ids_in_call(mock_http_session, 1) == []


@pytest.mark.integration
def test_config_ignores_unknown_types_and_bad_years(mock_http_session):
    client = Client()
    client.post(
        reverse("config"),
        {"artwork_types": ["1", "99", "x"], "min_year": "soon"},
    )

    response = client.get("/api/config/")
    data = response.json()
    assert data["artwork_type_ids"] == [1]
    assert data["min_year"] is None
    assert data["require_short_description"] is False


# ---- Details ----


@pytest.mark.integration
def test_details_modal_links(mock_http_session):
    client = Client()
    response = client.get(
        reverse("details"), {"title": "The Bedroom", "artist": "Vincent van Gogh"}
    )

    assert response.status_code == 200
    assert "perplexity.ai/search" in response.context["work_url"]
    assert "The%20Bedroom" in response.context["work_url"]
    assert "Ask Perplexity about this artist" in response.content.decode()


# ---- JSON API ----


@pytest.mark.integration
def test_api_artwork_types():
    response = Client().get("/api/artwork-types/")

    assert response.status_code == 200
    assert response.json()["artwork_types"] == [
        {"id": 1, "slug": "painting"},
        {"id": 2, "slug": "photograph"},
    ]


@pytest.mark.integration
def test_api_feed_returns_batches(mock_http_session):
    set_payloads(
        mock_http_session,
        make_payload([make_item(1), make_item(2, place_of_origin=None)]),
        make_payload([make_item(3)]),
    )

    client = Client()
    first = client.get("/api/feed/").json()
    second = client.get("/api/feed/").json()

    assert first["is_initial_load"] is True
    assert first["error"] is None
    assert sorted(r["id"] for r in first["results"]) == [1, 2]
    record_2 = next(r for r in first["results"] if r["id"] == 2)
    assert record_2["place_of_origin"] == ""
    assert record_2["detail_url"] == "http://www.artic.edu/artworks/2"
    assert second["is_initial_load"] is False
    assert second["seen_count"] == 3


@pytest.mark.integration
def test_api_feed_rate_limited(mock_http_session):
    client = Client()
    with patch("django_ratelimit.decorators.is_ratelimited", return_value=True):
        response = client.get("/api/feed/")

    assert response.status_code == 429
    assert "too many" in response.json()["error"].lower()
    mock_http_session.post.assert_not_called()
