from datetime import date, datetime, timezone

import pytest

from monhub.schemas.collaboration import Collaboration, CollaborationStatus
from monhub.utils.address_privacy import can_view_full_address, get_display_address
from monhub.utils.date_utils import (
    day_label,
    format_date,
    format_long_date,
    format_short_date,
    format_time_only,
)
from monhub.utils.formatting import (
    format_file_size,
    format_price,
    format_price_thousands,
    participant_name,
)
from monhub.utils.image_utils import (
    PLACEHOLDER_IMAGE,
    get_fallback_cdn_url,
    get_image_url,
    to_cdn_url,
)


def test_s3_url_rewritten_to_cdn():
    assert (
        to_cdn_url("https://bucket.s3.amazonaws.com/a/b.jpg")
        == "https://cdn.monhubimmo.fr/a/b.jpg"
    )


def test_regional_s3_url_rewritten_to_cdn():
    assert (
        to_cdn_url("https://monhubimmo.s3.eu-west-3.amazonaws.com/users/u1/avatar.png")
        == "https://cdn.monhubimmo.fr/users/u1/avatar.png"
    )


@pytest.mark.parametrize(
    "url",
    [
        "https://cdn.monhubimmo.fr/a/b.jpg",
        "https://d2of14y3b5uig5.cloudfront.net/a/b.jpg",
        "data:image/png;base64,AAAA",
        "https://example.com/photo.jpg",
        "",
        None,
    ],
)
def test_to_cdn_url_leaves_other_urls_unchanged(url):
    assert to_cdn_url(url) == url


def test_fallback_cdn_url():
    assert (
        get_fallback_cdn_url("https://cdn.monhubimmo.fr/a/b.jpg")
        == "https://d2of14y3b5uig5.cloudfront.net/a/b.jpg"
    )


def test_get_image_url_shapes():
    assert get_image_url(None) == PLACEHOLDER_IMAGE
    assert get_image_url({"url": "https://b.s3.amazonaws.com/x.jpg"}) == "https://cdn.monhubimmo.fr/x.jpg"
    legacy = {"large": "https://cdn.monhubimmo.fr/l.jpg", "thumbnail": "https://cdn.monhubimmo.fr/t.jpg"}
    assert get_image_url(legacy, "thumbnail") == "https://cdn.monhubimmo.fr/t.jpg"
    # Missing size falls back to large
    assert get_image_url(legacy, "medium") == "https://cdn.monhubimmo.fr/l.jpg"
    with pytest.raises(ValueError):
        get_image_url("x.jpg", "huge")


def test_address_visible_to_owner_and_accepted_collaborator():
    accepted = Collaboration.model_validate(
        {"_id": "c1", "postOwnerId": "owner", "collaboratorId": "guest", "status": "accepted"}
    )
    pending = accepted.model_copy(update={"status": CollaborationStatus.PENDING})
    assert can_view_full_address(True, [], "owner")
    assert can_view_full_address(False, [accepted], "guest")
    assert not can_view_full_address(False, [pending], "guest")
    assert not can_view_full_address(False, [accepted], "someone-else")
    assert not can_view_full_address(False, [accepted], None)


def test_display_address():
    assert get_display_address(True, "3 rue Vauban", "Saint-Malo", "35400") == "3 rue Vauban, 35400 Saint-Malo"
    assert get_display_address(False, "3 rue Vauban", "Saint-Malo", "35400") == "35400 Saint-Malo"
    assert get_display_address(False, None, None, None) == "Adresse non communiquée"


def test_french_dates():
    value = "2025-03-05T10:15:00Z"
    assert format_date(value) == "05/03/2025"
    assert format_short_date(value) == "05/03/25"
    assert format_long_date(value) == "5 mars 2025"
    assert format_date(None) == ""


def test_day_label():
    today = date(2025, 3, 5)
    assert day_label(datetime(2025, 3, 5, 9, tzinfo=timezone.utc), today) == "Aujourd'hui"
    assert day_label(datetime(2025, 3, 4, 22, tzinfo=timezone.utc), today) == "Hier"
    assert day_label(datetime(2025, 2, 1, tzinfo=timezone.utc), today) == "1 février 2025"


def test_dates_use_paris_time():
    late_utc = "2025-03-05T23:30:00Z"
    assert format_time_only(late_utc) == "00:30"
    assert format_date(late_utc) == "06/03/2025"
    assert day_label(late_utc, date(2025, 3, 6)) == "Aujourd'hui"
    # Summer time is UTC+2
    assert format_time_only("2025-07-01T08:00:00Z") == "10:00"


def test_prices_and_sizes():
    assert format_price(250000) == "250\u202f000\u00a0€"
    assert format_price(None) == ""
    assert format_price_thousands(250000) == "€250k"
    assert format_price_thousands(2500) == "€3k"
    assert format_price_thousands(500) == "€1k"
    assert format_price(1234.5) == "1\u202f235\u00a0€"
    assert format_file_size(512) == "512 B"
    assert format_file_size(2048) == "2.0 KB"
    assert format_file_size(3 * 1024 * 1024) == "3.0 MB"


def test_participant_name():
    assert participant_name({"_id": "u1", "firstName": "Marie", "lastName": "Durand"}) == "Marie Durand"
    assert participant_name({"_id": "u1", "email": "m@example.com"}) == "m@example.com"
    assert participant_name("u1") == "Inconnu"
    assert participant_name(None, "Unknown") == "Unknown"
