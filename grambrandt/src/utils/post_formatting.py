"""Helpers that dress an ArtworkRecord up as a social media post."""

import json
import math
import random
import re
from datetime import date
from typing import Optional
from urllib.parse import quote

from grambrandt.src.constants.ui import (
    AIC_ARTIST_PAGE_URL,
    ASK_ABOUT_ARTIST,
    ASK_ABOUT_URL,
    ASK_ABOUT_WORK,
    AVATAR_LIGHTNESS,
    AVATAR_SATURATION,
    COMMENTS_RANGE,
    LIKES_RANGE,
    SHARES_RANGE,
)
from grambrandt.src.models import ArtworkRecord

_NAME_PUNCTUATION = re.compile(r"['\"\-()]")


def get_user_info(
    artist_name: Optional[str], rng: Optional[random.Random] = None
) -> dict[str, str]:
    """
    Turn an artist name into a username, avatar initials and avatar color.

    Example: "Vincent van Gogh" -> username "vvgogh", initials "VG"
    """
    rng = rng or random.Random()
    cleaned_name = _NAME_PUNCTUATION.sub("", artist_name or "").strip()
    words = cleaned_name.split()

    if not words:
        username = "Unknown"
        avatar_initials = "UN"
    elif len(words) == 1:
        username = words[0].lower()
        avatar_initials = words[0][:2].upper()
    else:
        last_name = words.pop().lower()
        initials = "".join(word[0].lower() for word in words)
        username = initials + last_name
        avatar_initials = (words[0][0] + last_name[0]).upper()

    hue = rng.randrange(360)
    background_color = f"hsl({hue}, {AVATAR_SATURATION}%, {AVATAR_LIGHTNESS}%)"

    return {
        "username": username,
        "avatar_initials": avatar_initials,
        "background_color": background_color,
    }


def get_years_ago_string(
    date_start: Optional[int],
    date_end: Optional[int],
    current_year: Optional[int] = None,
) -> str:
    """'N years ago' for the middle of the production period."""
    if date_start is None or date_end is None:
        return ""
    current_year = current_year or date.today().year
    # Round half up, so -450.5 becomes -450
    average_year = math.floor((date_start + date_end) / 2 + 0.5)
    year_difference = current_year - average_year
    if year_difference == 1:
        return "1 year ago"
    return f"{year_difference} years ago"


def get_random_engagement(rng: Optional[random.Random] = None) -> dict[str, int]:
    """Made-up like/comment/share counts. Nothing is stored or sent anywhere."""
    rng = rng or random.Random()
    return {
        "num_likes": rng.randint(*LIKES_RANGE),
        "num_comments": rng.randint(*COMMENTS_RANGE),
        "num_shares": rng.randint(*SHARES_RANGE),
    }


def lowercase_first(text: Optional[str]) -> str:
    if not text:
        return ""
    return text[0].lower() + text[1:]


def get_artist_url(artist_id: Optional[int]) -> Optional[str]:
    if artist_id is None:
        return None
    return AIC_ARTIST_PAGE_URL.format(artist_id=artist_id)


def get_detail_links(title: str, artist: str) -> dict[str, str]:
    """Links for the '...' modal: ask about the work, ask about the artist."""
    work_question = ASK_ABOUT_WORK.format(title=title, artist=artist)
    artist_question = ASK_ABOUT_ARTIST.format(artist=artist)
    return {
        "work_url": ASK_ABOUT_URL.format(query=quote(work_question, safe="")),
        "artist_url": ASK_ABOUT_URL.format(query=quote(artist_question, safe="")),
    }


def format_post(
    record: ArtworkRecord, rng: Optional[random.Random] = None
) -> dict:
    """
    Make an artwork ready for display as a post card.
    """
    rng = rng or random.Random()
    artist_name = record.artist_name or ""
    title = record.title or "Untitled"

    share_info = json.dumps(
        {"url": record.detail_url, "title": title, "artist": artist_name}
    )

    return {
        "id": record.id,
        "title": title,
        "artist_name": artist_name,
        "artist_url": get_artist_url(record.artist_id),
        "place_of_origin": record.place_of_origin,
        "image_url": record.image_url,
        "detail_url": record.detail_url,
        "medium": lowercase_first(record.medium),
        "short_description": record.short_description,
        "years_ago": get_years_ago_string(record.date_start, record.date_end),
        "share_info": share_info,
        **get_user_info(artist_name, rng),
        **get_random_engagement(rng),
    }


def format_posts(
    records: list[ArtworkRecord], rng: Optional[random.Random] = None
) -> list[dict]:
    return [format_post(record, rng) for record in records]
