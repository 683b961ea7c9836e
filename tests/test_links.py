"""Tests for link normalization."""

import pytest

from reads_bot.core import Tag, default_tags_for_url, looks_like_url, normalize_url


@pytest.mark.parametrize("raw", ["bloomberg.com/a", "example.org", "medium.com/@me/post?x=1"])
def test_normalize_prepends_https(raw: str) -> None:
    """Test that scheme-less links get https://."""
    assert normalize_url(raw) == f"https://{raw}"


def test_normalize_forces_https() -> None:
    """Test http links are upgraded."""
    assert normalize_url("http://bloomberg.com/a?b=1") == "https://bloomberg.com/a?b=1"
    assert normalize_url("HTTP://example.com/") == "https://example.com/"


def test_normalize_keeps_query_for_other_hosts() -> None:
    """Test that only x.com links lose their query string."""
    url = "https://www.youtube.com/watch?v=abc#t=10"
    assert normalize_url(url) == url


def test_normalize_strips_x_query_and_fragment() -> None:
    """Test x.com links are reduced to scheme, host and path."""
    assert normalize_url("https://x.com/user/status/1?s=20") == "https://x.com/user/status/1"
    assert normalize_url("https://x.com/user/status/1#frag") == "https://x.com/user/status/1"


@pytest.mark.parametrize(
    "raw",
    [
        "https://twitter.com/user/status/1?s=20",
        "http://twitter.com/user/status/1",
        "twitter.com/user/status/1",
        "https://vxtwitter.com/user/status/1?lang=en",
        "https://mobile.twitter.com/user/status/1",
    ],
)
def test_normalize_rewrites_twitter_aliases(raw: str) -> None:
    """Test alias hosts collapse onto x.com."""
    assert normalize_url(raw) == "https://x.com/user/status/1"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("X.COM/a?s=1", "https://x.com/a"),
        ("https://X.com/user/status/1#top", "https://x.com/user/status/1"),
        ("https://Twitter.COM:8443/a?s=1", "https://x.com:8443/a"),
    ],
)
def test_normalize_lowercases_social_host(raw: str, expected: str) -> None:
    """Test x.com links compare equal whatever host casing was pasted."""
    assert normalize_url(raw) == expected


def test_normalize_does_not_touch_lookalike_hosts() -> None:
    """Test hosts merely containing x.com are left alone."""
    url = "https://box.com/files?id=1"
    assert normalize_url(url) == url


def test_normalize_strips_whitespace() -> None:
    """Test surrounding whitespace from chat input is dropped."""
    assert normalize_url("  bloomberg.com/a \n") == "https://bloomberg.com/a"


def test_normalize_never_raises_on_garbage() -> None:
    """Test malformed input still gives a string back."""
    assert normalize_url("not a url") == "https://not a url"
    assert normalize_url("http://[::1") == "https://[::1"
    assert normalize_url("") == "https://"


def test_looks_like_url() -> None:
    """Test the pasted-link detector."""
    assert looks_like_url("https://example.com")
    assert looks_like_url("http://example.com")
    assert not looks_like_url("example.com")
    assert not looks_like_url("my great title")


def test_default_tags_for_url() -> None:
    """Test domain based tag seeding."""
    assert default_tags_for_url("https://bloomberg.com/a") == [Tag.NEWS]
    assert default_tags_for_url("https://www.youtube.com/watch?v=1") == [Tag.MEDIA]
    assert default_tags_for_url("https://open.spotify.com/episode/1") == [Tag.PODCAST]
    assert default_tags_for_url("https://x.com/user/status/1") == [Tag.TWEETS]
    assert default_tags_for_url("https://medium.com/@me/post") == [Tag.READS]
    assert default_tags_for_url("https://example.com/x.com") == []
    assert default_tags_for_url("https://box.com/a") == []
