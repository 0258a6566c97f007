"""Fetch candidate stories from RSS sources."""

import logging
import random

import feedparser

from story_video.constants import RSS_SOURCES, FEED_ITEM_LIMIT
from story_video.errors import NoContentError
from story_video.models import Article

logger = logging.getLogger(__name__)


def _entry_description(entry) -> str:
    """Best available body text for a feed entry."""
    if entry.get("summary"):
        return entry["summary"]
    content = entry.get("content") or []
    if content:
        return content[0].get("value", "")
    return entry.get("description", "")


def fetch_source(source: dict, limit: int = FEED_ITEM_LIMIT) -> list[Article]:
    """Parse one feed and return its most recent `limit` entries.

    Raises ValueError when the feed is unreadable and has no entries; a feed
    with minor markup problems (bozo) but usable entries is accepted.
    """
    feed = feedparser.parse(source["url"])
    if getattr(feed, "bozo", False) and not feed.entries:
        raise ValueError(str(getattr(feed, "bozo_exception", "unreadable feed")))

    articles = []
    for entry in feed.entries[:limit]:
        articles.append(Article(
            title=entry.get("title", "").strip(),
            description=_entry_description(entry),
            link=entry.get("link", ""),
            source=source["name"],
            pub_date=entry.get("published", ""),
        ))
    return articles


def fetch_articles(
    sources: list[dict] | None = None,
    limit: int = FEED_ITEM_LIMIT,
) -> list[Article]:
    """Collect articles from every source.

    A failing source is logged and skipped. Raises NoContentError when no
    source yields anything.
    """
    if sources is None:
        sources = RSS_SOURCES

    articles = []
    for source in sources:
        print(f"  Fetching from {source['name']}...")
        try:
            found = fetch_source(source, limit=limit)
        except Exception as e:
            logger.warning("Failed to fetch from %s: %s", source["name"], e)
            continue
        print(f"  Got {len(found)} stories from {source['name']}")
        articles.extend(found)

    if not articles:
        raise NoContentError("No stories found from any source")
    return articles


def pick_article(articles: list[Article], rng: random.Random | None = None) -> Article:
    """Pick one article at random. Articles without a title are never picked."""
    candidates = [a for a in articles if a.title]
    if not candidates:
        raise NoContentError("No titled stories available")
    return (rng or random).choice(candidates)
