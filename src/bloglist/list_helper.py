"""
Statistics over lists of blogs.

Every helper takes a sequence of blog mappings carrying at least
``author`` and ``likes`` (the shape produced by ``Blog.to_dict``) and
never touches the database. Ties are resolved in favour of the first
record (or author) encountered.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

BlogLike = Mapping[str, Any]


def total_likes(blogs: Iterable[BlogLike]) -> int:
    """Sum of likes across all blogs, 0 for an empty list."""
    return sum(blog["likes"] for blog in blogs)


def favourite_blog(blogs: Iterable[BlogLike]) -> BlogLike:
    """
    Return the blog with the most likes.

    Raises:
        ValueError: If there are no blogs
    """
    blogs = list(blogs)
    if not blogs:
        raise ValueError("favourite_blog() needs at least one blog")
    # max() keeps the first maximal element
    return max(blogs, key=lambda blog: blog["likes"])


def _group_by_author(blogs: List[BlogLike]) -> Dict[Any, List[BlogLike]]:
    # dicts keep insertion order, so authors stay in first-seen order
    groups: Dict[Any, List[BlogLike]] = {}
    for blog in blogs:
        groups.setdefault(blog["author"], []).append(blog)
    return groups


def most_blogs(blogs: Iterable[BlogLike]) -> Dict[str, Any]:
    """
    Return ``{"author", "blogs"}`` for the author with the most blogs.

    Raises:
        ValueError: If there are no blogs
    """
    blogs = list(blogs)
    if not blogs:
        raise ValueError("most_blogs() needs at least one blog")
    counts = [
        {"author": author, "blogs": len(entries)}
        for author, entries in _group_by_author(blogs).items()
    ]
    return max(counts, key=lambda entry: entry["blogs"])


def most_likes(blogs: Iterable[BlogLike]) -> Dict[str, Any]:
    """
    Return ``{"author", "likes"}`` for the author with the highest like total.

    Raises:
        ValueError: If there are no blogs
    """
    blogs = list(blogs)
    if not blogs:
        raise ValueError("most_likes() needs at least one blog")
    totals = [
        {"author": author, "likes": total_likes(entries)}
        for author, entries in _group_by_author(blogs).items()
    ]
    return max(totals, key=lambda entry: entry["likes"])


def blog_stats(blogs: Iterable[BlogLike]) -> Dict[str, Optional[Any]]:
    """Bundle every helper; the maxima are None when there are no blogs."""
    blogs = list(blogs)
    if not blogs:
        return {
            "total_likes": 0,
            "favourite_blog": None,
            "most_blogs": None,
            "most_likes": None,
        }
    return {
        "total_likes": total_likes(blogs),
        "favourite_blog": favourite_blog(blogs),
        "most_blogs": most_blogs(blogs),
        "most_likes": most_likes(blogs),
    }
