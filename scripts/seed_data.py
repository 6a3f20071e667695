#!/usr/bin/env python3
"""
Seed Script

Fills the blog database with the default categories and a few sample posts.

Usage:
    python scripts/seed_data.py [options]

Options:
    --keep-existing     Do not delete existing posts and categories first
    --categories-only   Only insert categories

Run from the project root directory. The database location follows the
usual JBEST_* environment variables.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from sqlalchemy import delete, func, select, update

from app.core.logging import get_logger, setup_logging
from app.db import Base, async_session_maker, engine
from app.db.models import Category, Comment, Post
from app.services.post import derive_excerpt

logger = get_logger("seed_data")

CATEGORIES = [
    {"name": "Daily Life", "description": "Everyday experiences and moments", "color": "#48bb78"},
    {"name": "Business Adventures", "description": "Entrepreneurial journeys and insights", "color": "#ed8936"},
    {"name": "Coding Journey", "description": "Programming experiences and learning", "color": "#667eea"},
    {"name": "Parenting Moments", "description": "Experiences raising children", "color": "#f56565"},
    {"name": "Nature Photography", "description": "Photos and stories from nature", "color": "#38b2ac"},
    {"name": "Personal Growth", "description": "Self-improvement and reflection", "color": "#9f7aea"},
]

SAMPLE_POSTS = [
    {
        "title": "Welcome to JBest Eyes",
        "category": "Daily Life",
        "tags": ["welcome", "introduction", "blog"],
        "excerpt": (
            "Welcome to my personal blog where I share my journey through daily life, "
            "business adventures, coding challenges, and parenting."
        ),
        "content": (
            "Welcome to my personal blog where I share my journey through daily life, "
            "business adventures, coding challenges, and the beautiful chaos of parenting.\n\n"
            "This blog is my window to the world - a place where I document my experiences, "
            "share insights, and connect with others who might be on similar journeys.\n\n"
            "Thank you for joining me on this journey!"
        ),
    },
    {
        "title": "My First Business Experiment",
        "category": "Business Adventures",
        "tags": ["business", "entrepreneurship", "startup", "experiment"],
        "excerpt": "Starting my first business experiment with a focus on learning and iteration.",
        "content": (
            "Today marks the beginning of an exciting new business adventure. After months of "
            "research and planning, I'm finally taking the leap into entrepreneurship.\n\n"
            "Here's what I'm planning:\n"
            "- Start small with minimal investment\n"
            "- Test the market with a MVP approach\n"
            "- Learn from customer feedback\n"
            "- Iterate and improve continuously"
        ),
    },
    {
        "title": "Learning FastAPI: A Coding Journey",
        "category": "Coding Journey",
        "tags": ["python", "fastapi", "learning", "development"],
        "excerpt": None,
        "content": (
            "As a developer constantly learning new technologies, I recently dove deep into "
            "building APIs and built the backend of this very blog.\n\n"
            "Key takeaways: start with the basics and build complexity gradually, practice "
            "with real projects, and lean on the community when you get stuck."
        ),
    },
    {
        "title": "Parenting in the Digital Age",
        "category": "Parenting Moments",
        "tags": ["parenting", "technology", "screen-time", "balance", "family"],
        "excerpt": "Navigating the challenges of parenting in our increasingly digital world.",
        "content": (
            "Being a parent while working in tech presents unique challenges and opportunities. "
            "Today I want to share some thoughts on balancing screen time, teaching kids about "
            "technology, and maintaining family connections in our digital world."
        ),
    },
]


async def seed(keep_existing: bool, categories_only: bool) -> None:
    """Insert seed data and recompute category post counts."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_maker() as session:
        if not keep_existing:
            await session.execute(delete(Comment))
            await session.execute(delete(Post))
            await session.execute(delete(Category))
            logger.info("cleared_existing_data")

        by_name: dict[str, Category] = {}
        for data in CATEGORIES:
            existing = (
                await session.execute(select(Category).where(Category.name == data["name"]))
            ).scalar_one_or_none()
            category = existing or Category(**data)
            session.add(category)
            by_name[data["name"]] = category
        await session.flush()
        logger.info("created_categories", names=sorted(by_name))

        if not categories_only:
            for data in SAMPLE_POSTS:
                session.add(
                    Post(
                        title=data["title"],
                        content=data["content"],
                        excerpt=data["excerpt"] or derive_excerpt(data["content"]),
                        category_id=by_name[data["category"]].id,
                        tags=data["tags"],
                        is_published=True,
                    )
                )
            await session.flush()
            logger.info("created_sample_posts", count=len(SAMPLE_POSTS))

        # Counters are recomputed from the posts table rather than incremented
        for category in by_name.values():
            count = (
                await session.execute(
                    select(func.count(Post.id)).where(Post.category_id == category.id)
                )
            ).scalar() or 0
            await session.execute(
                update(Category).where(Category.id == category.id).values(post_count=count)
            )

        await session.commit()

    await engine.dispose()
    logger.info("seed_completed")


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the blog database")
    parser.add_argument(
        "--keep-existing",
        action="store_true",
        help="Do not delete existing posts and categories first",
    )
    parser.add_argument(
        "--categories-only",
        action="store_true",
        help="Only insert categories",
    )
    args = parser.parse_args()

    setup_logging()
    try:
        asyncio.run(seed(args.keep_existing, args.categories_only))
    except Exception:
        logger.exception("seed_failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
