"""Tests for database models."""

from __future__ import annotations

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Category, Comment, Post


@pytest.mark.asyncio
async def test_create_category_defaults(db_session: AsyncSession) -> None:
    """Test creating a category fills in defaults."""
    category = Category(name="Daily Life")

    db_session.add(category)
    await db_session.commit()

    assert len(category.id) == 36
    assert category.color == "#3B82F6"
    assert category.post_count == 0
    assert category.created_at is not None
    assert category.updated_at is not None


@pytest.mark.asyncio
async def test_category_name_unique(db_session: AsyncSession) -> None:
    db_session.add(Category(name="Daily Life"))
    await db_session.commit()

    db_session.add(Category(name="Daily Life"))
    with pytest.raises(IntegrityError):
        await db_session.commit()


@pytest.mark.asyncio
async def test_category_post_count_non_negative(db_session: AsyncSession) -> None:
    db_session.add(Category(name="Daily Life", post_count=-1))
    with pytest.raises(IntegrityError):
        await db_session.commit()


@pytest.mark.asyncio
async def test_post_defaults(db_session: AsyncSession, category: Category) -> None:
    post = Post(title="Hello", content="World", category_id=category.id)

    db_session.add(post)
    await db_session.commit()

    result = await db_session.execute(select(Post).where(Post.id == post.id))
    loaded = result.unique().scalar_one()
    assert loaded.tags == []
    assert loaded.is_published is True
    assert loaded.view_count == 0
    assert loaded.featured_image == ""
    assert loaded.category.name == "Nature Photography"


@pytest.mark.asyncio
async def test_post_with_dangling_category(db_session: AsyncSession) -> None:
    """Test a post may reference a category that does not exist."""
    post = Post(title="Hello", content="World", category_id="gone")

    db_session.add(post)
    await db_session.commit()

    result = await db_session.execute(select(Post).where(Post.id == post.id))
    assert result.unique().scalar_one().category is None


@pytest.mark.asyncio
async def test_comment_positions_follow_list_order(
    db_session: AsyncSession, category: Category
) -> None:
    post = Post(title="Hello", content="World", category_id=category.id)
    post.comments.append(Comment(author="Ana", content="One"))
    post.comments.append(Comment(author="Ben", content="Two"))

    db_session.add(post)
    await db_session.commit()

    result = await db_session.execute(
        select(Comment).where(Comment.post_id == post.id).order_by(Comment.position)
    )
    comments = result.scalars().all()
    assert [(c.position, c.author) for c in comments] == [(0, "Ana"), (1, "Ben")]
    assert all(c.created_at is not None for c in comments)
