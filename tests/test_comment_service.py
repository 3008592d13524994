import pytest
from precisely import assert_that, equal_to, has_attrs, is_sequence

from blog.core.exceptions import NotFound
from blog.services import comment as comment_service
from blog.services import user as user_service


def test_add_comment(session, author, post) -> None:
    comment = comment_service.add_comment(session, post.id, author.id, "first!")

    assert_that(comment_service.get_comment(session, comment.id), has_attrs(
        content="first!", post_id=post.id, user_id=author.id,
    ))


def test_add_comment_to_missing_post_is_not_found(session, author) -> None:
    with pytest.raises(NotFound):
        comment_service.add_comment(session, 77, author.id, "hello")


def test_add_comment_by_missing_user_is_not_found(session, post) -> None:
    with pytest.raises(NotFound):
        comment_service.add_comment(session, post.id, 77, "hello")


def test_comments_for_post_come_with_authors_oldest_first(session, author, post) -> None:
    reader = user_service.create_user(session, "reader", "reader@example.com", 20)
    comment_service.add_comment(session, post.id, reader.id, "one")
    comment_service.add_comment(session, post.id, author.id, "two")

    assert_that(comment_service.get_comments_for_post(session, post.id), is_sequence(
        has_attrs(content="one", user=has_attrs(username="reader")),
        has_attrs(content="two", user=has_attrs(username="<author>")),
    ))


def test_comments_for_missing_post_is_not_found(session) -> None:
    with pytest.raises(NotFound):
        comment_service.get_comments_for_post(session, 5)


def test_update_comment(session, author, post) -> None:
    comment = comment_service.add_comment(session, post.id, author.id, "typo")
    previous_updated_at = comment.updated_at

    updated = comment_service.update_comment(session, comment.id, "fixed")

    assert_that(updated.content, equal_to("fixed"))
    assert updated.updated_at > previous_updated_at


def test_delete_comment(session, author, post) -> None:
    comment = comment_service.add_comment(session, post.id, author.id, "bye")

    comment_service.delete_comment(session, comment.id)

    with pytest.raises(NotFound):
        comment_service.get_comment(session, comment.id)
    with pytest.raises(NotFound):
        comment_service.delete_comment(session, comment.id)


def test_counts(session, author, post) -> None:
    comment_service.add_comment(session, post.id, author.id, "a")
    comment_service.add_comment(session, post.id, author.id, "b")

    assert_that(comment_service.get_comment_count_for_post(session, post.id), equal_to(2))
    assert_that(comment_service.get_comment_count_by_user(session, author.id), equal_to(2))
