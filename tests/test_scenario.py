import pytest
from precisely import assert_that, has_attrs

from blog.core.exceptions import DuplicateEmail, NotFound
from blog.services import post as post_service
from blog.services import user as user_service


def test_user_post_lifecycle(session) -> None:
    u1 = user_service.create_user(session, "u1", "a@example.com", 30)

    with pytest.raises(DuplicateEmail):
        user_service.create_user(session, "u1 again", "a@example.com", 31)

    post = post_service.create_post(session, u1.id, "T", "C")
    assert_that(post, has_attrs(view_count=0, published=False))

    for _ in range(3):
        post_service.get_post(session, post.id)
    assert_that(post_service.get_post_without_view(session, post.id), has_attrs(view_count=3))

    user_service.delete_user(session, u1.id)

    with pytest.raises(NotFound):
        post_service.get_post(session, post.id)
