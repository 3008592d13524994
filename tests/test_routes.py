from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from precisely import assert_that, equal_to

from blog.db.session import get_db
from blog.main import app


@pytest.fixture(name="client")
def _fixture_client(session):
    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _create_user(client, username="kim", email="kim@example.com", age=30) -> dict:
    response = client.post("/users/", json={"username": username, "email": email, "age": age})
    assert_that(response.status_code, equal_to(201))
    return response.json()


def _create_post(client, author_id, title="T", content="C") -> dict:
    response = client.post("/posts/", json={"author_id": author_id, "title": title, "content": content})
    assert_that(response.status_code, equal_to(201))
    return response.json()


def test_create_and_fetch_user(client) -> None:
    user = _create_user(client)

    response = client.get(f"/users/{user['id']}")

    assert_that(response.status_code, equal_to(200))
    assert_that(response.json()["status"], equal_to("ACTIVE"))
    assert_that(response.json()["email"], equal_to("kim@example.com"))


def test_duplicate_email_is_bad_request(client) -> None:
    _create_user(client)

    response = client.post("/users/", json={"username": "other", "email": "kim@example.com", "age": 20})

    assert_that(response.status_code, equal_to(400))


def test_missing_user_is_404(client) -> None:
    assert_that(client.get("/users/99").status_code, equal_to(404))
    assert_that(client.delete("/users/99").status_code, equal_to(404))


def test_update_user_and_status(client) -> None:
    user = _create_user(client)

    updated = client.put(f"/users/{user['id']}", json={"username": "Kim", "phone_number": "010-0000-0000"})
    banned = client.post(f"/users/{user['id']}/ban")
    status = client.put(f"/users/{user['id']}/status", json={"status": "INACTIVE"})

    assert_that(updated.json()["username"], equal_to("Kim"))
    assert_that(updated.json()["phone_number"], equal_to("010-0000-0000"))
    assert_that(banned.json()["status"], equal_to("BANNED"))
    assert_that(status.json()["status"], equal_to("INACTIVE"))


def test_update_email_conflict(client) -> None:
    first = _create_user(client, email="a@example.com")
    _create_user(client, username="b", email="b@example.com")

    response = client.put(f"/users/{first['id']}/email", json={"email": "b@example.com"})

    assert_that(response.status_code, equal_to(400))


def test_list_users_paged(client) -> None:
    for index in range(3):
        _create_user(client, username=f"user{index}", email=f"user{index}@example.com", age=20 + index)

    response = client.get("/users/", params={"page": 0, "size": 2, "sort": "age", "direction": "desc"})

    body = response.json()
    assert_that([item["age"] for item in body["items"]], equal_to([22, 21]))
    assert_that(body["total_elements"], equal_to(3))
    assert_that(body["total_pages"], equal_to(2))
    assert body["has_next"]
    assert not body["has_previous"]


def test_unknown_sort_field_is_unprocessable(client) -> None:
    response = client.get("/users/", params={"sort": "password"})

    assert_that(response.status_code, equal_to(422))


def test_user_stats(client) -> None:
    _create_user(client, age=30)

    body = client.get("/users/stats").json()

    assert_that(body["total"], equal_to(1))
    assert_that(body["by_status"], equal_to({"ACTIVE": 1, "INACTIVE": 0, "BANNED": 0}))
    assert_that(body["by_age"], equal_to({"30": 1}))


def test_get_post_counts_views_and_detail_does_not(client) -> None:
    user = _create_user(client)
    post = _create_post(client, user["id"])

    client.get(f"/posts/{post['id']}")
    second = client.get(f"/posts/{post['id']}")
    detail = client.get(f"/posts/{post['id']}/detail")

    assert_that(second.json()["view_count"], equal_to(2))
    assert_that(detail.json()["view_count"], equal_to(2))
    assert_that(detail.json()["author"]["username"], equal_to("kim"))


def test_create_post_for_missing_author_is_404(client) -> None:
    response = client.post("/posts/", json={"author_id": 5, "title": "T", "content": "C"})

    assert_that(response.status_code, equal_to(404))


def test_publish_and_list_published(client) -> None:
    user = _create_user(client)
    post = _create_post(client, user["id"], title="out")
    _create_post(client, user["id"], title="draft")

    client.post(f"/posts/{post['id']}/publish")
    again = client.post(f"/posts/{post['id']}/publish")
    published = client.get("/posts/published").json()

    assert_that(again.status_code, equal_to(200))
    assert_that(again.json()["published"], equal_to(True))
    assert_that([item["title"] for item in published], equal_to(["out"]))
    assert_that(published[0]["author"]["id"], equal_to(user["id"]))


def test_comments_and_cascading_delete(client) -> None:
    user = _create_user(client)
    reader = _create_user(client, username="reader", email="reader@example.com")
    post = _create_post(client, user["id"])

    created = client.post(f"/posts/{post['id']}/comments", json={"user_id": reader["id"], "content": "hi"})
    listed = client.get(f"/posts/{post['id']}/comments")
    deleted = client.delete(f"/users/{user['id']}")

    assert_that(created.status_code, equal_to(201))
    assert_that([comment["user"]["username"] for comment in listed.json()], equal_to(["reader"]))
    assert_that(deleted.status_code, equal_to(204))
    assert_that(client.get(f"/posts/{post['id']}").status_code, equal_to(404))
    assert_that(client.get(f"/comments/{created.json()['id']}").status_code, equal_to(404))


def test_update_and_delete_comment(client) -> None:
    user = _create_user(client)
    post = _create_post(client, user["id"])
    comment = client.post(f"/posts/{post['id']}/comments", json={"user_id": user["id"], "content": "typo"}).json()

    updated = client.put(f"/comments/{comment['id']}", json={"content": "fixed"})
    deleted = client.delete(f"/comments/{comment['id']}")

    assert_that(updated.json()["content"], equal_to("fixed"))
    assert_that(deleted.status_code, equal_to(204))
    assert_that(client.get(f"/comments/{comment['id']}").status_code, equal_to(404))


def test_search_and_popular_posts(client) -> None:
    user = _create_user(client)
    wanted = _create_post(client, user["id"], title="SQLAlchemy tips")
    _create_post(client, user["id"], title="Other", content="nothing")
    for _ in range(3):
        client.get(f"/posts/{wanted['id']}")

    search = client.get("/posts/search", params={"keyword": "sqlalchemy"}).json()
    popular = client.get("/posts/popular", params={"min_view_count": 2}).json()
    paged = client.get("/posts/", params={"keyword": "tips"}).json()

    assert_that([post["title"] for post in search], equal_to(["SQLAlchemy tips"]))
    assert_that([post["title"] for post in popular], equal_to(["SQLAlchemy tips"]))
    assert_that(paged["total_elements"], equal_to(1))


def test_user_posts_page(client) -> None:
    user = _create_user(client)
    _create_post(client, user["id"], title="mine")

    body = client.get(f"/users/{user['id']}/posts").json()

    assert_that([post["title"] for post in body["items"]], equal_to(["mine"]))


def test_posts_by_period_honours_offset_in_query(client) -> None:
    user = _create_user(client)
    post = _create_post(client, user["id"], title="now")
    created = datetime.fromisoformat(post["created_at"]).replace(tzinfo=timezone.utc)
    seoul = timezone(timedelta(hours=9))
    start = (created - timedelta(minutes=5)).astimezone(seoul)
    end = (created + timedelta(minutes=5)).astimezone(seoul)

    body = client.get("/posts/period", params={"start": start.isoformat(), "end": end.isoformat()}).json()

    assert_that([found["id"] for found in body], equal_to([post["id"]]))
