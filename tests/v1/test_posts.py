# tests/v1/test_posts.py
"""HTTP tests for post endpoints."""

from fastapi import status


class TestPostEndpoints:
    def test_create_and_fetch(self, client, test_user, auth_headers):
        created = client.post(
            "/api/v1/posts/",
            json={"media_file": "https://cdn.example.com/a.jpg", "caption": "sunset"},
            headers=auth_headers(test_user),
        )
        assert created.status_code == status.HTTP_201_CREATED
        post = created.json()
        assert post["user_id"] == test_user.id
        assert post["likes_count"] == 0
        assert post["avg_rating"] is None

        fetched = client.get(f"/api/v1/posts/{post['id']}")
        assert fetched.status_code == status.HTTP_200_OK
        assert fetched.json()["caption"] == "sunset"

    def test_create_requires_authentication(self, client):
        response = client.post("/api/v1/posts/", json={"media_file": "a.jpg"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Not authenticated"

    def test_missing_post(self, client):
        response = client.get("/api/v1/posts/does-not-exist")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"kind": "NOT_FOUND", "message": "Post not found", "status": 404}

    def test_update_by_stranger_is_forbidden(self, client, test_post, other_user, auth_headers):
        response = client.patch(
            f"/api/v1/posts/{test_post.id}",
            json={"caption": "hijacked"},
            headers=auth_headers(other_user),
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["kind"] == "UNAUTHORIZED"
        assert client.get(f"/api/v1/posts/{test_post.id}").json()["caption"] == "hello"

    def test_update_by_owner(self, client, test_post, test_user, auth_headers):
        response = client.patch(
            f"/api/v1/posts/{test_post.id}",
            json={"caption": "better caption"},
            headers=auth_headers(test_user),
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["caption"] == "better caption"

    def test_admin_delete(self, client, test_post, admin_user, auth_headers):
        response = client.delete(f"/api/v1/posts/{test_post.id}", headers=auth_headers(admin_user))
        assert response.status_code == status.HTTP_200_OK
        assert response.json() is True
        assert client.get(f"/api/v1/posts/{test_post.id}").status_code == status.HTTP_404_NOT_FOUND

    def test_list_user_posts(self, client, test_user, other_user, make_post):
        mine = make_post(test_user)
        make_post(other_user)

        response = client.get(f"/api/v1/users/{test_user.id}/posts")
        assert [p["id"] for p in response.json()] == [mine.id]

    def test_post_comments_endpoint(self, client, test_user, test_post, make_comment):
        parent = make_comment(test_user, test_post)
        make_comment(test_user, test_post, parent=parent)

        body = client.get(f"/api/v1/posts/{test_post.id}/comments").json()
        assert body["total_count"] == 2
        assert [c["id"] for c in body["comments"]] == [parent.id]
        assert body["comments"][0]["reply_count"] == 1
