# tests/v1/test_comments.py
"""HTTP tests for comment endpoints."""

from fastapi import status


def test_reply_and_delete_parent(client, test_user, other_user, test_post, auth_headers):
    parent = client.post(
        "/api/v1/comments/",
        json={"post_id": test_post.id, "content": "parent"},
        headers=auth_headers(test_user),
    ).json()
    reply = client.post(
        "/api/v1/comments/",
        json={"post_id": test_post.id, "content": "child", "parent_id": parent["id"]},
        headers=auth_headers(other_user),
    )
    assert reply.status_code == status.HTTP_201_CREATED
    reply_id = reply.json()["id"]

    replies = client.get(f"/api/v1/comments/{parent['id']}/replies").json()
    assert [r["id"] for r in replies] == [reply_id]

    deleted = client.delete(f"/api/v1/comments/{parent['id']}", headers=auth_headers(test_user))
    assert deleted.status_code == status.HTTP_200_OK

    assert client.get(f"/api/v1/comments/{parent['id']}").status_code == status.HTTP_404_NOT_FOUND
    survivor = client.get(f"/api/v1/comments/{reply_id}").json()
    assert survivor["parent_id"] is None


def test_cross_post_parent_is_rejected(
    client, test_user, test_post, make_post, make_comment, auth_headers
):
    foreign = make_comment(test_user, make_post(test_user))

    response = client.post(
        "/api/v1/comments/",
        json={"post_id": test_post.id, "content": "x", "parent_id": foreign.id},
        headers=auth_headers(test_user),
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {
        "kind": "BAD_USER_INPUT",
        "message": "Parent comment does not belong to this post",
        "status": 400,
    }


def test_stranger_cannot_edit(client, test_user, other_user, test_post, make_comment, auth_headers):
    comment = make_comment(test_user, test_post)
    response = client.patch(
        f"/api/v1/comments/{comment.id}",
        json={"content": "defaced"},
        headers=auth_headers(other_user),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_empty_content_is_rejected(client, test_user, test_post, auth_headers):
    response = client.post(
        "/api/v1/comments/",
        json={"post_id": test_post.id, "content": ""},
        headers=auth_headers(test_user),
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["kind"] == "BAD_USER_INPUT"
