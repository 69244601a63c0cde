"""End-to-end tests for the comment endpoints."""

ORIGIN = {"Origin": "https://blog.acme.com"}


def guest_token(client, session_id: str = "tab-1") -> str:
    response = client.post(
        "/identity/guest",
        json={"app_key": "acme", "session_id": session_id},
        headers=ORIGIN,
    )
    return response.json()["session_token"]


def post_comment(client, token: str | None, **body):
    headers = dict(ORIGIN)
    if token:
        headers["Authorization"] = f"Bearer {token}"
    payload = {"owner_identifier": "/blog/hello", "body": "Hi there"}
    payload.update(body)
    return client.post("/apps/acme/comments", json=payload, headers=headers)


class TestComments:
    """GET and POST /apps/{app_key}/comments."""

    def test_post_and_list(self, client):
        token = guest_token(client)

        created = post_comment(client, token)
        listed = client.get(
            "/apps/acme/comments", params={"owner_identifier": "/blog/hello"}
        )

        assert created.status_code == 201
        assert listed.status_code == 200
        data = listed.json()
        assert data["total"] == 1
        assert data["comments"][0]["comment_id"] == created.json()["comment_id"]
        assert data["comments"][0]["author"]["display_name"]

    def test_reply(self, client):
        token = guest_token(client)
        parent = post_comment(client, token).json()

        reply = post_comment(client, token, parent_id=parent["comment_id"])

        assert reply.status_code == 201
        assert reply.json()["depth"] == 1

    def test_malformed_parent_id_is_400(self, client):
        response = post_comment(client, guest_token(client), parent_id="not-a-uuid")

        assert response.status_code == 400

    def test_missing_token_is_401(self, client):
        assert post_comment(client, None).status_code == 401

    def test_invalid_token_is_401(self, client):
        assert post_comment(client, "garbage").status_code == 401

    def test_unknown_app_listing_is_404(self, client):
        response = client.get(
            "/apps/nope/comments", params={"owner_identifier": "/blog/hello"}
        )

        assert response.status_code == 404
