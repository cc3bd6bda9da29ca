"""Tests for profiles, education and the GitHub listing."""
import base64
from unittest.mock import AsyncMock, patch

import httpx

from devconnector.config import settings
from devconnector.models.post import Like, Post
from devconnector.models.profile import Profile
from devconnector.models.user import User
from devconnector.services.github import GithubProfileNotFound

PROFILE = {
    "status": "Developer",
    "skills": "python, sql , docker",
    "company": "Acme",
    "twitter": "https://twitter.com/alice",
}

EDUCATION = {
    "school": "MIT",
    "degree": "BSc",
    "fieldofstudy": "CS",
    "from": "2015-09-01",
    "to": "2019-06-01",
}


def _create_profile(client, headers, data=PROFILE):
    response = client.post("/api/profile", json=data, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def test_create_profile(client, alice):
    profile = _create_profile(client, alice)
    assert profile["status"] == "Developer"
    assert profile["skills"] == ["python", "sql", "docker"]
    assert profile["social"] == {"twitter": "https://twitter.com/alice"}
    assert profile["user"]["name"] == "Alice"


def test_profile_requires_status_and_skills(client, alice):
    response = client.post("/api/profile", json={"status": "", "skills": " , "}, headers=alice)
    assert response.status_code == 400
    messages = {err["msg"] for err in response.json()["errors"]}
    assert messages == {"Status is required", "Skills is required"}


def test_update_profile_keeps_omitted_fields(client, db_session, alice):
    _create_profile(client, alice)
    updated = _create_profile(
        client, alice, {"status": "Senior", "skills": ["go"], "youtube": "https://yt/alice"})
    assert updated["status"] == "Senior"
    assert updated["skills"] == ["go"]
    assert updated["company"] == "Acme"
    assert updated["social"] == {
        "twitter": "https://twitter.com/alice",
        "youtube": "https://yt/alice",
    }
    assert db_session.query(Profile).count() == 1


def test_get_my_profile(client, alice):
    missing = client.get("/api/profile/me", headers=alice)
    assert missing.status_code == 404

    _create_profile(client, alice)
    assert client.get("/api/profile/me", headers=alice).json()["company"] == "Acme"


def test_public_profile_routes(client, alice, bob):
    mine = _create_profile(client, alice)
    _create_profile(client, bob, {"status": "Student", "skills": "js"})

    listing = client.get("/api/profile")
    assert listing.status_code == 200
    assert [p["user"]["name"] for p in listing.json()] == ["Alice", "Bob"]

    one = client.get(f"/api/profile/user/{mine['user_id']}")
    assert one.status_code == 200
    assert one.json()["id"] == mine["id"]

    missing = client.get("/api/profile/user/999")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Profile not found"


def test_education_add_and_remove(client, alice):
    _create_profile(client, alice)

    profile = client.patch("/api/profile/education", json=EDUCATION, headers=alice).json()
    profile = client.patch(
        "/api/profile/education", json={**EDUCATION, "school": "Stanford"}, headers=alice).json()
    assert [e["school"] for e in profile["education"]] == ["Stanford", "MIT"]
    assert profile["education"][1]["from"] == "2015-09-01"
    assert profile["education"][1]["to"] == "2019-06-01"

    mit = profile["education"][1]
    response = client.patch(f"/api/profile/education/{mit['id']}", headers=alice)
    assert response.status_code == 200
    assert [e["school"] for e in response.json()["education"]] == ["Stanford"]

    missing = client.patch("/api/profile/education/999", headers=alice)
    assert missing.status_code == 404


def test_education_validation(client, alice):
    _create_profile(client, alice)
    response = client.patch("/api/profile/education", json={"school": "MIT"}, headers=alice)
    assert response.status_code == 400
    params = {err["param"] for err in response.json()["errors"]}
    assert {"degree", "fieldofstudy"} <= params


def test_education_without_profile(client, alice):
    response = client.patch("/api/profile/education", json=EDUCATION, headers=alice)
    assert response.status_code == 404


def test_delete_account_keeps_posts(client, db_session, alice):
    _create_profile(client, alice)
    client.post("/api/posts", json={"text": "still here"}, headers=alice)

    response = client.delete("/api/profile", headers=alice)
    assert response.status_code == 200
    assert response.json() == {"message": "User deleted"}

    db_session.expire_all()
    assert db_session.query(User).count() == 0
    assert db_session.query(Profile).count() == 0
    post = db_session.query(Post).one()
    assert post.user_id is None
    assert post.name == "Alice"


def test_delete_requires_token(client):
    assert client.delete("/api/profile").status_code == 401


def test_github_repos(client):
    repos = [{"name": "dotfiles"}]
    with patch("devconnector.routes.profile.fetch_user_repos", new=AsyncMock(return_value=repos)) as fetch:
        response = client.get("/api/profile/github/alice")
    assert response.status_code == 200
    assert response.json() == repos
    fetch.assert_awaited_once_with("alice")


def test_github_profile_not_found(client):
    missing = AsyncMock(side_effect=GithubProfileNotFound("ghost"))
    with patch("devconnector.routes.profile.fetch_user_repos", new=missing):
        response = client.get("/api/profile/github/ghost")
    assert response.status_code == 404
    assert response.json()["detail"] == "No Github profile found"


def test_github_transport_failure(client):
    broken = AsyncMock(side_effect=httpx.ConnectError("boom"))
    with patch("devconnector.routes.profile.fetch_user_repos", new=broken):
        response = client.get("/api/profile/github/alice")
    assert response.status_code == 500
    assert response.json()["detail"] == "Server Error"


def test_explicit_null_clears_social_link(client, alice):
    _create_profile(client, alice)
    updated = _create_profile(
        client, alice, {"status": "Developer", "skills": "python", "twitter": None})
    assert updated["social"] == {}


def test_token_outliving_account_cannot_write(client, db_session, alice, bob):
    post = client.post("/api/posts", json={"text": "hello"}, headers=bob).json()
    assert client.delete("/api/profile", headers=alice).status_code == 200

    upsert = client.post("/api/profile", json=PROFILE, headers=alice)
    assert upsert.status_code == 404
    assert upsert.json()["detail"] == "User not found"
    assert client.patch("/api/profile/education", json=EDUCATION, headers=alice).status_code == 404
    assert client.patch(f"/api/posts/like/{post['id']}", headers=alice).status_code == 404
    assert client.delete("/api/profile", headers=alice).status_code == 404

    db_session.expire_all()
    assert db_session.query(Profile).count() == 0
    assert db_session.query(Like).count() == 0
    assert [u.name for u in db_session.query(User).all()] == ["Bob"]


def _github_responds(handler):
    """Route the GitHub client through an in-process transport."""
    real_client = httpx.AsyncClient

    def _client(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    return patch("devconnector.services.github.httpx.AsyncClient", side_effect=_client)


def test_github_listing_request(client, monkeypatch):
    monkeypatch.setattr(settings, "GITHUB_CLIENT_ID", None)
    monkeypatch.setattr(settings, "GITHUB_CLIENT_SECRET", None)
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[{"name": "dotfiles"}])

    with _github_responds(handler):
        response = client.get("/api/profile/github/alice")

    assert response.status_code == 200
    assert response.json() == [{"name": "dotfiles"}]
    request = seen[0]
    assert request.url.path == "/users/alice/repos"
    assert request.url.params["per_page"] == "5"
    assert request.url.params["sort"] == "created:asc"
    assert "authorization" not in request.headers


def test_github_listing_sends_client_credentials(client, monkeypatch):
    monkeypatch.setattr(settings, "GITHUB_CLIENT_ID", "client-id")
    monkeypatch.setattr(settings, "GITHUB_CLIENT_SECRET", "client-secret")
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    with _github_responds(handler):
        assert client.get("/api/profile/github/alice").status_code == 200

    expected = base64.b64encode(b"client-id:client-secret").decode()
    assert seen[0].headers["authorization"] == f"Basic {expected}"


def test_github_unknown_user(client):
    with _github_responds(lambda request: httpx.Response(404, json={"message": "Not Found"})):
        response = client.get("/api/profile/github/ghost")
    assert response.status_code == 404
    assert response.json()["detail"] == "No Github profile found"


def test_github_unreachable(client):
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    with _github_responds(handler):
        response = client.get("/api/profile/github/alice")
    assert response.status_code == 500
    assert response.json() == {"detail": "Server Error"}
