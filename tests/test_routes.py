"""Tests for the HTTP routes."""

from partstracker import auth
from partstracker.models import CarPart, UserProject
from partstracker.services import projects as projects_service


class TestLogin:
    """Test login, logout and the session cookie."""

    def test_login_sets_cookies(self, client, guest_user, login):
        response = login("guestuser")

        assert response.status_code == 200
        assert response.get_json()["message"] == "guestuser has successfully logged in!"
        cookies = response.headers.getlist("Set-Cookie")
        assert any(c.startswith("sessionId=") for c in cookies)
        assert any(c.startswith("userRole=2") for c in cookies)

    def test_bad_password(self, client, guest_user, login):
        response = login("guestuser", "Wr0ng!pass")

        assert response.status_code == 401
        assert response.get_json()["message"] == "Invalid username or password."

    def test_logout_ends_session(self, client, guest_user, login, session_store):
        login("guestuser")
        assert len(session_store) == 1

        response = client.get("/users/logout")
        assert response.status_code == 200
        assert len(session_store) == 0

        assert client.get("/projects").status_code == 401

    def test_logout_requires_login(self, client):
        assert client.get("/users/logout").status_code == 401

    def test_identity_resolved_once_per_request(self, client, guest_user, login, monkeypatch):
        login("guestuser")
        calls = []
        real_authenticate = auth.authenticate

        def counting_authenticate(token, store=None):
            calls.append(token)
            return real_authenticate(token, store)

        monkeypatch.setattr(auth, "authenticate", counting_authenticate)

        assert client.get("/users/logout").status_code == 200
        assert len(calls) == 1
        # Nothing carried over from the previous request
        assert client.get("/projects").status_code == 401

    def test_session_expiry(self, client, guest_user, login, clock):
        login("guestuser")
        assert client.get("/projects").status_code == 200

        clock.advance(minutes=3)

        assert client.get("/projects").status_code == 401


class TestSignup:
    """Test registration over HTTP."""

    def test_signup(self, client):
        response = client.post("/users/signup", json={
            "username": "username1", "password": "P@ssW0rd!", "confirmPassword": "P@ssW0rd!",
        })

        assert response.status_code == 201
        assert response.get_json()["data"]["username"] == "username1"

    def test_signup_mismatch(self, client):
        response = client.post("/users/signup", json={
            "username": "username1", "password": "P@ssW0rd!", "confirmPassword": "other",
        })

        assert response.status_code == 400
        assert response.get_json()["error"] == "validation"

    def test_signup_duplicate(self, client, guest_user):
        response = client.post("/users/signup", json={
            "username": "guestuser", "password": "P@ssW0rd!", "confirmPassword": "P@ssW0rd!",
        })

        assert response.status_code == 409
        assert response.get_json()["error"] == "duplicate_user"

    def test_list_users_is_admin_only(self, client, admin_user, guest_user, login):
        login("guestuser")
        assert client.get("/users").status_code == 403

        login("Braeden")
        assert client.get("/users").status_code == 200


class TestPartRoutes:
    """Test the car part endpoints and their gates."""

    def test_anonymous_cannot_create(self, client):
        response = client.post("/parts", json={"partNumber": 1001, "name": "Tire"})

        assert response.status_code == 401
        assert CarPart.query.count() == 0

    def test_guest_cannot_create(self, client, guest_user, login):
        login("guestuser")
        response = client.post("/parts", json={"partNumber": 1001, "name": "Tire"})

        assert response.status_code == 403

    def test_admin_crud(self, client, admin_user, login):
        login("Braeden")

        response = client.post("/parts", json={"partNumber": 1001, "name": "Tire", "condition": "New"})
        assert response.status_code == 201
        assert response.get_json()["message"] == "Created part: Part #1001, Tire, Condition: New"

        assert client.get("/parts/1001").get_json()["data"][0]["name"] == "Tire"

        response = client.put("/parts/1001", json={"name": "Winter tire"})
        assert response.status_code == 200
        assert response.get_json()["data"]["name"] == "Winter tire"

        assert client.delete("/parts/1001").status_code == 202
        assert client.get("/parts/1001").status_code == 404

    def test_update_missing_part(self, client, admin_user, login):
        login("Braeden")
        response = client.put("/parts/9999", json={"name": "X"})

        assert response.status_code == 404
        assert response.get_json()["error"] == "not_found"

    def test_invalid_input(self, client, admin_user, login):
        login("Braeden")
        response = client.post("/parts", json={"partNumber": "abc", "name": "Tire"})

        assert response.status_code == 400

    def test_out_of_range_part_number(self, client):
        response = client.get("/parts/" + "9" * 30)

        assert response.status_code == 400
        assert response.get_json()["error"] == "validation"

    def test_non_object_json_body(self, client, admin_user, login):
        login("Braeden")
        response = client.post("/parts", json=[1001])

        assert response.status_code == 400
        assert CarPart.query.count() == 0

    def test_list_parts_is_public(self, client, tire):
        response = client.get("/parts")

        assert response.status_code == 200
        assert response.get_json()["data"] == [tire]


class TestProjectRoutes:
    """Test the project endpoints."""

    def test_project_lifecycle(self, client, guest_user, tire, login):
        login("guestuser")

        response = client.post("/projects", json={"name": "Daily Driver", "description": "Commuter"})
        assert response.status_code == 201
        project_id = response.get_json()["data"]["project_id"]

        assert client.post(f"/projects/{project_id}/parts", json={"partNumber": 1001}).status_code == 201
        parts = client.get(f"/projects/{project_id}/parts").get_json()["data"]
        assert [p["part_number"] for p in parts] == [1001]

        projects = client.get("/projects").get_json()["data"]
        assert [p["name"] for p in projects] == ["Daily Driver"]

        assert client.delete(f"/projects/{project_id}").status_code == 202
        assert client.get(f"/projects/{project_id}").status_code == 404

    def test_add_missing_part(self, client, guest_user, login):
        login("guestuser")
        project_id = client.post("/projects", json={"name": "Daily Driver"}).get_json()["data"]["project_id"]

        response = client.post(f"/projects/{project_id}/parts", json={"partNumber": 4242})

        assert response.status_code == 409
        assert response.get_json()["error"] == "integrity"

    def test_share_project(self, client, guest_user, admin_user, login):
        login("guestuser")
        project_id = client.post("/projects", json={"name": "Daily Driver"}).get_json()["data"]["project_id"]

        assert client.post(f"/projects/{project_id}/users", json={"username": "Braeden"}).status_code == 201
        assert client.post(f"/projects/{project_id}/users", json={"username": "nobody1"}).status_code == 409

    def test_non_member_is_forbidden(self, client, admin_user, guest_user, tire, login):
        login("Braeden")
        project_id = client.post("/projects", json={"name": "Race Car"}).get_json()["data"]["project_id"]
        client.post(f"/projects/{project_id}/parts", json={"partNumber": 1001})
        client.get("/users/logout")

        login("guestuser")
        assert client.get("/projects").get_json()["data"] == []

        responses = [
            client.get(f"/projects/{project_id}"),
            client.put(f"/projects/{project_id}", json={"name": "Stolen"}),
            client.delete(f"/projects/{project_id}"),
            client.get(f"/projects/{project_id}/parts"),
            client.post(f"/projects/{project_id}/parts", json={"partNumber": 1001}),
            client.delete(f"/projects/{project_id}/parts/1001"),
            client.post(f"/projects/{project_id}/users", json={"username": "guestuser"}),
        ]

        assert [r.status_code for r in responses] == [403] * len(responses)
        assert responses[0].get_json()["error"] == "forbidden"
        assert projects_service.get_project(project_id)["name"] == "Race Car"
        assert [p["part_number"] for p in projects_service.list_parts_in_project(project_id)] == [1001]
        assert UserProject.query.count() == 1

    def test_shared_member_has_access(self, client, admin_user, guest_user, login):
        login("Braeden")
        project_id = client.post("/projects", json={"name": "Race Car"}).get_json()["data"]["project_id"]
        client.post(f"/projects/{project_id}/users", json={"username": "guestuser"})

        login("guestuser")

        assert client.get(f"/projects/{project_id}").status_code == 200
        assert [p["name"] for p in client.get("/projects").get_json()["data"]] == ["Race Car"]

    def test_missing_project_is_not_found(self, client, guest_user, login):
        login("guestuser")

        response = client.put("/projects/4242", json={"name": "Ghost"})

        assert response.status_code == 404
        assert response.get_json()["error"] == "not_found"
        assert client.get("/projects/junk").status_code == 404

    def test_anonymous_is_unauthorized(self, client):
        assert client.get("/projects/1").status_code == 401


class TestLanguage:
    """Test bilingual messages."""

    def test_french_messages(self, client, guest_user, login):
        client.post("/language", json={"language": "fr"})

        response = login("guestuser", "Wr0ng!pass")

        assert response.get_json()["message"] == "Nom d'utilisateur ou mot de passe invalide."

    def test_non_object_json_is_ignored(self, client):
        response = client.post("/language", json=[1])

        assert response.status_code == 200
        assert response.get_json()["language"] == "en"

    def test_unsupported_language_is_ignored(self, client):
        response = client.post("/language", json={"language": "de"})

        assert response.get_json()["language"] == "en"

    def test_home(self, client):
        body = client.get("/").get_json()

        assert body["data"] == {"logged_in_user": None, "role": "guest"}
