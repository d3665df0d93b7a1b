"""
Invitation answering integration tests.

Verifies:
- Invitees see their pending invitations
- Accept and decline are bound to the verified email
- Each invitation is answered at most once
"""

from fastapi.testclient import TestClient

from tests.helpers import BOB, CAROL, DAVE, OWNER, accept, as_user, create_gallery, invite


class TestPendingList:
    """Test GET /api/invitations."""

    def test_lists_invitations_for_verified_email(self, client: TestClient, gallery: str):
        other = create_gallery(client, user=BOB, name="Bob's trip")
        invite(client, gallery, DAVE["email"], "editor")
        invite(client, other, DAVE["email"], "viewer", by=BOB)

        response = client.get("/api/invitations", headers=as_user(DAVE))

        assert response.status_code == 200
        invitations = {i["gallery_id"]: i for i in response.json()["invitations"]}
        assert set(invitations) == {gallery, other}
        assert invitations[gallery]["gallery_name"] == "Holidays"
        assert invitations[gallery]["role"] == "editor"
        assert invitations[other]["invited_by"] == BOB["id"]

    def test_accepted_invitation_leaves_list(self, client: TestClient, gallery: str):
        invite(client, gallery, DAVE["email"], "viewer")
        accept(client, gallery, DAVE)

        response = client.get("/api/invitations", headers=as_user(DAVE))

        assert response.json()["invitations"] == []

    def test_requires_verified_email(self, client: TestClient, gallery: str):
        invite(client, gallery, DAVE["email"], "viewer")

        response = client.get("/api/invitations", headers=as_user(DAVE, verified=False))

        assert response.status_code == 403

    def test_listing_uses_async_connection_only(self, client: TestClient, gallery: str, monkeypatch):
        invite(client, gallery, DAVE["email"], "viewer")

        def blocking_db():
            raise AssertionError("pending list must not open a blocking connection")

        monkeypatch.setattr("photograph.routes.invitations.get_db", blocking_db)

        response = client.get("/api/invitations", headers=as_user(DAVE))

        assert response.status_code == 200
        assert [i["gallery_id"] for i in response.json()["invitations"]] == [gallery]

    def test_requires_identity(self, client: TestClient):
        assert client.get("/api/invitations").status_code == 401


class TestAccept:
    """Test POST /api/invitations/accept."""

    def test_accept_grants_invited_role(self, client: TestClient, gallery: str):
        invite(client, gallery, DAVE["email"], "editor")

        response = accept(client, gallery, DAVE)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Invitation accepted"
        assert data["collaborator"]["user_id"] == DAVE["id"]
        assert data["collaborator"]["role"] == "editor"
        assert data["collaborator"]["status"] == "active"
        assert data["collaborator"]["invited_by"] == OWNER["id"]
        role = client.get(f"/api/galleries/{gallery}/role", headers=as_user(DAVE))
        assert role.json() == {"role": "editor"}

    def test_accept_twice(self, client: TestClient, gallery: str):
        invite(client, gallery, DAVE["email"], "viewer")
        assert accept(client, gallery, DAVE).status_code == 200

        response = accept(client, gallery, DAVE)

        assert response.status_code == 404
        assert response.json()["detail"] == "Invitation not found"

    def test_accept_with_explicit_matching_email(self, client: TestClient, gallery: str):
        invite(client, gallery, DAVE["email"], "viewer")

        response = accept(client, gallery, DAVE, email="DAVE@x.com")

        assert response.status_code == 200

    def test_cannot_accept_someone_elses_invitation(self, client: TestClient, gallery: str):
        """Knowing the invited address is not enough."""
        invite(client, gallery, DAVE["email"], "admin")

        response = accept(client, gallery, BOB, email=DAVE["email"])

        assert response.status_code == 403
        assert client.get(f"/api/galleries/{gallery}", headers=as_user(BOB)).status_code == 403
        assert accept(client, gallery, DAVE).status_code == 200

    def test_unverified_email_cannot_accept(self, client: TestClient, gallery: str):
        invite(client, gallery, DAVE["email"], "viewer")

        response = client.post(
            "/api/invitations/accept",
            json={"gallery_id": gallery, "email": DAVE["email"]},
            headers=as_user(DAVE, verified=False)
        )

        assert response.status_code == 403

    def test_accept_without_invitation(self, client: TestClient, gallery: str):
        assert accept(client, gallery, DAVE).status_code == 404

    def test_accept_unknown_gallery(self, client: TestClient):
        response = accept(client, "does-not-exist", DAVE)

        assert response.status_code == 404
        assert response.json()["detail"] == "Gallery not found"

    def test_owner_cannot_accept_own_gallery(self, client: TestClient, shared_gallery: str):
        client.put(
            f"/api/galleries/{shared_gallery}/collaborators/{BOB['id']}",
            json={"role": "admin"},
            headers=as_user(OWNER)
        )
        invite(client, shared_gallery, OWNER["email"], "viewer", by=BOB)

        response = accept(client, shared_gallery, OWNER)

        assert response.status_code == 409
        assert client.get(
            f"/api/galleries/{shared_gallery}/role", headers=as_user(OWNER)
        ).json() == {"role": "owner"}
        assert client.get("/api/invitations", headers=as_user(OWNER)).json()["invitations"] == []
        pending = client.get(
            f"/api/galleries/{shared_gallery}/collaborators", headers=as_user(OWNER)
        ).json()["pending"]
        assert OWNER["email"] not in [c["email"] for c in pending]


class TestDecline:
    """Test POST /api/invitations/decline."""

    def _decline(self, client: TestClient, gallery_id: str, user: dict, **extra):
        return client.post(
            "/api/invitations/decline",
            json={"gallery_id": gallery_id, **extra},
            headers=as_user(user)
        )

    def test_decline_removes_invitation(self, client: TestClient, gallery: str):
        invite(client, gallery, DAVE["email"], "viewer")

        response = self._decline(client, gallery, DAVE)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Invitation declined"}
        pending = client.get(
            f"/api/galleries/{gallery}/collaborators", headers=as_user(OWNER)
        ).json()["pending"]
        assert pending == []
        assert accept(client, gallery, DAVE).status_code == 404

    def test_decline_twice(self, client: TestClient, gallery: str):
        invite(client, gallery, DAVE["email"], "viewer")
        self._decline(client, gallery, DAVE)

        assert self._decline(client, gallery, DAVE).status_code == 404

    def test_cannot_decline_someone_elses_invitation(self, client: TestClient, gallery: str):
        invite(client, gallery, DAVE["email"], "viewer")

        response = self._decline(client, gallery, BOB, email=DAVE["email"])

        assert response.status_code == 403
        assert accept(client, gallery, DAVE).status_code == 200

    def test_declined_address_can_be_invited_again(self, client: TestClient, gallery: str):
        invite(client, gallery, DAVE["email"], "viewer")
        self._decline(client, gallery, DAVE)

        assert invite(client, gallery, DAVE["email"], "editor").status_code == 200
        assert accept(client, gallery, DAVE).json()["collaborator"]["role"] == "editor"


class TestSharingScenarios:
    """End-to-end sharing flows."""

    def test_editor_invitation_accepted(self, client: TestClient, gallery: str):
        """Bob is invited as editor, accepts, can edit but not invite."""
        pending = invite(client, gallery, BOB["email"], "editor").json()["collaborator"]
        assert pending["status"] == "pending"

        accepted = accept(client, gallery, BOB).json()["collaborator"]

        assert accepted["user_id"] == BOB["id"]
        assert accepted["role"] == "editor"
        assert accepted["invited_at"] == pending["invited_at"]
        renamed = client.put(
            f"/api/galleries/{gallery}", json={"name": "Bob was here"}, headers=as_user(BOB)
        )
        assert renamed.status_code == 200
        assert invite(client, gallery, DAVE["email"], "viewer", by=BOB).status_code == 403

    def test_role_raised_before_acceptance(self, client: TestClient, gallery: str):
        """Carol's pending invitation is raised to admin; she inherits it."""
        invite(client, gallery, CAROL["email"], "viewer")
        client.put(
            f"/api/galleries/{gallery}/pending/{CAROL['email']}",
            json={"role": "admin"},
            headers=as_user(OWNER)
        )

        accepted = accept(client, gallery, CAROL).json()["collaborator"]

        assert accepted["role"] == "admin"
        assert invite(client, gallery, DAVE["email"], "viewer", by=CAROL).status_code == 200
