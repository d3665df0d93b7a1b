"""Identities and request helpers shared by the tests."""
from typing import Dict, Optional

from fastapi.testclient import TestClient

OWNER = {"id": "u_owner", "email": "owner@x.com"}
BOB = {"id": "u_bob", "email": "bob@x.com"}
CAROL = {"id": "u_carol", "email": "carol@x.com"}
DAVE = {"id": "u_dave", "email": "dave@x.com"}


def as_user(user: Dict, verified: bool = True) -> Dict[str, str]:
    """Headers the identity provider would forward for ``user``.

    Usage:
        client.get("/api/galleries", headers=as_user(BOB))
    """
    headers = {"X-User-Id": user["id"]}
    if verified and user.get("email"):
        headers["X-User-Email"] = user["email"]
    return headers


def create_gallery(client: TestClient, user: Dict = OWNER, name: str = "Holidays") -> str:
    response = client.post("/api/galleries", json={"name": name}, headers=as_user(user))
    assert response.status_code == 200, response.text
    return response.json()["gallery"]["id"]


def invite(client: TestClient, gallery_id: str, email: str, role: str, by: Dict = OWNER):
    return client.post(
        f"/api/galleries/{gallery_id}/collaborators",
        json={"email": email, "role": role},
        headers=as_user(by)
    )


def accept(client: TestClient, gallery_id: str, user: Dict, email: Optional[str] = None):
    body = {"gallery_id": gallery_id}
    if email is not None:
        body["email"] = email
    return client.post("/api/invitations/accept", json=body, headers=as_user(user))
