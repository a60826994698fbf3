from conftest import headers
from inevent.security.auth import decode_token, encode_token, user_context_from_token


def test_token_roundtrip_and_tampering():
    token = encode_token(7, "ORGANIZER")
    assert decode_token(token) == {"uid": 7, "role": "ORGANIZER"}
    assert decode_token(token + "x") is None
    assert decode_token(token, max_age=-1) is None


def test_user_context_from_token():
    assert user_context_from_token(encode_token(5, "ADMIN")) == {"user_id": 5, "role": "ADMIN"}
    assert user_context_from_token(None) is None
    assert user_context_from_token("garbage") is None


def test_cookie_token_sets_user_context(client, event, participants):
    client.cookies.set("auth_token", encode_token(1, "USER"))
    r = client.get(f"/api/events/{event.id}/appointments/summary")
    assert r.status_code == 200


def test_cookie_token_takes_precedence_over_headers(client, event):
    client.cookies.set("auth_token", encode_token(1, "USER"))
    r = client.get(f"/api/events/{event.id}/templates", headers=headers(100, "ORGANIZER"))
    assert r.status_code == 403


def test_invalid_cookie_is_ignored(client, event):
    client.cookies.set("auth_token", "forged")
    assert client.get(f"/api/events/{event.id}/appointments/summary").status_code == 401


def test_role_header_is_case_insensitive(client, event):
    r = client.get(f"/api/events/{event.id}/templates", headers=headers(100, "organizer"))
    assert r.status_code == 200
