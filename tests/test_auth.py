from datetime import timedelta

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from tradejournal.models.user_model import PasswordChange, UserCreate
from tradejournal.utils.auth import (
    create_access_token,
    decode_token,
    get_password_hash,
    verify_password,
)


def test_password_hash_round_trip():
    hashed = get_password_hash("Secret123")
    assert hashed != "Secret123"
    assert verify_password("Secret123", hashed)
    assert not verify_password("secret123", hashed)


def test_token_round_trip():
    token = create_access_token({"sub": "trader@example.com"}, timedelta(minutes=5))
    assert decode_token(token).email == "trader@example.com"


def test_expired_token_rejected():
    token = create_access_token({"sub": "trader@example.com"}, timedelta(minutes=-1))
    with pytest.raises(HTTPException) as exc:
        decode_token(token)
    assert exc.value.status_code == 401


def test_token_without_subject_rejected():
    with pytest.raises(HTTPException):
        decode_token(create_access_token({"name": "x"}))


def test_garbage_token_rejected():
    with pytest.raises(HTTPException):
        decode_token("not-a-token")


@pytest.mark.parametrize("password", ["short1A", "nodigitsHere", "alllower123"])
def test_weak_passwords_rejected(password):
    with pytest.raises(ValidationError):
        UserCreate(email="a@example.com", username="trader", password=password)


def test_password_change_validates_new_password():
    with pytest.raises(ValidationError):
        PasswordChange(old_password="anything", new_password="weakpassword")
