import random
from datetime import timedelta

import pytest
from jose import jwt

from errors import InvalidToken
from utils.tokenJWT import ALGORITHM, create_access_token, decode_access_token
from utils.uid import UID_PATTERN, generate_uid
from utils.validators import is_valid_phone


def test_token_round_trip_carries_user_id():
    token = create_access_token("user-42", secret="s3cret")

    assert decode_access_token(token, secret="s3cret") == "user-42"
    assert jwt.get_unverified_claims(token)["userId"] == "user-42"


def test_token_with_wrong_secret_is_rejected():
    token = create_access_token("user-42", secret="s3cret")

    with pytest.raises(InvalidToken):
        decode_access_token(token, secret="other")


def test_expired_token_is_rejected():
    token = create_access_token("user-42", secret="s3cret", expires_delta=timedelta(seconds=-5))

    with pytest.raises(InvalidToken):
        decode_access_token(token, secret="s3cret")


def test_token_without_user_id_claim_is_rejected():
    token = jwt.encode({"sub": "user-42"}, "s3cret", algorithm=ALGORITHM)

    with pytest.raises(InvalidToken):
        decode_access_token(token, secret="s3cret")


def test_token_signed_with_other_algorithm_is_rejected():
    token = jwt.encode({"userId": "user-42"}, "s3cret", algorithm="HS512")

    with pytest.raises(InvalidToken):
        decode_access_token(token, secret="s3cret")


def test_generated_uid_format():
    rng = random.Random(7)
    for _ in range(200):
        assert UID_PATTERN.match(generate_uid(rng))


def test_uid_generation_is_seedable():
    assert generate_uid(random.Random(1)) == generate_uid(random.Random(1))


@pytest.mark.parametrize("phone, valid", [
    ("0812345678", True),
    ("+66812345678", True),
    ("021234567", True),
    ("812345678", False),
    ("08123", False),
    ("08-1234-5678", False),
    ("", False),
])
def test_phone_validation(phone, valid):
    assert is_valid_phone(phone) is valid
