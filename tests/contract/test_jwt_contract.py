"""Contract tests for the JWT wire format.

Other services verify tokens issued here with nothing but the shared
secret. These tests pin what they rely on:

- Claim set: sub, name, roles, iat, exp, iss, aud (and nothing else)
- Fixed issuer ``org.nzvirtual.api`` and audience ``flyak``
- Signing algorithm: HS512 over the base64-decoded secret
- ``sub`` is the decimal user id as a string
"""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from flyak.schemas.auth import Principal
from tests.helpers.token_factory import TEST_KEY, encode_claims, valid_claims

PILOT = Principal(id=1001, name="Contract Pilot", roles=["pilot", "pilot"])


# ---------------------------------------------------------------------------
# Contract: tokens we issue verify with a plain HS512 decoder
# ---------------------------------------------------------------------------


class TestIssuedTokensVerifyExternally:
    def test_plain_decoder_accepts_token(self, token_service):
        token = token_service.generate_token(PILOT)
        claims = jwt.decode(
            token,
            TEST_KEY,
            algorithms=["HS512"],
            audience="flyak",
            issuer="org.nzvirtual.api",
        )
        assert claims["sub"] == "1001"

    def test_decoder_with_other_algorithm_rejects(self, token_service):
        from jose import JWTError

        token = token_service.generate_token(PILOT)
        with pytest.raises(JWTError):
            jwt.decode(token, TEST_KEY, algorithms=["HS256"], audience="flyak")

    def test_roles_keep_order_and_duplicates(self, token_service):
        claims = jwt.get_unverified_claims(token_service.generate_token(PILOT))
        assert claims["roles"] == ["pilot", "pilot"]

    def test_sub_is_string(self, token_service):
        claims = jwt.get_unverified_claims(token_service.generate_token(PILOT))
        assert isinstance(claims["sub"], str)
        assert claims["sub"].isdigit()

    def test_time_claims_are_integer_seconds(self, token_service):
        claims = jwt.get_unverified_claims(token_service.generate_token(PILOT))
        assert isinstance(claims["iat"], int)
        assert isinstance(claims["exp"], int)

    def test_expires_within_configured_window(self, token_service):
        claims = jwt.get_unverified_claims(token_service.generate_token(PILOT))
        exp = datetime.fromtimestamp(claims["exp"], tz=UTC)
        delta = exp - datetime.now(UTC)

        # Should expire within ±1 minute of configured expiry
        assert abs(delta - token_service.lifetime) < timedelta(minutes=1)


# ---------------------------------------------------------------------------
# Contract: tokens from a compatible issuer are accepted
# ---------------------------------------------------------------------------


class TestForeignTokensAccepted:
    def test_hand_built_token_validates(self, token_service):
        token = encode_claims(valid_claims(sub="5", roles=[]))
        assert token_service.validate(token)
        assert token_service.get_subject(token) == "5"

    def test_extra_claims_do_not_break_validation(self, token_service):
        token = encode_claims(valid_claims(jti="abc", scope="read"))
        assert token_service.validate(token)
