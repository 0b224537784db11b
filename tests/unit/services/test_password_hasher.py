import pytest

from auth_service.adapter.services.password_hasher import BcryptPasswordHasher


@pytest.fixture(scope="module")
def hasher():
    return BcryptPasswordHasher(rounds=4)


def test_hash_and_verify(hasher):
    digest = hasher.hash("SecurePass123!")

    assert digest != "SecurePass123!"
    assert hasher.verify(digest, "SecurePass123!") is True
    assert hasher.verify(digest, "WrongPassword!") is False


def test_missing_digest_never_verifies(hasher):
    assert hasher.verify(None, "SecurePass123!") is False
    assert hasher.verify("", "SecurePass123!") is False


def test_malformed_digest_does_not_raise(hasher):
    assert hasher.verify("not-a-bcrypt-hash", "SecurePass123!") is False


def test_empty_password_cannot_be_hashed(hasher):
    with pytest.raises(ValueError):
        hasher.hash("")


def test_password_over_72_bytes_cannot_be_hashed(hasher):
    # 72 characters but 144 bytes
    with pytest.raises(ValueError):
        hasher.hash("é" * 72)


def test_password_of_exactly_72_bytes_is_hashed(hasher):
    digest = hasher.hash("a" * 72)

    assert hasher.verify(digest, "a" * 72) is True


def test_over_long_password_runs_bcrypt_on_both_paths(hasher, monkeypatch):
    from auth_service.adapter.services import password_hasher as module

    digest = hasher.hash("SecurePass123!")
    seen = []
    real_checkpw = module.bcrypt.checkpw

    def spy(candidate, hashed):
        seen.append(candidate)
        return real_checkpw(candidate, hashed)

    monkeypatch.setattr(module.bcrypt, "checkpw", spy)

    assert hasher.verify(digest, "x" * 200) is False
    assert hasher.verify(None, "x" * 200) is False

    assert len(seen) == 2
    assert seen[0] == seen[1] == b"x" * 72
