from barangay_api.utils.otp import generate_code, hash_code, verify_code


def test_generated_codes_are_six_digits_in_range():
    for _ in range(500):
        code = generate_code()
        assert len(code) == 6
        assert code.isdigit()
        assert 100000 <= int(code) <= 999999


def test_hash_is_deterministic_sha256_hex():
    digest = hash_code("123456")
    assert digest == hash_code("123456")
    assert len(digest) == 64
    assert all(c in "0123456789abcdef" for c in digest)
    assert digest != hash_code("123457")


def test_verify_code_matches_only_the_hashed_code():
    stored = hash_code("654321")
    assert verify_code("654321", stored)
    assert not verify_code("654320", stored)
    assert not verify_code("", stored)


def test_verify_code_accepts_integers_and_rejects_none():
    stored = hash_code("654321")
    assert verify_code(654321, stored)
    assert not verify_code(None, stored)
    assert not verify_code("654321", None)
