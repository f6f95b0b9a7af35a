import time

import pyotp

from shuvodin.models import TWO_FA_TYPE, User, Verification
from shuvodin.two_factor import (
    consume_backup_code,
    decrypt_backup_codes,
    encrypt_backup_codes,
    generate_backup_codes,
    get_totp,
    start_two_factor_setup,
    verify_totp_code,
)


def _user(db):
    user = User(email="tfa@example.com", username="tfa_user")
    db.add(user)
    db.commit()
    return user


def test_backup_code_format():
    codes = generate_backup_codes()
    assert len(codes) == 10
    assert len(set(codes)) == 10
    for code in codes:
        first, second = code.split("-")
        assert len(first) == len(second) == 4
        assert code == code.upper()


def test_backup_codes_encrypt_round_trip():
    codes = generate_backup_codes(3)
    encrypted = encrypt_backup_codes(codes)
    assert encrypted != codes
    assert decrypt_backup_codes(encrypted) == codes


def test_setup_replaces_pending_secret(db):
    user = _user(db)
    first = start_two_factor_setup(db, user).secret
    second = start_two_factor_setup(db, user).secret

    assert first != second
    assert db.query(Verification).filter(Verification.target == str(user.id)).count() == 1


def test_totp_accepts_adjacent_window(db):
    verification = start_two_factor_setup(db, _user(db))
    totp = get_totp(verification)

    assert verify_totp_code(verification, totp.now())
    assert verify_totp_code(verification, totp.at(int(time.time()), counter_offset=-1))


def test_consume_backup_code_once(db):
    user = _user(db)
    verification = Verification(
        type=TWO_FA_TYPE,
        target=str(user.id),
        secret=pyotp.random_base32(),
        backup_codes=encrypt_backup_codes(["ABCD-1234", "WXYZ-9876"]),
    )
    db.add(verification)
    db.commit()

    assert consume_backup_code(db, verification, "abcd-1234")
    assert not consume_backup_code(db, verification, "ABCD-1234")
    assert decrypt_backup_codes(verification.backup_codes) == ["WXYZ-9876"]


def test_undecryptable_codes_are_rejected(db):
    user = _user(db)
    verification = Verification(
        type=TWO_FA_TYPE, target=str(user.id), secret=pyotp.random_base32(), backup_codes=["garbage"]
    )
    db.add(verification)
    db.commit()

    assert consume_backup_code(db, verification, "ABCD-1234") is False
