"""Testes para as primitivas de criptografia."""

import pytest

from keyset_manager import (
    AESGCMCipher,
    ChaCha20Poly1305Cipher,
    PrimitiveError,
    RandomSourceError,
    generate_random_bytes,
    hash_for_string,
)
from keyset_manager import cipher
from keyset_manager.cipher import NONCE_SIZE, TAG_SIZE


def test_seal_open_roundtrip():
    """Testa criptografia/descriptografia com chave derivada de string."""
    secret_key = hash_for_string("SEGREDO QUE NUNCA APARECE COMO LITERAL NO CODIGO")
    value = b"valor secreto que precisa ser protegido"

    encrypted = cipher.seal(value, secret_key)
    assert encrypted != value
    assert len(encrypted) == NONCE_SIZE + len(value) + TAG_SIZE

    assert cipher.open(encrypted, secret_key) == value


@pytest.mark.parametrize("cipher_cls", [AESGCMCipher, ChaCha20Poly1305Cipher])
def test_backends_roundtrip(cipher_cls):
    """Testa as duas cifras AEAD suportadas."""
    key = generate_random_bytes(32)
    c = cipher_cls()
    assert c.open(c.seal(b"data", key), key) == b"data"


def test_seal_uses_random_nonce():
    """Testa que dois seals do mesmo valor produzem saídas diferentes."""
    key = generate_random_bytes(32)
    assert cipher.seal(b"data", key) != cipher.seal(b"data", key)


def test_open_detects_tampering():
    """Testa que inverter qualquer bit do ciphertext causa falha."""
    key = generate_random_bytes(32)
    encrypted = cipher.seal(b"tamper me", key)

    for i in range(len(encrypted)):
        for bit in (0x01, 0x80):
            tampered = bytearray(encrypted)
            tampered[i] ^= bit
            with pytest.raises(PrimitiveError):
                cipher.open(bytes(tampered), key)


def test_open_wrong_key():
    """Testa falha de autenticação com a chave errada."""
    encrypted = cipher.seal(b"data", generate_random_bytes(32))

    with pytest.raises(PrimitiveError, match="Falha de autenticação"):
        cipher.open(encrypted, generate_random_bytes(32))


def test_open_too_short():
    """Testa erro quando o ciphertext é menor que nonce + tag."""
    with pytest.raises(PrimitiveError, match="muito curto"):
        cipher.open(b"x" * (NONCE_SIZE + TAG_SIZE - 1), generate_random_bytes(32))


def test_invalid_key_length():
    """Testa que chaves de tamanho inválido geram PrimitiveError."""
    with pytest.raises(PrimitiveError, match="Chave inválida"):
        cipher.seal(b"data", b"short")


def test_chacha_rejects_aes128_key():
    """Testa que ChaCha20 exige chave de 32 bytes."""
    with pytest.raises(PrimitiveError):
        ChaCha20Poly1305Cipher().seal(b"data", b"k" * 16)


def test_custom_random_source_for_nonce():
    """Testa que o nonce vem da fonte aleatória injetada."""

    class FixedSource:
        def bytes(self, n):
            return b"\x07" * n

    encrypted = AESGCMCipher(FixedSource()).seal(b"data", generate_random_bytes(32))
    assert encrypted[:NONCE_SIZE] == b"\x07" * NONCE_SIZE


def test_random_source_failure(monkeypatch):
    """Testa que falha de entropia vira RandomSourceError."""

    def broken(n):
        raise OSError("no entropy")

    monkeypatch.setattr(cipher.secrets, "token_bytes", broken)

    with pytest.raises(RandomSourceError):
        generate_random_bytes(32)


def test_hash_for_string():
    """Testa que hash_for_string é determinístico e tem 256 bits."""
    assert len(hash_for_string("abc")) == 32
    assert hash_for_string("abc") == hash_for_string("abc")
    assert hash_for_string("abc") != hash_for_string("abd")
