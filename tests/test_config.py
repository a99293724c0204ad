"""Testes para KeysetConfig."""

import logging

import pytest

from keyset_manager import AESGCMCipher, ChaCha20Poly1305Cipher, KeysetConfig
from keyset_manager.config import DEFAULT_ROTATION_GRACE


def test_keyset_config_defaults():
    """Testa valores padrão."""
    config = KeysetConfig()

    assert config.rotation_grace == DEFAULT_ROTATION_GRACE
    assert config.cipher_backend == "aesgcm"
    assert config.type_id == 0
    assert config.logger is None
    assert isinstance(config.create_cipher(), AESGCMCipher)


def test_keyset_config_validation():
    """Testa validação de KeysetConfig."""
    # Backend normalizado
    assert KeysetConfig(cipher_backend="'ChaCha20'").cipher_backend == "chacha20"

    with pytest.raises(ValueError, match="Cifra não suportada"):
        KeysetConfig(cipher_backend="des")

    with pytest.raises(ValueError, match="não pode ser negativo"):
        KeysetConfig(rotation_grace=-1)


def test_keyset_config_create_chacha():
    config = KeysetConfig(cipher_backend="chacha20")
    assert isinstance(config.create_cipher(), ChaCha20Poly1305Cipher)


def test_keyset_config_from_environment(monkeypatch):
    """Testa criação de config a partir de variáveis de ambiente."""
    monkeypatch.setenv("KEYSET_ROTATION_GRACE", "3600")
    monkeypatch.setenv("KEYSET_CIPHER_BACKEND", "chacha20")
    monkeypatch.setenv("KEYSET_TYPE_ID", "5")

    config = KeysetConfig.from_environment()

    assert config.rotation_grace == 3600.0
    assert config.cipher_backend == "chacha20"
    assert config.type_id == 5


def test_keyset_config_from_environment_defaults(monkeypatch):
    """Testa que variáveis ausentes mantêm os padrões."""
    for name in ("KEYSET_ROTATION_GRACE", "KEYSET_CIPHER_BACKEND", "KEYSET_TYPE_ID"):
        monkeypatch.delenv(name, raising=False)

    config = KeysetConfig.from_environment()

    assert config.rotation_grace == DEFAULT_ROTATION_GRACE
    assert config.cipher_backend == "aesgcm"


def test_keyset_config_from_environment_custom_prefix(monkeypatch):
    """Testa prefixo customizado e kwargs adicionais."""
    logger = logging.getLogger("test_logger")
    monkeypatch.setenv("SESSIONS_TYPE_ID", "9")

    config = KeysetConfig.from_environment(prefix="SESSIONS", logger=logger)

    assert config.type_id == 9
    assert config.logger is logger


def test_keyset_config_from_environment_invalid(monkeypatch):
    """Testa erros de valores inválidos no ambiente."""
    monkeypatch.setenv("KEYSET_ROTATION_GRACE", "uma hora")
    with pytest.raises(ValueError, match="KEYSET_ROTATION_GRACE"):
        KeysetConfig.from_environment()

    monkeypatch.setenv("KEYSET_ROTATION_GRACE", "60")
    monkeypatch.setenv("KEYSET_TYPE_ID", "abc")
    with pytest.raises(ValueError, match="KEYSET_TYPE_ID"):
        KeysetConfig.from_environment()


def test_keyset_config_from_file(tmp_path):
    """Testa criação de config a partir de arquivo .env."""
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# configuração do keyset\n"
        'KEYSET_ROTATION_GRACE="600"\n'
        "KEYSET_CIPHER_BACKEND=aesgcm\n"
        "KEYSET_TYPE_ID=2\n"
        "OTHER_VAR=ignored\n"
    )

    config = KeysetConfig.from_file(str(env_file))

    assert config.rotation_grace == 600.0
    assert config.cipher_backend == "aesgcm"
    assert config.type_id == 2


def test_keyset_config_from_file_not_found(tmp_path):
    """Testa erro quando o arquivo .env não existe."""
    with pytest.raises(FileNotFoundError, match="Arquivo .env não encontrado"):
        KeysetConfig.from_file(str(tmp_path / "missing.env"))


@pytest.mark.parametrize("grace", [float("nan"), float("inf")])
def test_keyset_config_rejects_non_finite_grace(grace):
    """Testa que rotation_grace nan/inf é rejeitado."""
    with pytest.raises(ValueError, match="deve ser finito"):
        KeysetConfig(rotation_grace=grace)


def test_keyset_config_from_environment_nan_grace(monkeypatch):
    """Testa que KEYSET_ROTATION_GRACE=nan é rejeitado ao carregar o ambiente."""
    monkeypatch.setenv("KEYSET_ROTATION_GRACE", "nan")

    with pytest.raises(ValueError, match="deve ser finito"):
        KeysetConfig.from_environment()
