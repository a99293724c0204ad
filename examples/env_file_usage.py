"""Exemplo de uso de KeysetConfig.from_file()."""

from pathlib import Path

from keyset_manager import Key, Keyset, KeysetConfig


def main() -> None:
    """Demonstra carga de configuracao via arquivo .env."""
    env_path = Path("example_keyset.env")

    # 1) Escrever um arquivo .env de exemplo
    env_path.write_text(
        'KEYSET_ROTATION_GRACE="7200"\n'
        "KEYSET_CIPHER_BACKEND=chacha20\n"
        "KEYSET_TYPE_ID=1\n",
        encoding="utf-8",
    )

    # 2) Carregar a configuracao do arquivo (class method)
    config = KeysetConfig.from_file(str(env_path))
    print(f"Cifra: {config.cipher_backend}, grace: {config.rotation_grace:.0f}s")

    # 3) Inicializar o keyset com a configuracao carregada
    keyset = Keyset.from_config(config, Key.new_random())
    ciphertext = keyset.encrypt(b"payload")
    print(f"Texto claro: {keyset.decrypt(ciphertext).decode('utf-8')}")

    # 4) Rotacionar usando o grace configurado
    keyset.rotate()
    print(f"Chaves no keyset: {len(keyset)}")

    # Cleanup do arquivo de exemplo
    if env_path.exists():
        env_path.unlink()


if __name__ == "__main__":
    main()
