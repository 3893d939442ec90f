"""Client-side encryption of secret values with a libsodium sealed box."""

import base64

from nacl import encoding, exceptions, public

from .errors import InvalidArgument


def encrypt_secret(public_key_b64: str, plaintext: str) -> str:
    """Encrypt ``plaintext`` for the repository key, returning base64 ciphertext."""
    try:
        key = public.PublicKey(public_key_b64.encode("utf-8"), encoding.Base64Encoder)
    except (exceptions.CryptoError, ValueError, TypeError) as e:
        raise InvalidArgument(f"Invalid public key: {e}") from e
    sealed = public.SealedBox(key).encrypt(plaintext.encode("utf-8"))
    return base64.b64encode(sealed).decode("ascii")
