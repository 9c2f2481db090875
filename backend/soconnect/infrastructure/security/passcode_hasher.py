"""
Salted passcode hashing.

Stored format: pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>
"""

import hashlib
import hmac
import secrets

ALGORITHM = "pbkdf2_sha256"


class PasscodeHasher:
    def __init__(self, iterations: int):
        self.iterations = iterations
        # Verified against when the code is unknown, so both failure paths cost the same
        self._dummy_hash = self.hash("not-a-real-passcode")

    def _derive(self, passcode: str, salt: bytes, iterations: int) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", passcode.encode("utf-8"), salt, iterations)

    def hash(self, passcode: str) -> str:
        salt = secrets.token_bytes(16)
        digest = self._derive(passcode, salt, self.iterations)
        return f"{ALGORITHM}${self.iterations}${salt.hex()}${digest.hex()}"

    def verify(self, passcode: str, stored: str) -> bool:
        try:
            algorithm, iterations, salt_hex, digest_hex = stored.split("$")
            if algorithm != ALGORITHM:
                return False
            expected = bytes.fromhex(digest_hex)
            digest = self._derive(passcode, bytes.fromhex(salt_hex), int(iterations))
        except ValueError:
            return False
        return hmac.compare_digest(digest, expected)

    def burn(self, passcode: str) -> None:
        """Spend one verification on a dummy hash."""
        self.verify(passcode, self._dummy_hash)
