"""Internal field key generator.

Field keys are opaque, random and stable: ``fld_`` plus eight lowercase
alphanumerics. They are generated once when a field is created and never
change afterwards, so renaming a label never touches stored row data.
"""

import secrets
import string


class FieldKeyExhaustedError(Exception):
    """Raised when no unused key could be generated."""

    pass


class FieldKeyGenerator:
    """Generate internal keys that are unique within a collection."""

    PREFIX = "fld_"
    LENGTH = 8
    ALPHABET = string.ascii_lowercase + string.digits
    MAX_ATTEMPTS = 20

    @classmethod
    def generate(cls) -> str:
        """Generate a random key.

        Examples:
            >>> FieldKeyGenerator.generate()  # doctest: +SKIP
            'fld_k3x9a0qz'
        """
        suffix = "".join(secrets.choice(cls.ALPHABET) for _ in range(cls.LENGTH))
        return f"{cls.PREFIX}{suffix}"

    @classmethod
    def generate_unique(cls, taken: set[str]) -> str:
        """Generate a key that is not in ``taken``.

        ``taken`` must include keys of deleted fields still present in row
        data bags, so a new field never inherits orphaned values.

        Raises:
            FieldKeyExhaustedError: If every attempt collided.
        """
        for _ in range(cls.MAX_ATTEMPTS):
            key = cls.generate()
            if key not in taken:
                return key
        raise FieldKeyExhaustedError(
            f"Could not generate an unused field key after {cls.MAX_ATTEMPTS} attempts"
        )
