"""Short code generation utilities."""

import secrets
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate short codes for stored madlibs."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_lowercase + string.ascii_uppercase + string.digits

    def __init__(self, default_length: int = 6):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
        """
        self.default_length = default_length

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Each symbol is drawn uniformly from the 62-symbol alphabet.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(secrets.choice(self.BASE62_CHARS) for _ in range(length))

    def is_valid_code(self, code: str) -> bool:
        """Check that ``code`` could have been produced by this generator."""
        return len(code) == self.default_length and self.is_valid_format(code)

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code has valid format (non-empty, alphanumeric only).

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        if not code or not isinstance(code, str):
            return False
        return all(c in ShortCodeGenerator.BASE62_CHARS for c in code)
