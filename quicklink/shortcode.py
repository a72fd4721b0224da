"""Short code generation."""

import random
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate random lowercase base-36 short codes."""

    BASE36_CHARS = string.ascii_lowercase + string.digits  # a-z0-9

    def __init__(self, default_length: int = 6, rng: Optional[random.Random] = None):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            rng: Optional random source (seed one for reproducible codes)
        """
        self.default_length = default_length
        self.rng = rng or random.Random()

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Codes are not checked for uniqueness; with 36^6 combinations a
        collision is unlikely but possible.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return "".join(self.rng.choices(self.BASE36_CHARS, k=length))

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code consists only of lowercase base-36 characters."""
        return bool(code) and all(c in ShortCodeGenerator.BASE36_CHARS for c in code)
