"""Short code generation utilities."""

import hashlib
import secrets
import string
from typing import Optional


# Width of the short_code column
MAX_CODE_LENGTH = 8

# Fixed path segments under /api/v1 that would shadow a code of the same name
RESERVED_CODES = frozenset({"shorten", "health"})


class ShortCodeGenerator:
    """Generate fixed-length candidate short codes."""
    
    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9
    
    STRATEGIES = ("random", "url_hash")
    
    def __init__(self, length: int = MAX_CODE_LENGTH, strategy: str = "random"):
        """Initialize short code generator.
        
        Args:
            length: Length of every generated code (1-8)
            strategy: "random" for pure randomness, "url_hash" to hash the
                target URL together with a fresh salt
        """
        if not 1 <= length <= MAX_CODE_LENGTH:
            raise ValueError(f"Short code length must be between 1 and {MAX_CODE_LENGTH}, got {length}")
        if strategy not in self.STRATEGIES:
            raise ValueError(f"Unknown short code strategy: {strategy}")
        
        self.length = length
        self.strategy = strategy
    
    def generate(self, long_url: Optional[str] = None) -> str:
        """Generate a candidate short code.
        
        Every call draws fresh randomness, so retrying after a collision
        yields a different candidate with high probability. Codes that
        collide with fixed API paths are redrawn.
        
        Args:
            long_url: Target URL, used by the url_hash strategy
            
        Returns:
            Short code of exactly ``self.length`` characters
        """
        while True:
            if self.strategy == "url_hash" and long_url:
                code = self.generate_from_url(long_url)
            else:
                code = self.generate_random()
            if code not in RESERVED_CODES:
                return code
    
    def generate_random(self) -> str:
        """Generate a random short code."""
        return ''.join(secrets.choice(self.BASE62_CHARS) for _ in range(self.length))
    
    def generate_from_url(self, long_url: str) -> str:
        """Generate short code from a salted URL hash.
        
        The salt keeps repeated calls for the same URL from producing the
        same code.
        
        Args:
            long_url: The URL to hash
            
        Returns:
            Short code based on the URL hash
        """
        salt = secrets.token_bytes(8)
        digest = hashlib.sha256(salt + long_url.encode("utf-8")).digest()
        code = self._int_to_base62(int.from_bytes(digest, "big"))
        
        return code.rjust(self.length, self.BASE62_CHARS[0])[:self.length]
    
    def _int_to_base62(self, num: int) -> str:
        """Convert integer to base62 string."""
        if num == 0:
            return self.BASE62_CHARS[0]
        
        result = []
        base = len(self.BASE62_CHARS)
        
        while num > 0:
            num, remainder = divmod(num, base)
            result.append(self.BASE62_CHARS[remainder])
        
        return ''.join(reversed(result))
    
    @staticmethod
    def is_valid_format(code: str, length: Optional[int] = None) -> bool:
        """Check if code has valid format.
        
        Args:
            code: Code to validate
            length: Exact length to require (any length up to 8 if omitted)
            
        Returns:
            True if valid format
        """
        if not code or not isinstance(code, str):
            return False
        if length is not None and len(code) != length:
            return False
        if len(code) > MAX_CODE_LENGTH:
            return False
        return all(c in ShortCodeGenerator.BASE62_CHARS for c in code)
