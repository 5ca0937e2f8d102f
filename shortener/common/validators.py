"""Validation utilities for URL shortener."""

from typing import Tuple
from urllib.parse import urlparse

from ..shortcode import MAX_CODE_LENGTH, ShortCodeGenerator


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Check that a long URL is well-formed.
    
    Only shape is checked: an http(s) scheme, a host and no control
    characters (the store rejects NUL bytes outright). Length is not
    limited and reachability is never tested.
    
    Args:
        url: The URL to validate
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str) or not url.strip():
        return False, "URL is required"
    
    if any(ord(c) < 32 or ord(c) == 127 for c in url):
        return False, "URL must not contain control characters"
    
    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {e}"
    
    if result.scheme not in ("http", "https"):
        return False, "URL must use http or https protocol"
    
    if not result.netloc:
        return False, "URL must have a valid domain"
    
    return True, ""


def is_valid_short_code(short_code: str) -> Tuple[bool, str]:
    """Check that a short code could have been generated by this service.
    
    Args:
        short_code: The short code to validate
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"
    
    if len(short_code) > MAX_CODE_LENGTH:
        return False, f"Short code must be at most {MAX_CODE_LENGTH} characters"
    
    if not ShortCodeGenerator.is_valid_format(short_code):
        return False, "Short code can only contain letters and digits"
    
    return True, ""
