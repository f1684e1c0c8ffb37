"""Shortcode generation utility

This module draws random, fixed-width short codes over the [0-9a-z] alphabet.

Functions:
    generate_shortcode(length=6):
        Draw a random short code suitable for use as a URL slug.
    is_valid_shortcode(code):
        Check that a string is a well-formed short code.

Example:
    >>> from kvshortener.utils import generate_shortcode
    >>> generate_shortcode()
    '0k3x9a'
"""

import string
import uuid

from kvshortener.constants import KeyGeneration


ALPHABET = string.digits + string.ascii_lowercase
BASE = len(ALPHABET)  # 10 digits + 26 lowercase letters = 36


def generate_shortcode(length: int = KeyGeneration.LENGTH) -> str:
    """Draw a random short code of exactly `length` characters from [0-9a-z].

    A random UUID (version 4, sourced from os.urandom) is reduced modulo
    BASE^length and base36-encoded, so every code in the 36^length space can
    be drawn. The result is left-padded with '0' to a fixed width.

    Args:
        length (int, optional):
            Number of characters in the code. Defaults to 6.

    Returns:
        str: A lowercase alphanumeric short code.

    NOTE:
        - Nothing is reserved: the caller must check the code against the link
          store and draw again on collision.
        - 122 random bits reduced mod 36^6 leave a negligible bias.
    """
    if not isinstance(length, int):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    value = uuid.uuid4().int % BASE**length

    # Custom base36 encoding algorithm:
    # 1- Encode the random value into base36 (list comprehension, least significant digit first)
    # 2- Reverse order to ensure most significant digit is first (reversed())
    # 3- Join characters into a single string (''.join())
    return ''.join(reversed([ALPHABET[(value // BASE**i) % BASE] for i in range(length)]))


def is_valid_shortcode(code: object) -> bool:
    return isinstance(code, str) and KeyGeneration.PATTERN.fullmatch(code) is not None
