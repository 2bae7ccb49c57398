from splurge_safe_copy import constants


def test_constants_exist():
    assert hasattr(constants, "CANONICAL_NEWLINE")
    assert hasattr(constants, "DEFAULT_ENCODING")
    assert hasattr(constants, "DEFAULT_BUFFER_SIZE")
    assert hasattr(constants, "MIN_BUFFER_SIZE")
    assert isinstance(constants.CANONICAL_NEWLINE, str)
    assert isinstance(constants.DEFAULT_ENCODING, str)
    assert isinstance(constants.DEFAULT_BUFFER_SIZE, int)
    assert constants.MIN_BUFFER_SIZE <= constants.DEFAULT_BUFFER_SIZE


def test_canonical_newline_is_supported():
    assert constants.CANONICAL_NEWLINE in constants.SUPPORTED_LINE_TERMINATORS


def test_vowels():
    assert constants.VOWELS == frozenset("aeiou")
    assert constants.ASCII_VOWEL_BYTES == frozenset(b"aeiou")
