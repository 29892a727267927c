from urllib.parse import urlparse

MAX_NAME_LENGTH = 100
MAX_IMAGE_URL_LENGTH = 2000
# Largest value a signed 32-bit INTEGER column holds
MAX_IDENTIFIER = 2 ** 31 - 1
NAME_PUNCTUATION = set(" -_'.,/&()#")


def string_is_empty(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_valid_name(name) -> bool:
    """Letters, digits, spaces and light punctuation, at most 100 characters."""
    if string_is_empty(name) or not isinstance(name, str):
        return False
    if len(name) > MAX_NAME_LENGTH:
        return False
    return all(c.isalnum() or c in NAME_PUNCTUATION for c in name)


def parse_part_number(value):
    """Returns the part number as a positive int, or None when malformed or out of range."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip().isdecimal():
        digits = value.strip()
        if len(digits) > len(str(MAX_IDENTIFIER)):
            return None
        number = int(digits)
    else:
        return None
    return number if 0 < number <= MAX_IDENTIFIER else None


def is_url(value) -> bool:
    if not isinstance(value, str) or len(value) > MAX_IMAGE_URL_LENGTH:
        return False
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc) and ' ' not in value.strip()


def parse_identifier(value):
    """Surrogate ids (projects, users) follow the same rules as part numbers."""
    return parse_part_number(value)
