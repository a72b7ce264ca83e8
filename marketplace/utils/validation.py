from marketplace.errors import ValidationError

# Largest value an INTEGER column holds on every supported backend.
MAX_INTEGER = 2 ** 31 - 1


def require_fields(data, *fields):
    if not isinstance(data, dict):
        raise ValidationError('Missing required fields')
    missing = [field for field in fields if data.get(field) in (None, '')]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def require_strings(data, *fields):
    """Like ``require_fields``, but every field must also be text."""
    require_fields(data, *fields)
    invalid = [field for field in fields if not isinstance(data[field], str)]
    if invalid:
        raise ValidationError(f"Fields must be strings: {', '.join(invalid)}")


def parse_id(value, field):
    if isinstance(value, str) and value.strip().isdecimal():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 < value <= MAX_INTEGER:
        raise ValidationError(f'{field} must be an integer id')
    return value
