from pydantic import field_validator


def non_nullable(*fields: str):
    """
    Validator for partial-update schemas: the named fields may be omitted,
    but an explicit null is rejected (the stored record requires a value).
    """
    def check(cls, value):
        if value is None:
            raise ValueError("may be omitted but cannot be null")
        return value

    return field_validator(*fields)(check)
