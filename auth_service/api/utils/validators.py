from auth_service.app.services.password_hasher import MAX_PASSWORD_BYTES, password_fits


def check_password_bytes(value: str) -> str:
    """Pydantic field validator: bcrypt's limit is in bytes, not characters"""
    if value is not None and not password_fits(value):
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes (UTF-8)")
    return value
