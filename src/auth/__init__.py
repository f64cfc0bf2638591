from src.auth.session import SessionUser, decode_session_token, get_session_user, require_session

__all__ = [
    "SessionUser",
    "decode_session_token",
    "get_session_user",
    "require_session",
]
