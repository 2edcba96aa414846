import re

# Object IDs may only contain alphanumerics, '.', '_' or '-'
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def sanitize_user_id(user_id: str) -> str:
    return _UNSAFE_CHARS.sub("_", user_id)


def make_object_id(issuer_id: str, user_id: str, class_id: str) -> str:
    """Format: `issuerId.userId-classId`, with userId sanitized."""
    return f"{issuer_id}.{sanitize_user_id(user_id)}-{class_id}"


def qualified_class_id(issuer_id: str, class_id: str) -> str:
    return f"{issuer_id}.{class_id}"
