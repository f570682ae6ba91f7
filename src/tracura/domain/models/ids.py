"""Opaque stable identities for phases, departments and line items."""
import uuid


def new_id() -> str:
    """Generate a fresh opaque id."""
    return str(uuid.uuid4())
