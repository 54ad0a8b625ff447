"""Request dependencies: the authenticated principal.

Authentication happens upstream; the gateway forwards the caller's identity
in headers and the ordering API trusts them.
"""

from fastapi import Header, HTTPException

from ordering.order.access import Principal, Role


def get_principal(
    x_user_id: str = Header(default=""),
    x_user_role: str = Header(default=Role.BUYER.value),
    x_user_admin: bool = Header(default=False),
) -> Principal:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    if x_user_role not in {role.value for role in Role}:
        raise HTTPException(status_code=401, detail=f"Unknown role: {x_user_role}")
    return Principal(user_id=x_user_id, role=x_user_role, is_admin=x_user_admin)
