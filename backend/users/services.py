from delivery_core.exceptions import Unauthenticated


def require_authenticated(user, action: str = "perform this action"):
    """
    Return `user` if it is a real, signed-in account.

    Services take the acting user as an explicit argument; a missing or
    anonymous user is rejected instead of being treated as a guest.
    """
    if user is None or not getattr(user, "is_authenticated", False):
        raise Unauthenticated(f"You must be signed in to {action}.")
    return user
