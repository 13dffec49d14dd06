"""
Ownership checks for reviews and comments.

Only the author of a resource may change it. A resource whose author
account was removed (owner is None) belongs to nobody.
"""


def is_owner(actor_id: int | None, owner_id: int | None) -> bool:
    """
    Decide whether the actor owns a resource.

    Args:
        actor_id: Authenticated user performing the operation
        owner_id: user_id stored on the resource

    Returns:
        True only when both ids are present and equal
    """
    if actor_id is None or owner_id is None:
        return False
    return actor_id == owner_id
