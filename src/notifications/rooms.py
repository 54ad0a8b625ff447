"""Real-time room names that clients subscribe to."""


def buyer_room(buyer_id) -> str:
    return f"buyer:{buyer_id}"


def seller_room(seller_id) -> str:
    return f"seller:{seller_id}"
