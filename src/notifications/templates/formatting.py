"""Plain-text building blocks shared by the order templates."""


def money(amount) -> str:
    return f"{float(amount or 0):.2f}"


def delivery_lines(sub_order: dict) -> list[str]:
    if sub_order.get("deliveryMethod") == "pickup":
        pickup = sub_order.get("pickupInfo") or {}
        lines = [f"Delivery: pickup at {pickup.get('timeSlot') or 'a time to be agreed'}"]
        location = pickup.get("location")
        if location:
            lng, lat = location["coordinates"]
            lines.append(f"Pickup location: {lat}, {lng}")
        return lines

    third_party = sub_order.get("thirdPartyInfo") or {}
    lines = ["Delivery: third-party courier"]
    if third_party.get("partnerOrderId"):
        lines.append(f"Partner reference: {third_party['partnerOrderId']}")
    if third_party.get("eta"):
        lines.append(f"Estimated arrival: {third_party['eta']}")
    if third_party.get("cost") is not None:
        lines.append(f"Delivery cost: {money(third_party['cost'])}")
    return lines


def item_lines(sub_order: dict) -> list[str]:
    lines = []
    for item in sub_order.get("items", []):
        name = item.get("productName") or item.get("listingId")
        line_total = item["qty"] * item["priceAtOrder"]
        lines.append(
            f"  - {name} x{item['qty']} @ {money(item['priceAtOrder'])} = {money(line_total)} [{item['itemStatus']}]"
        )
    return lines


def sub_order_block(sub_order: dict) -> str:
    lines = [f"Seller {sub_order['sellerId']} ({sub_order['status']})"]
    lines.extend(item_lines(sub_order))
    lines.append(f"  Subtotal: {money(sub_order['subtotal'])}")
    lines.extend(f"  {line}" for line in delivery_lines(sub_order))
    return "\n".join(lines)


def order_summary(order: dict) -> str:
    blocks = [sub_order_block(sub_order) for sub_order in order.get("subOrders", [])]
    blocks.append(f"Grand total: {money(order.get('grandTotal'))}")
    return "\n\n".join(blocks)
