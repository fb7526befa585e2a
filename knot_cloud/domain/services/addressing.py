"""Domain service deriving broker addresses."""

from knot_cloud.shared.consts import GATEWAY_ADDRESS_SUFFIX


def gateway_address_for(address: str) -> str:
    """Return the broadcast group address that publishes ``address`` events.

    Gateways share the device address prefix, so the last four characters
    are replaced with ``0000``. The address is not validated; anything
    shorter than four characters becomes the bare suffix.
    """
    return address[: -len(GATEWAY_ADDRESS_SUFFIX)] + GATEWAY_ADDRESS_SUFFIX
