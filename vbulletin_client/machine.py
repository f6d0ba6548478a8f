"""Machine identification used for the handshake fingerprint."""

import uuid


def get_mac_address() -> str:
    """
    Return the MAC address of a network interface, or '' if none is known.

    uuid.getnode() falls back to a random number with the multicast bit set
    when no hardware address can be read; that value is not a stable
    identifier and is discarded.
    """
    node = uuid.getnode()
    if (node >> 40) & 0x01:
        return ''
    return ':'.join(f"{(node >> shift) & 0xff:02x}" for shift in range(40, -1, -8))
