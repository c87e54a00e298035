"""Net map serialization — JSON conversion."""

from __future__ import annotations

from schemalayout.pipeline.circuit.models import PinRef

from .models import Net
from .resolver import group_nets


def nets_to_dict(net_map: dict[PinRef, str]) -> dict:
    """Serialize a pin -> net id map, grouped by net, ground first."""
    return {
        "nets": [_net_to_dict(net) for net in group_nets(net_map)],
    }


def _net_to_dict(net: Net) -> dict:
    return {
        "id": net.id,
        "pins": sorted(str(ref) for ref in net.members),
    }


def parse_nets(data: dict) -> dict[PinRef, str]:
    """Parse a nets.json dict back into a pin -> net id map."""
    result: dict[PinRef, str] = {}
    for net in data.get("nets", []):
        for ref in net["pins"]:
            result[PinRef.parse(ref)] = net["id"]
    return result
