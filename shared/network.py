from typing import Any
import logging

logger = logging.getLogger("hostinventory.network")


def normalize_mac(address: str | None) -> str | None:
    """
    Canonical form used to join the two adapter sources.

    Sources disagree on separators ("AA:BB:CC:DD:EE:FF" from WMI,
    "AA-BB-CC-DD-EE-FF" from Get-NetAdapter style listings) and on case.
    """
    if not address:
        return None
    return address.replace(":", "-").upper()


def build_adapter_lookup(metadata: list[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """Map normalized MAC -> metadata record. A repeated MAC keeps the last record."""
    lookup: dict[str, dict[str, Any]] = {}
    for record in metadata:
        key = normalize_mac(record.get("MacAddress"))
        if key is None:
            continue
        if key in lookup:
            logger.debug("Duplicate hardware address %s, keeping %s", key, record.get("Name"))
        lookup[key] = record
    return lookup


def enrich_adapters(
    ip_configs: list[dict[str, Any]],
    metadata: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """
    Merge adapter metadata into each IP configuration by hardware address.

    An IP configuration with no matching adapter keeps its IP fields and
    gets None for Name, InterfaceIndex, Status and LinkSpeed.
    """
    lookup = build_adapter_lookup(metadata)
    adapters: list[dict[str, Any]] = []

    for config in ip_configs:
        match = lookup.get(normalize_mac(config.get("MACAddress")), {})
        if not match:
            logger.debug("No adapter metadata for %s", config.get("MACAddress"))

        adapters.append({
            "Name": match.get("Name"),
            "Description": config.get("Description"),
            "InterfaceIndex": match.get("InterfaceIndex"),
            "Status": match.get("Status"),
            "LinkSpeed": match.get("LinkSpeed"),
            "DHCPEnabled": config.get("DHCPEnabled"),
            "DHCPServer": config.get("DHCPServer"),
            "IPAddress": config.get("IPAddress", ""),
            "IPSubnet": config.get("IPSubnet", ""),
            "DefaultIPGateway": config.get("DefaultIPGateway", ""),
            "DNSDomain": config.get("DNSDomain"),
            "DNSServerSearchOrder": config.get("DNSServerSearchOrder", ""),
            "MACAddress": config.get("MACAddress"),
        })

    return adapters
