"""
core/inventory.py -- Runs every collector in order and assembles the report.

Collectors run one after another on the calling thread. Any exception from a
required collector propagates to the caller, so nothing is written for a
failed run. Installed products are the only best-effort section.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from collectors import windows
from core.models import InventoryReport, RunContext, SectionResult
from shared.network import enrich_adapters
from shared.system import default_users_root, get_last_user_folder, get_user_profiles, list_user_folders

logger = logging.getLogger("hostinventory.inventory")

PRODUCTS_REMEDIATION = (
    "Run from an elevated prompt and check that the Windows Installer service is running."
)


def _step(label: str, func: Callable[..., Any], *args: Any) -> Any:
    logger.info("Collecting %s...", label)
    return func(*args)


def collect_optional_section(
    label: str,
    func: Callable[..., list],
    *args: Any,
    remediation: str | None = None,
) -> SectionResult:
    """
    Run a best-effort collector.

    Any failure is turned into SectionResult(not_checked=True) carrying the
    given remediation hint instead of aborting the run.
    """
    logger.info("Collecting %s...", label)
    try:
        return SectionResult(items=func(*args))
    except Exception as e:
        return SectionResult(
            not_checked=True,
            error=f"{type(e).__name__}: {e}",
            remediation=remediation,
        )


def build_inventory(
    connect: Callable[..., Any],
    context: RunContext,
    include_installed_products: bool = False,
    users_root: Path | None = None,
) -> InventoryReport:
    """
    Collect every section and return the assembled report.

    Args:
        connect: factory returning a WMI connection for a namespace
                 (collectors.windows.connect in production).
        context: host name, operator and timestamp for this run.
        include_installed_products: query Win32_Product. Slow; off by default.
        users_root: folder whose subdirectories are user profiles.
    """
    conn = connect(windows.CIMV2)
    users_root = users_root or default_users_root()

    general = _step("system identity", windows.collect_general, conn)
    boot_configuration = _step("boot configuration", windows.collect_boot_configuration, conn)
    bios = _step("BIOS", windows.collect_bios, conn)
    operating_system = _step("operating system", windows.collect_operating_system, conn)
    time_zone = _step("time zone", windows.collect_time_zone, conn)
    logical_disks = _step("logical disks", windows.collect_logical_disks, conn)
    disk_drives = _step("disk drives", windows.collect_disk_drives, conn)
    processor = _step("processors", windows.collect_processors, conn)
    physical_memory = _step("physical memory", windows.collect_physical_memory, conn)

    ip_configs = _step("network adapters", windows.collect_ip_configurations, conn)
    adapter_metadata = _step("adapter metadata", windows.collect_adapter_metadata, conn)
    network_adapters = enrich_adapters(ip_configs, adapter_metadata)

    printers = _step("printers", windows.collect_printers, conn)
    user_folders = _step("user profiles", list_user_folders, users_root)
    user_profiles = get_user_profiles(user_folders)
    hotfixes = _step("hotfixes", windows.collect_hotfixes, conn)
    video_controllers = _step("video controllers", windows.collect_video_controllers, conn)
    monitor_count = _step("monitors", windows.count_monitors, connect(windows.WMI_NAMESPACE))
    usb_devices = _step("USB devices", windows.collect_usb_devices, conn)
    last_user_folder = get_last_user_folder(user_folders)

    warnings: list[str] = []
    installed_products: list[dict[str, Any]] = []
    if include_installed_products:
        result = collect_optional_section(
            "installed products",
            windows.collect_installed_products,
            conn,
            remediation=PRODUCTS_REMEDIATION,
        )
        if result.not_checked:
            logger.warning("Installed products not collected: %s", result.error)
            warnings.append(f"InstalledProducts: {result.error}")
        else:
            installed_products = result.items

    return InventoryReport(
        computer=context.computer,
        generated_at=context.generated_at,
        generated_by=context.operator,
        general=general,
        boot_configuration=boot_configuration,
        bios=bios,
        operating_system=operating_system,
        time_zone=time_zone,
        logical_disks=logical_disks,
        disk_drives=disk_drives,
        processor=processor,
        physical_memory=physical_memory,
        network_adapters=network_adapters,
        printers=printers,
        user_profiles=user_profiles,
        hotfixes=hotfixes,
        video_controllers=video_controllers,
        monitor_count=monitor_count,
        usb_devices=usb_devices,
        last_user_folder_touched=last_user_folder,
        installed_products=installed_products,
        warnings=warnings,
    )
