"""
    Windows collectors backed by WMI.

    Every collector takes an open WMI connection (see connect()) and returns
    JSON-friendly dicts keyed by the names used in the report. Failures from
    WMI are not caught here: a required class that cannot be queried aborts
    the run.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

logger = logging.getLogger("hostinventory.collectors")

CIMV2 = "root\\cimv2"
WMI_NAMESPACE = "root\\wmi"

GB = 1024 ** 3
FIXED_DRIVE_TYPE = 3
FIXED_DISK_MEDIA = "Fixed hard disk media"


def connect(namespace: str = CIMV2):
    """Open a WMI connection to the local machine."""
    import wmi  # Windows only; imported here so the rest of the package loads anywhere

    logger.debug("Connecting to WMI namespace %s", namespace)
    return wmi.WMI(namespace=namespace)


# -----------------------------
# Value helpers
# -----------------------------

def bytes_to_gb_int(value: Any) -> int:
    """Bytes to whole gigabytes, truncated. WMI hands uint64 over as strings."""
    if value in (None, ""):
        return 0
    return int(int(value) / GB)


def bytes_to_gb_rounded(value: Any) -> float:
    """Bytes to gigabytes rounded to one decimal place."""
    if value in (None, ""):
        return 0.0
    return round(int(value) / GB, 1)


def join_values(values: Any) -> str:
    """Flatten a multi-valued WMI property into a ';' separated string."""
    if not values:
        return ""
    if isinstance(values, str):
        return values
    return ";".join(str(v) for v in values)


def cim_datetime_to_iso(value: str | None) -> str | None:
    """
    Convert a CIM datetime ("20240131083000.500000+060") to ISO 8601.

    The trailing +UUU is the UTC offset in minutes. Values that do not look
    like CIM datetimes are returned unchanged.
    """
    if not value:
        return None
    try:
        parsed = datetime.strptime(value[:14], "%Y%m%d%H%M%S")
    except ValueError:
        return value

    offset = value[21:25]
    if len(offset) == 4 and offset[0] in "+-" and offset[1:].isdigit():
        minutes = int(offset[1:]) * (-1 if offset[0] == "-" else 1)
        parsed = parsed.replace(tzinfo=timezone(timedelta(minutes=minutes)))
    return parsed.isoformat()


def _first(rows):
    """Singleton classes (Win32_BIOS, Win32_OperatingSystem, ...) come back as a one-item list."""
    return rows[0] if rows else None


# -----------------------------
# Identity and context
# -----------------------------

def collect_general(conn) -> dict[str, Any]:
    """Model, manufacturer and owner of this machine."""
    cs = _first(conn.Win32_ComputerSystem())
    if cs is None:
        return {}
    return {
        "Model": cs.Model,
        "Manufacturer": cs.Manufacturer,
        "LocalAdmin": cs.PrimaryOwnerName,
        "SystemType": cs.SystemType,
    }


def collect_boot_configuration(conn) -> dict[str, Any]:
    boot = _first(conn.Win32_BootConfiguration())
    if boot is None:
        return {}
    return {
        "Name": boot.Name,
        "InstallPath": boot.BootDirectory,
    }


def collect_bios(conn) -> dict[str, Any]:
    bios = _first(conn.Win32_BIOS())
    if bios is None:
        return {}
    return {
        "Manufacturer": bios.Manufacturer,
        "SerialNumber": bios.SerialNumber,
        "BiosVersion": bios.SMBIOSBIOSVersion,
    }


def collect_operating_system(conn) -> dict[str, Any]:
    """
        Build, version and lifecycle timestamps of the installed OS.
        Returns:
            dict: InstallDate and LastBootUpTime as ISO 8601 strings.
    """
    os_info = _first(conn.Win32_OperatingSystem())
    if os_info is None:
        return {}
    return {
        "Caption": os_info.Caption,
        "BuildNumber": os_info.BuildNumber,
        "Version": os_info.Version,
        "SerialNumber": os_info.SerialNumber,
        "InstallDate": cim_datetime_to_iso(os_info.InstallDate),
        "LastBootUpTime": cim_datetime_to_iso(os_info.LastBootUpTime),
        "OSArchitecture": os_info.OSArchitecture,
    }


def collect_time_zone(conn) -> dict[str, Any]:
    tz = _first(conn.Win32_TimeZone())
    if tz is None:
        return {}
    return {
        "Bias": tz.Bias,
        "Caption": tz.Caption,
        "StandardName": tz.StandardName,
    }


# -----------------------------
# Storage
# -----------------------------

def collect_logical_disks(conn) -> list[dict[str, Any]]:
    """Fixed volumes only; removable, network and optical drives are skipped."""
    disks = []
    for l_disk in conn.Win32_LogicalDisk(DriveType=FIXED_DRIVE_TYPE):
        disks.append({
            "DeviceID": l_disk.DeviceID,
            "SizeGB": bytes_to_gb_int(l_disk.Size),
            "FreeGB": bytes_to_gb_int(l_disk.FreeSpace),
        })
    return disks


def collect_disk_drives(conn) -> list[dict[str, Any]]:
    drives = []
    for disk in conn.Win32_DiskDrive(MediaType=FIXED_DISK_MEDIA):
        drives.append({
            "HostName": disk.SystemName,
            "Model": disk.Model,
            "SizeGB": bytes_to_gb_int(disk.Size),
            "InterfaceType": disk.InterfaceType,
            # Some controllers pad the serial with spaces
            "SerialNumber": disk.SerialNumber.strip() if disk.SerialNumber else disk.SerialNumber,
        })
    return drives


# -----------------------------
# Hardware and capacity
# -----------------------------

def collect_processors(conn) -> list[dict[str, Any]]:
    processors = []
    for cpu in conn.Win32_Processor():
        processors.append({
            "Name": cpu.Name,
            "Manufacturer": cpu.Manufacturer,
            "MaxClockSpeed": cpu.MaxClockSpeed,
            "NumberOfCores": cpu.NumberOfCores,
            "NumberOfLogicalProcessors": cpu.NumberOfLogicalProcessors,
            "Status": cpu.Status,
        })
    return processors


def collect_physical_memory(conn) -> list[dict[str, Any]]:
    modules = []
    for mem in conn.Win32_PhysicalMemory():
        modules.append({
            "PartNumber": mem.PartNumber.strip() if mem.PartNumber else mem.PartNumber,
            "Tag": mem.Tag,
            "SerialNumber": mem.SerialNumber,
            "Manufacturer": mem.Manufacturer,
            "ConfiguredClockSpeed": mem.ConfiguredClockSpeed,
            "ConfiguredVoltage": mem.ConfiguredVoltage,
            "CapacityGB": bytes_to_gb_rounded(mem.Capacity),
            "BankLabel": mem.BankLabel,
            "DeviceLocator": mem.DeviceLocator,
        })
    return modules


def collect_video_controllers(conn) -> list[dict[str, Any]]:
    controllers = []
    for gpu in conn.Win32_VideoController():
        controllers.append({
            "Status": gpu.Status,
            "Model": gpu.Description,
            # AdapterRAM is a uint32 and saturates at 4 GB on larger cards
            "AdapterRAMGB": bytes_to_gb_rounded(gpu.AdapterRAM),
            "DriverDate": cim_datetime_to_iso(gpu.DriverDate),
            "DriverVersion": gpu.DriverVersion,
            "VideoModeDescription": gpu.VideoModeDescription,
        })
    return controllers


def count_monitors(wmi_conn) -> int:
    """Active displays, counted from root\\wmi (Win32_DesktopMonitor under-reports)."""
    return len(wmi_conn.WmiMonitorBasicDisplayParams())


# -----------------------------
# Network
# -----------------------------

# Win32_NetworkAdapter.NetConnectionStatus, named the way Get-NetAdapter shows them
CONNECTION_STATUS = {
    0: "Disabled",
    1: "Connecting",
    2: "Up",
    3: "Disconnecting",
    4: "Not Present",
    5: "Disabled",
    6: "Malfunction",
    7: "Disconnected",
    8: "Authenticating",
    9: "Up",
    10: "Authentication Failed",
    11: "Invalid Address",
    12: "Credentials Required",
}

# Speed reported by adapters with no link
UNKNOWN_SPEED = 2 ** 63 - 1


def format_link_speed(bits_per_second: Any) -> str | None:
    """Win32_NetworkAdapter.Speed (bps, as a string) to "100 Mbps" / "2.5 Gbps"."""
    if bits_per_second in (None, ""):
        return None
    bps = int(bits_per_second)
    if bps <= 0 or bps >= UNKNOWN_SPEED:
        return None
    if bps >= 10 ** 9:
        return f"{bps / 10 ** 9:g} Gbps"
    return f"{bps / 10 ** 6:g} Mbps"


def collect_adapter_metadata(conn) -> list[dict[str, Any]]:
    """
        Friendly name, index and link state of every adapter with a hardware address.

        NetConnectionID is the name shown in Network Connections ("Ethernet",
        "Wi-Fi"). Adapters without a MAC (WAN miniports, tunnels) are skipped.
    """
    adapters = []
    for adapter in conn.Win32_NetworkAdapter():
        if not adapter.MACAddress:
            continue
        status = adapter.NetConnectionStatus
        adapters.append({
            "Name": adapter.NetConnectionID,
            "MacAddress": adapter.MACAddress,
            "InterfaceIndex": adapter.InterfaceIndex,
            "Status": None if status is None else CONNECTION_STATUS.get(status, str(status)),
            "LinkSpeed": format_link_speed(adapter.Speed),
        })
    return adapters


def collect_ip_configurations(conn) -> list[dict[str, Any]]:
    """
        IP configuration of every adapter that currently has IP enabled.

        Name, InterfaceIndex, Status and LinkSpeed are not part of
        Win32_NetworkAdapterConfiguration; they are filled in later by
        shared.network.enrich_adapters().
    """
    configs = []
    for adapter in conn.Win32_NetworkAdapterConfiguration(IPEnabled=True):
        configs.append({
            "Description": adapter.Description,
            "DHCPEnabled": adapter.DHCPEnabled,
            "DHCPServer": adapter.DHCPServer,
            "IPAddress": join_values(adapter.IPAddress),
            "IPSubnet": join_values(adapter.IPSubnet),
            "DefaultIPGateway": join_values(adapter.DefaultIPGateway),
            "DNSDomain": adapter.DNSDomain,
            "DNSServerSearchOrder": join_values(adapter.DNSServerSearchOrder),
            "MACAddress": adapter.MACAddress,
        })
    return configs


# -----------------------------
# Peripherals
# -----------------------------

def collect_printers(conn) -> list[dict[str, Any]]:
    printers = []
    for printer in conn.Win32_Printer():
        printers.append({
            "Name": printer.Name,
            "DriverName": printer.DriverName,
            "PrinterState": printer.PrinterState,
            "PrinterStatus": printer.PrinterStatus,
            "Location": printer.Location,
            "PortName": printer.PortName,
            "Network": printer.Network,
            "Shared": printer.Shared,
            "WorkOffline": printer.WorkOffline,
        })
    return printers


def collect_usb_devices(conn) -> list[dict[str, Any]]:
    """Plug and Play devices enumerated on a USB bus that are currently present."""
    devices = []
    for device in conn.Win32_PnPEntity():
        instance_id = device.PNPDeviceID or ""
        if not instance_id.upper().startswith("USB"):
            continue
        # Present only exists on Windows 10 and later
        if getattr(device, "Present", True) is False:
            continue
        devices.append({
            "Class": device.PNPClass,
            "Status": device.Status,
            "FriendlyName": device.Name,
            "InstanceId": instance_id,
        })
    logger.debug("%d USB devices present", len(devices))
    return devices


# -----------------------------
# Patches and software
# -----------------------------

def collect_hotfixes(conn) -> list[dict[str, Any]]:
    hotfixes = []
    for fix in conn.Win32_QuickFixEngineering():
        hotfixes.append({
            "HotFixID": fix.HotFixID,
            "Description": fix.Description,
            "InstalledOn": fix.InstalledOn,
            "InstalledBy": fix.InstalledBy,
        })
    return hotfixes


def collect_installed_products(conn) -> list[dict[str, Any]]:
    """
        MSI-registered products from Win32_Product.

        Enumerating this class makes Windows Installer run a consistency
        check on every package, which is slow and may start repairs. Only
        call it when the operator asked for it.
    """
    products = []
    for product in conn.Win32_Product():
        products.append({
            "Vendor": product.Vendor,
            "Name": product.Name,
            "Version": product.Version,
            "IdentifyingNumber": product.IdentifyingNumber,
            "InstallDate": product.InstallDate,
        })
    return products
