"""
tests/conftest.py -- Fake WMI connections and sample fixture data.

FakeWmi mimics the call style of the `wmi` package: attribute access on the
connection returns a callable, and keyword arguments become equality filters
(`conn.Win32_LogicalDisk(DriveType=3)`). Rows are exposed as SimpleNamespace
objects so collectors read them with plain attribute access.
"""

from __future__ import annotations

import os
from types import SimpleNamespace

import pytest

from core.models import RunContext

GB = 1024 ** 3


class FakeWmi:
    def __init__(self, classes: dict[str, list[dict]], failing: set[str] | None = None):
        self.classes = classes
        self.failing = failing or set()
        self.calls: list[str] = []

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)

        def query(**filters):
            self.calls.append(name)
            if name in self.failing:
                raise RuntimeError(f"Access denied querying {name}")
            rows = self.classes.get(name, [])
            return [
                SimpleNamespace(**row)
                for row in rows
                if all(row.get(k) == v for k, v in filters.items())
            ]

        return query


def make_connect(cimv2: FakeWmi, wmi_ns: FakeWmi | None = None):
    """Connection factory keyed by namespace, standing in for collectors.windows.connect."""
    namespaces = {
        "root\\cimv2": cimv2,
        "root\\wmi": wmi_ns or FakeWmi({"WmiMonitorBasicDisplayParams": [{}, {}]}),
    }

    def connect(namespace="root\\cimv2"):
        return namespaces[namespace]

    return connect


def sample_classes() -> dict[str, list[dict]]:
    return {
        "Win32_ComputerSystem": [{
            "Model": "OptiPlex 7090",
            "Manufacturer": "Dell Inc.",
            "PrimaryOwnerName": "IT Department",
            "SystemType": "x64-based PC",
        }],
        "Win32_BootConfiguration": [{
            "Name": "BootConfiguration",
            "BootDirectory": "C:\\Windows",
        }],
        "Win32_BIOS": [{
            "Manufacturer": "Dell Inc.",
            "SerialNumber": "7XK2LM3",
            "SMBIOSBIOSVersion": "1.21.0",
        }],
        "Win32_OperatingSystem": [{
            "Caption": "Microsoft Windows 11 Pro",
            "BuildNumber": "22631",
            "Version": "10.0.22631",
            "SerialNumber": "00330-80000-00000-AA123",
            "InstallDate": "20230214101500.000000+060",
            "LastBootUpTime": "20241003074512.500000+120",
            "OSArchitecture": "64-bit",
        }],
        "Win32_TimeZone": [{
            "Bias": 60,
            "Caption": "(UTC+01:00) Amsterdam, Berlin, Bern, Rome, Stockholm, Vienna",
            "StandardName": "W. Europe Standard Time",
        }],
        "Win32_LogicalDisk": [
            {"DeviceID": "C:", "DriveType": 3, "Size": str(int(475.9 * GB)), "FreeSpace": str(int(120.7 * GB))},
            {"DeviceID": "D:", "DriveType": 2, "Size": str(16 * GB), "FreeSpace": str(8 * GB)},
            {"DeviceID": "Z:", "DriveType": 4, "Size": str(2000 * GB), "FreeSpace": str(900 * GB)},
        ],
        "Win32_DiskDrive": [
            {
                "SystemName": "WS-0042",
                "Model": "Samsung SSD 980 PRO 512GB",
                "Size": str(512105932800),
                "InterfaceType": "SCSI",
                "SerialNumber": "  S5GXNF0R123456  ",
                "MediaType": "Fixed hard disk media",
            },
            {
                "SystemName": "WS-0042",
                "Model": "SanDisk Cruzer USB Device",
                "Size": str(16 * GB),
                "InterfaceType": "USB",
                "SerialNumber": "4C530001",
                "MediaType": "Removable Media",
            },
        ],
        "Win32_Processor": [{
            "Name": "11th Gen Intel(R) Core(TM) i7-11700 @ 2.50GHz",
            "Manufacturer": "GenuineIntel",
            "MaxClockSpeed": 2496,
            "NumberOfCores": 8,
            "NumberOfLogicalProcessors": 16,
            "Status": "OK",
        }],
        "Win32_PhysicalMemory": [
            {
                "PartNumber": "HMA82GU6CJR8N-XN    ",
                "Tag": "Physical Memory 0",
                "SerialNumber": "12345678",
                "Manufacturer": "SK Hynix",
                "ConfiguredClockSpeed": 3200,
                "ConfiguredVoltage": 1200,
                "Capacity": str(16 * GB),
                "BankLabel": "BANK 0",
                "DeviceLocator": "DIMM1",
            },
            {
                "PartNumber": "HMA81GU6CJR8N-XN",
                "Tag": "Physical Memory 1",
                "SerialNumber": "87654321",
                "Manufacturer": "SK Hynix",
                "ConfiguredClockSpeed": 3200,
                "ConfiguredVoltage": 1200,
                "Capacity": str(int(7.96 * GB)),
                "BankLabel": "BANK 1",
                "DeviceLocator": "DIMM2",
            },
        ],
        "Win32_NetworkAdapterConfiguration": [
            {
                "Description": "Intel(R) Ethernet Connection (14) I219-LM",
                "IPEnabled": True,
                "DHCPEnabled": True,
                "DHCPServer": "10.0.0.1",
                "IPAddress": ("10.0.0.42", "fe80::1c2d:3e4f:5a6b:7c8d"),
                "IPSubnet": ("255.255.255.0", "64"),
                "DefaultIPGateway": ("10.0.0.1",),
                "DNSDomain": "corp.example.com",
                "DNSServerSearchOrder": ("10.0.0.10", "10.0.0.11"),
                "MACAddress": "3C:7C:3F:1A:2B:3C",
            },
            {
                "Description": "Hyper-V Virtual Ethernet Adapter",
                "IPEnabled": True,
                "DHCPEnabled": False,
                "DHCPServer": None,
                "IPAddress": ("172.20.96.1",),
                "IPSubnet": ("255.255.240.0",),
                "DefaultIPGateway": None,
                "DNSDomain": None,
                "DNSServerSearchOrder": None,
                "MACAddress": "00:15:5D:01:02:03",
            },
            {
                "Description": "WAN Miniport (IP)",
                "IPEnabled": False,
                "DHCPEnabled": False,
                "DHCPServer": None,
                "IPAddress": None,
                "IPSubnet": None,
                "DefaultIPGateway": None,
                "DNSDomain": None,
                "DNSServerSearchOrder": None,
                "MACAddress": None,
            },
        ],
        "Win32_NetworkAdapter": [
            {"NetConnectionID": "Ethernet", "MACAddress": "3C:7C:3F:1A:2B:3C", "InterfaceIndex": 12, "NetConnectionStatus": 2, "Speed": "1000000000"},
            {"NetConnectionID": "Wi-Fi", "MACAddress": "A4:B1:C1:00:11:22", "InterfaceIndex": 18, "NetConnectionStatus": 7, "Speed": "9223372036854775807"},
            {"NetConnectionID": None, "MACAddress": None, "InterfaceIndex": 3, "NetConnectionStatus": None, "Speed": None},
        ],
        "Win32_Printer": [{
            "Name": "Büro Drucker 2.OG",
            "DriverName": "HP Universal Printing PCL 6",
            "PrinterState": 0,
            "PrinterStatus": 3,
            "Location": "Raum 214",
            "PortName": "10.0.5.20",
            "Network": True,
            "Shared": False,
            "WorkOffline": False,
        }],
        "Win32_QuickFixEngineering": [
            {"HotFixID": "KB5031455", "Description": "Update", "InstalledOn": "10/12/2024", "InstalledBy": "NT AUTHORITY\\SYSTEM"},
            {"HotFixID": "KB5032190", "Description": "Security Update", "InstalledOn": "11/14/2024", "InstalledBy": "NT AUTHORITY\\SYSTEM"},
        ],
        "Win32_VideoController": [{
            "Status": "OK",
            "Description": "Intel(R) UHD Graphics 750",
            "AdapterRAM": 1073741824,
            "DriverDate": "20240522000000.000000-000",
            "DriverVersion": "31.0.101.5522",
            "VideoModeDescription": "2560 x 1440 x 4294967296 colors",
        }],
        "Win32_PnPEntity": [
            {"PNPClass": "HIDClass", "Status": "OK", "Name": "USB Input Device", "PNPDeviceID": "USB\\VID_046D&PID_C52B\\5&1A2B3C&0&1", "Present": True},
            {"PNPClass": "USB", "Status": "Unknown", "Name": "USB Mass Storage Device", "PNPDeviceID": "USB\\VID_0781&PID_5567\\4C530001", "Present": False},
            {"PNPClass": "Display", "Status": "OK", "Name": "Intel(R) UHD Graphics 750", "PNPDeviceID": "PCI\\VEN_8086&DEV_4C8A\\3&11583659&0&10", "Present": True},
        ],
        "Win32_Product": [
            {"Vendor": "Microsoft Corporation", "Name": "Microsoft Visual C++ 2022 X64 Minimum Runtime", "Version": "14.38.33130", "IdentifyingNumber": "{E1902FC6-C423-4719-AB8A-AC7B2694B367}", "InstallDate": "20240110"},
        ],
    }


@pytest.fixture
def cimv2() -> FakeWmi:
    return FakeWmi(sample_classes())


@pytest.fixture
def run_context() -> RunContext:
    return RunContext(
        computer="WS-0042",
        operator="CORP\\jdoe",
        generated_at="2024-11-20T09:30:00+01:00",
    )


@pytest.fixture
def users_root(tmp_path):
    """Three profile folders with distinct, known modification times."""
    root = tmp_path / "Users"
    root.mkdir()
    for name, mtime in (("Public", 1_700_000_000), ("jdoe", 1_700_500_000), ("Default", 1_600_000_000)):
        folder = root / name
        folder.mkdir()
        os.utime(folder, (mtime, mtime))
    (root / "desktop.ini").write_text("[.ShellClassInfo]\n", encoding="utf-8")
    return root

