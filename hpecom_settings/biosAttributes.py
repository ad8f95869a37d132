
# BIOS attribute value table for ProLiant servers
#   each entry is one of:
#     ("enum", [allowed values])     -- "Enabled"/"Disabled" enums also accept a bool
#     ("int", min, max)
#     ("string", maxLength)

enabledDisabled = ["Enabled", "Disabled"]

workloadProfiles = [
    "GeneralPowerEfficientCompute",
    "GeneralPeakFrequencyCompute",
    "GeneralThroughputCompute",
    "Virtualization-PowerEfficient",
    "Virtualization-MaxPerformance",
    "LowLatency",
    "MissionCritical",
    "TransactionalApplicationProcessing",
    "HighPerformanceCompute",
    "DecisionSupport",
    "GraphicProcessing",
    "I/OThroughput",
    "Custom",
]

biosAttributes = {
    # boot
    "BootMode": ("enum", ["Uefi", "LegacyBios"]),
    "UefiOptimizedBoot": ("enum", enabledDisabled),
    "BootOrderPolicy": ("enum", ["RetryIndefinitely", "AttemptOnce", "ResetAfterFailed"]),
    "NetworkBootRetry": ("enum", enabledDisabled),
    "NetworkBootRetryCount": ("int", 0, 20),
    "Ipv4PxeSupport": ("enum", enabledDisabled),
    "Ipv6PxeSupport": ("enum", enabledDisabled),
    "HttpSupport": ("enum", ["Auto", "Ipv4", "Ipv6", "Disabled"]),
    "UsbBoot": ("enum", enabledDisabled),
    "InternalSDCardSlot": ("enum", enabledDisabled),
    "PostF1Prompt": ("enum", ["Delayed20Sec", "Delayed2Sec", "Disabled"]),
    "PostDiscoveryMode": ("enum", ["Auto", "ForceFullDiscovery", "ForceFastDiscovery"]),
    "PostVideoSupport": ("enum", ["DisplayAll", "DisplayEmbeddedOnly"]),
    "PostBootProgress": ("enum", enabledDisabled),

    # processor
    "ProcHyperthreading": ("enum", enabledDisabled),
    "ProcVirtualization": ("enum", enabledDisabled),
    "ProcTurbo": ("enum", enabledDisabled),
    "ProcAes": ("enum", enabledDisabled),
    "ProcX2Apic": ("enum", ["Enabled", "ForceEnabled", "Disabled"]),
    "ProcCoreDisable": ("int", 0, 127),
    "IntelProcVtd": ("enum", enabledDisabled),
    "IntelTxt": ("enum", enabledDisabled),
    "IntelPerfMonitoring": ("enum", enabledDisabled),
    "Sriov": ("enum", enabledDisabled),
    "EnergyEfficientTurbo": ("enum", enabledDisabled),
    "UncoreFreqScaling": ("enum", ["Auto", "Maximum", "Minimum"]),

    # memory
    "AdvancedMemProtection": ("enum", ["AdvancedEcc", "OnlineSpareAdvancedEcc", "MirroredAdvancedEcc",
                                       "FastFaultTolerantADDDC"]),
    "NodeInterleaving": ("enum", enabledDisabled),
    "ChannelInterleaving": ("enum", enabledDisabled),
    "SubNumaClustering": ("enum", ["Enabled", "Disabled", "Auto"]),
    "NumaGroupSizeOpt": ("enum", ["Flat", "Clustered"]),
    "MemPatrolScrubbing": ("enum", enabledDisabled),
    "MemRefreshRate": ("enum", ["Refreshx1", "Refreshx2"]),
    "MemFastTraining": ("enum", enabledDisabled),
    "ExtendedMemTest": ("enum", enabledDisabled),
    "DramControllerPowerDown": ("enum", enabledDisabled),

    # power and performance
    "WorkloadProfile": ("enum", workloadProfiles),
    "PowerRegulator": ("enum", ["DynamicPowerSavings", "StaticLowPower", "StaticHighPerf", "OsControl"]),
    "EnergyPerfBias": ("enum", ["MaxPerf", "BalancedPerf", "BalancedPower", "PowerSavingsMode"]),
    "MinProcIdlePower": ("enum", ["NoCStates", "C6"]),
    "MinProcIdlePkgState": ("enum", ["NoState", "C6Retention", "C6NonRetention"]),
    "CollabPowerControl": ("enum", enabledDisabled),
    "IntelUpiPowerManagement": ("enum", enabledDisabled),
    "ThermalConfig": ("enum", ["OptimalCooling", "IncreasedCooling", "MaxCooling", "EnhancedCPUCooling"]),
    "ThermalShutdown": ("enum", enabledDisabled),
    "FanFailPolicy": ("enum", ["Shutdown", "Allow"]),
    "FanInstallReq": ("enum", ["EnableMessaging", "DisableMessaging"]),
    "AutoPowerOn": ("enum", ["AlwaysPowerOn", "AlwaysPowerOff", "RestoreLastState"]),
    "PowerOnDelay": ("enum", ["NoDelay", "Random", "Delay15Sec", "Delay30Sec", "Delay45Sec", "Delay60Sec"]),

    # server availability
    "AsrStatus": ("enum", enabledDisabled),
    "AsrTimeoutMinutes": ("enum", ["Timeout5", "Timeout10", "Timeout15", "Timeout20", "Timeout30"]),
    "PostAsr": ("enum", ["PostAsrOff", "PostAsrOn"]),
    "PostAsrDelay": ("enum", ["Delay10Min", "Delay15Min", "Delay20Min", "Delay30Min"]),

    # devices
    "EmbeddedSata": ("enum", ["Ahci", "Raid"]),
    "EmbeddedSerialPort": ("enum", ["Com1Irq4", "Com2Irq3", "Disabled"]),
    "VirtualSerialPort": ("enum", ["Com1Irq4", "Com2Irq3", "Disabled"]),
    "ConsistentDevNaming": ("enum", ["LomsAndSlots", "LomsOnly", "Disabled"]),
    "PcieExpressEcrcSupport": ("enum", enabledDisabled),

    # date and time
    "TimeFormat": ("enum", ["Utc", "Local"]),
    "DaylightSavingsTime": ("enum", enabledDisabled),

    # server information
    "ServerName": ("string", 14),
    "ServerAssetTag": ("string", 31),
    "ServerOtherInfo": ("string", 255),
    "AdminName": ("string", 28),
    "AdminPhone": ("string", 28),
    "AdminEmail": ("string", 28),
    "ServicePhone": ("string", 28),
    "ServiceEmail": ("string", 28),
}

