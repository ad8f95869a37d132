
# Copyright Notice:
#    Copyright 2018 Dell, Inc. All rights reserved.
#    License: BSD License.  For full license text see link: https://github.com/RedDrum-Redfish-Project/RedDrum-OpenBMC/LICENSE.txt

from .comErrors import ComValidationError


# internal storage settings: settings.DEFAULT.volumes holds one logical drive definition
#
class  ComStorageSettingsBackend():
    def __init__(self,rdr):
        self.version=1
        self.rdr=rdr
        self.utils=rdr.utils
        self.category="STORAGE"
        self.raidTypes=["RAID0", "RAID1", "RAID1_TRIPLE", "RAID10", "RAID10_TRIPLE", "RAID5", "RAID50", "RAID6", "RAID60"]
        self.driveTechnologies=["NVME_SSD", "SAS_HDD", "SAS_SSD", "SATA_HDD", "SATA_SSD"]
        self.readCachePolicies=["OFF", "READ_AHEAD"]
        self.writeCachePolicies=["WRITE_THROUGH", "PROTECTED_WRITE_BACK", "UNPROTECTED_WRITE_BACK"]


    # validate the bound parameters. returns the volume dict with the ones that are not None
    def buildVolume(self, raidType=None, capacityInGiB=None, driveTechnology=None, ioPerformanceModeEnabled=None,
                    readCachePolicy=None, writeCachePolicy=None, stripSizeInBytes=None, spareDriveCount=None):
        vol={}
        if raidType is not None:
            vol["raidType"]=self.utils.validateChoice("RaidType", raidType, self.raidTypes)
        if capacityInGiB is not None:
            vol["capacityInGiB"]=self.utils.validateRange("CapacityInGiB", capacityInGiB, 1, 2**31)
            vol["entireDisk"]=False
        if driveTechnology is not None:
            vol["driveTechnology"]=self.utils.validateChoice("DriveTechnology", driveTechnology, self.driveTechnologies)
        if ioPerformanceModeEnabled is not None:
            vol["ioPerfModeEnabled"]=self.utils.enabledToBool("IOPerformanceMode", ioPerformanceModeEnabled)
        if readCachePolicy is not None:
            vol["readCachePolicy"]=self.utils.validateChoice("ReadCachePolicy", readCachePolicy, self.readCachePolicies)
        if writeCachePolicy is not None:
            vol["writeCachePolicy"]=self.utils.validateChoice("WriteCachePolicy", writeCachePolicy, self.writeCachePolicies)
        if stripSizeInBytes is not None:
            self.utils.validateRange("StripSizeInBytes", stripSizeInBytes, 16384, 1048576)
            if stripSizeInBytes & (stripSizeInBytes - 1) != 0:
                raise ComValidationError("StripSizeInBytes: value {} must be a power of two".format(stripSizeInBytes))
            vol["stripSizeBytes"]=stripSizeInBytes
        if spareDriveCount is not None:
            vol["sparesCount"]=self.utils.validateRange("SpareDriveCount", spareDriveCount, 0, 8)
        return(vol)


    def newStorageSetting(self, region, name, raidType, description=None, capacityInGiB=None, driveTechnology=None,
                          ioPerformanceModeEnabled=None, readCachePolicy=None, writeCachePolicy=None,
                          stripSizeInBytes=None, spareDriveCount=None, whatIf=False):
        self.utils.validateRegion(region)
        vol=self.buildVolume(raidType, capacityInGiB, driveTechnology, ioPerformanceModeEnabled, readCachePolicy,
                             writeCachePolicy, stripSizeInBytes, spareDriveCount)
        if capacityInGiB is None:
            # no capacity means the volume uses the entire disks
            vol["entireDisk"]=True

        payload={
            "name": name,
            "description": description,
            "category": self.category,
            "platformFamily": "PROLIANT",
            "settings": {"DEFAULT": {"volumes": [vol]}},
        }
        return(self.rdr.settings.postNewSetting(region, name, payload, whatIf=whatIf))


    # fields not passed-in keep the values of the stored volume
    #   entireDisk=True switches a sized volume back to use the entire disks
    def setStorageSetting(self, region, name, newName=None, description=None, raidType=None, capacityInGiB=None,
                          entireDisk=None, driveTechnology=None, ioPerformanceModeEnabled=None, readCachePolicy=None,
                          writeCachePolicy=None, stripSizeInBytes=None, spareDriveCount=None, whatIf=False):
        self.utils.validateRegion(region)
        if entireDisk is True and capacityInGiB is not None:
            raise ComValidationError("CapacityInGiB and EntireDisk cannot be used together")
        vol=self.buildVolume(raidType, capacityInGiB, driveTechnology, ioPerformanceModeEnabled, readCachePolicy,
                             writeCachePolicy, stripSizeInBytes, spareDriveCount)

        def buildPayload(existing):
            volumes=self.utils.getPath(existing.get("settings") or {}, "DEFAULT.volumes", [])
            stored=volumes[0] if volumes else {}
            merged=self.utils.mergeUnset(stored, vol)
            if entireDisk is True:
                merged["entireDisk"]=True
                merged.pop("capacityInGiB", None)
            payload=self.utils.mergeSettingHeader(existing, newName=newName, description=description)
            payload["settings"]={"DEFAULT": {"volumes": [merged] + list(volumes[1:])}}
            return(payload)

        return(self.rdr.settings.patchSetting(region, name, self.category, buildPayload, whatIf=whatIf))

