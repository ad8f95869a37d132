
# Copyright Notice:
#    Copyright 2018 Dell, Inc. All rights reserved.
#    License: BSD License.  For full license text see link: https://github.com/RedDrum-Redfish-Project/RedDrum-OpenBMC/LICENSE.txt

from .comErrors import ComValidationError, ComWebRequestError
from .comUtils import firmwareBundlesTypeName


# firmware baseline settings: settings.GEN10/GEN11/GEN12 hold the id of a firmware bundle
#
class  ComFirmwareSettingsBackend():
    def __init__(self,rdr):
        self.version=1
        self.rdr=rdr
        self.utils=rdr.utils
        self.category="FIRMWARE"
        self.generations=("GEN10","GEN11","GEN12")


    # GET the firmware bundles of a region, optionally only the ones with this release version
    def getFirmwareBundles(self, region, releaseVersion=None):
        self.utils.validateRegion(region)
        d=self.rdr.invokeWebRequest(region, self.utils.firmwareBundlesUri(), method="GET")
        items=d.get("items",[]) if d is not None else []
        if releaseVersion is not None:
            items=[x for x in items if x.get("releaseVersion") == releaseVersion]
        return(self.utils.repackageObjectWithType(items, firmwareBundlesTypeName, region))


    # resolve each release version to its bundle id
    #   raises ComWebRequestError if a release version is not found in the region
    def resolveBundleIds(self, region, releaseVersions):
        ids={}
        if not any(v is not None for v in releaseVersions.values()):
            return(ids)
        bundles=self.getFirmwareBundles(region)
        for gen,releaseVersion in releaseVersions.items():
            if releaseVersion is None:
                continue
            matches=[b for b in bundles if b.get("releaseVersion") == releaseVersion and b.get("generation") == gen]
            if len(matches) == 0:
                raise ComWebRequestError("{} firmware bundle release version '{}' cannot be found in the '{}' region".format(
                    gen.capitalize(), releaseVersion, region))
            ids[gen]=matches[0]["id"]
        return(ids)


    def newFirmwareSetting(self, region, name, description=None, gen10FirmwareBundleReleaseVersion=None,
                           gen11FirmwareBundleReleaseVersion=None, gen12FirmwareBundleReleaseVersion=None, whatIf=False):
        self.utils.validateRegion(region)
        releaseVersions=dict(zip(self.generations, (gen10FirmwareBundleReleaseVersion, gen11FirmwareBundleReleaseVersion,
                                                    gen12FirmwareBundleReleaseVersion)))
        if not any(v is not None for v in releaseVersions.values()):
            raise ComValidationError("At least one of the Gen10, Gen11 or Gen12 firmware bundle release versions is required")

        # bundles are resolved after the existence check, an existing name is a Warning whatever the versions
        def buildPayload():
            ids=self.resolveBundleIds(region, releaseVersions)
            return({
                "name": name,
                "description": description,
                "category": self.category,
                "platformFamily": "PROLIANT",
                "settings": {gen: {"id": bundleId} for gen,bundleId in ids.items()},
            })

        return(self.rdr.settings.postNewSetting(region, name, buildPayload, whatIf=whatIf))


    # generations not passed-in keep their stored bundle
    def setFirmwareSetting(self, region, name, newName=None, description=None, gen10FirmwareBundleReleaseVersion=None,
                           gen11FirmwareBundleReleaseVersion=None, gen12FirmwareBundleReleaseVersion=None, whatIf=False):
        self.utils.validateRegion(region)
        releaseVersions=dict(zip(self.generations, (gen10FirmwareBundleReleaseVersion, gen11FirmwareBundleReleaseVersion,
                                                    gen12FirmwareBundleReleaseVersion)))

        def buildPayload(existing):
            ids=self.resolveBundleIds(region, releaseVersions)
            stored=existing.get("settings") or {}
            settings={}
            for gen in self.generations:
                if gen in ids:
                    settings[gen]={"id": ids[gen]}
                elif gen in stored:
                    settings[gen]=stored[gen]
            payload=self.utils.mergeSettingHeader(existing, newName=newName, description=description)
            payload["settings"]=settings
            return(payload)

        return(self.rdr.settings.patchSetting(region, name, self.category, buildPayload, whatIf=whatIf))

