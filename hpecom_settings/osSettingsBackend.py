
# Copyright Notice:
#    Copyright 2018 Dell, Inc. All rights reserved.
#    License: BSD License.  For full license text see link: https://github.com/RedDrum-Redfish-Project/RedDrum-OpenBMC/LICENSE.txt


# OS image settings: settings.DEFAULT holds the image url and install options
#
class  ComOsSettingsBackend():
    def __init__(self,rdr):
        self.version=1
        self.rdr=rdr
        self.utils=rdr.utils
        self.category="OS"
        self.osTypes=["RHEL", "SLES", "VMWARE_ESXI", "WINDOWS", "CUSTOM"]


    # validate the bound parameters. returns the DEFAULT dict with the ones that are not None
    def buildOsDefault(self, mediaUrl=None, osType=None, unattendedInstallFileUrl=None, timeoutInMinutes=None):
        dflt={}
        if mediaUrl is not None:
            dflt["mediaUrl"]=self.utils.validateUrl("MediaUrl", mediaUrl)
        if osType is not None:
            dflt["osType"]=self.utils.validateChoice("OsType", osType, self.osTypes)
        if unattendedInstallFileUrl is not None:
            dflt["unattendedInstallFileUrl"]=self.utils.validateUrl("UnattendedInstallFileUrl", unattendedInstallFileUrl)
        if timeoutInMinutes is not None:
            dflt["timeoutInMinutes"]=self.utils.validateRange("TimeoutInMinutes", timeoutInMinutes, 60, 720)
        return(dflt)


    def newOsSetting(self, region, name, mediaUrl, description=None, osType=None, unattendedInstallFileUrl=None,
                     timeoutInMinutes=None, whatIf=False):
        self.utils.validateRegion(region)
        self.utils.validateUrl("MediaUrl", mediaUrl)
        dflt=self.buildOsDefault(mediaUrl, osType, unattendedInstallFileUrl, timeoutInMinutes)

        payload={
            "name": name,
            "description": description,
            "category": self.category,
            "platformFamily": "PROLIANT",
            "settings": {"DEFAULT": dflt},
        }
        return(self.rdr.settings.postNewSetting(region, name, payload, whatIf=whatIf))


    def setOsSetting(self, region, name, newName=None, description=None, mediaUrl=None, osType=None,
                     unattendedInstallFileUrl=None, timeoutInMinutes=None, whatIf=False):
        self.utils.validateRegion(region)
        dflt=self.buildOsDefault(mediaUrl, osType, unattendedInstallFileUrl, timeoutInMinutes)

        def buildPayload(existing):
            stored=self.utils.getPath(existing.get("settings") or {}, "DEFAULT", {})
            payload=self.utils.mergeSettingHeader(existing, newName=newName, description=description)
            payload["settings"]={"DEFAULT": self.utils.mergeUnset(stored, dflt)}
            return(payload)

        return(self.rdr.settings.patchSetting(region, name, self.category, buildPayload, whatIf=whatIf))

