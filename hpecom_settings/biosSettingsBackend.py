
# Copyright Notice:
#    Copyright 2018 Dell, Inc. All rights reserved.
#    License: BSD License.  For full license text see link: https://github.com/RedDrum-Redfish-Project/RedDrum-OpenBMC/LICENSE.txt

from .comErrors import ComValidationError
from .biosAttributes import biosAttributes, enabledDisabled, workloadProfiles


# BIOS settings: attributes are stored at settings.DEFAULT.redfishData.Attributes
#
class  ComBiosSettingsBackend():
    def __init__(self,rdr):
        self.version=1
        self.rdr=rdr
        self.utils=rdr.utils
        self.category="BIOS"
        self.attributesPath="DEFAULT.redfishData.Attributes"


    # map an attribute name to its table name. exact match first, then case-insensitive
    def canonicalAttributeName(self, attrName):
        if attrName in biosAttributes:
            return(attrName)
        for tableName in biosAttributes:
            if tableName.lower() == attrName.lower():
                return(tableName)
        raise ComValidationError("Unknown BIOS attribute: '{}'".format(attrName))


    # returns the value as it is sent to the api
    def validateAttribute(self, attrName, value):
        entry=biosAttributes[attrName]
        kind=entry[0]
        if kind == "enum":
            if entry[1] is enabledDisabled:
                return(self.utils.boolToEnabled(attrName, value))
            return(self.utils.validateChoice(attrName, value, entry[1]))
        elif kind == "int":
            return(self.utils.validateRange(attrName, value, entry[1], entry[2]))
        else:  # string
            if not isinstance(value, str) or len(value) > entry[1]:
                raise ComValidationError("{}: value must be a string of at most {} characters".format(attrName, entry[1]))
            return(value)


    # validate the bound attributes, dropping the ones that are None
    def buildAttributes(self, workloadProfileName, attributes):
        attrs={}
        if workloadProfileName is not None:
            attrs["WorkloadProfile"]=self.utils.validateChoice("WorkloadProfileName", workloadProfileName, workloadProfiles)
        for attrName,value in attributes.items():
            if value is None:
                continue
            name=self.canonicalAttributeName(attrName)
            attrs[name]=self.validateAttribute(name, value)
        return(attrs)


    def newBiosSetting(self, region, name, description=None, workloadProfileName=None, whatIf=False, **attributes):
        self.utils.validateRegion(region)
        attrs=self.buildAttributes(workloadProfileName, attributes)

        payload={
            "name": name,
            "description": description,
            "category": self.category,
            "platformFamily": "PROLIANT",
            "settings": {},
        }
        self.utils.setPath(payload["settings"], self.attributesPath, attrs)

        return(self.rdr.settings.postNewSetting(region, name, payload, whatIf=whatIf))


    # attributes not passed-in keep their stored values
    def setBiosSetting(self, region, name, newName=None, description=None, workloadProfileName=None, whatIf=False,
                       **attributes):
        self.utils.validateRegion(region)
        attrs=self.buildAttributes(workloadProfileName, attributes)

        def buildPayload(existing):
            storedAttrs=self.utils.getPath(existing.get("settings") or {}, self.attributesPath, {})
            payload=self.utils.mergeSettingHeader(existing, newName=newName, description=description)
            payload["settings"]={}
            self.utils.setPath(payload["settings"], self.attributesPath, self.utils.mergeUnset(storedAttrs, attrs))
            return(payload)

        return(self.rdr.settings.patchSetting(region, name, self.category, buildPayload, whatIf=whatIf))

