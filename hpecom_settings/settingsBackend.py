
# Copyright Notice:
#    Copyright 2018 Dell, Inc. All rights reserved.
#    License: BSD License.  For full license text see link: https://github.com/RedDrum-Redfish-Project/RedDrum-OpenBMC/LICENSE.txt

from .comErrors import ComError
from .comUtils import settingsTypeNamePrefix


# settingsBackend resources: the generic get and remove operations for all setting categories
#
class  ComSettingsBackend():
    def __init__(self,rdr):
        self.version=1
        self.rdr=rdr
        self.utils=rdr.utils


    # GET the settings of a region
    #   category:      friendly category name eg "Bios", "IloSettings" -- filtered by the api
    #   name:          exact name, case-insensitive -- filtered here
    #   showSettings:  if True, iLO settings also get the flattened parameter view under "IloSettings"
    def getSettings(self, region, name=None, category=None, showSettings=False):
        self.utils.validateRegion(region)
        params=None
        if category is not None:
            params={"filter": "category eq '{}'".format(self.utils.categoryToApi(category))}

        d=self.rdr.invokeWebRequest(region, self.utils.settingsUri(), method="GET", params=params)
        items=d.get("items",[]) if d is not None else []

        if name is not None:
            items=[x for x in items if str(x.get("name","")).lower() == name.lower()]

        settings=[]
        for item in items:
            typeName="{}.{}".format(settingsTypeNamePrefix, item.get("category","UNKNOWN"))
            obj=self.utils.repackageObjectWithType([item], typeName, region)[0]
            self.addSummaryProperties(obj, showSettings=showSettings)
            settings.append(obj)

        self.rdr.logMsg("DEBUG","--------getSettings: region: {}, found {} settings".format(region, len(settings)))
        return(settings)


    # add the flattened properties shown for each category
    def addSummaryProperties(self, obj, showSettings=False):
        category=obj.get("category")
        s=obj.get("settings") or {}
        getPath=self.utils.getPath
        if category == "BIOS":
            obj["WorkloadProfileName"]=getPath(s, "DEFAULT.redfishData.Attributes.WorkloadProfile")
        elif category == "FIRMWARE":
            obj["Gen10FirmwareBundleId"]=getPath(s, "GEN10.id")
            obj["Gen11FirmwareBundleId"]=getPath(s, "GEN11.id")
            obj["Gen12FirmwareBundleId"]=getPath(s, "GEN12.id")
        elif category == "OS":
            obj["MediaUrl"]=getPath(s, "DEFAULT.mediaUrl")
        elif category == "STORAGE":
            volumes=getPath(s, "DEFAULT.volumes", [])
            obj["RaidType"]=volumes[0].get("raidType") if volumes else None
        elif category == "ILO_SETTINGS" and showSettings is True:
            obj["IloSettings"]=self.rdr.ilo.flattenIloSettings(obj)
        return(obj)


    # returns the setting with this name (case-insensitive), or None if there is no such setting
    def getSettingByName(self, region, name):
        found=self.getSettings(region, name=name)
        if len(found) == 0:
            return(None)
        return(found[0])


    # DELETE a setting
    def removeSetting(self, region, name, whatIf=False):
        self.utils.validateRegion(region)
        status=self.utils.newStatusObject(name, region)

        try:
            existing=self.getSettingByName(region, name)
            if existing is None:
                return(self.utils.setStatusWarning(status,
                    "Setting '{}' cannot be found in the '{}' region!".format(name, region)))

            uri=self.utils.settingsUri(existing["id"])
            resp=self.rdr.invokeWebRequest(region, uri, method="DELETE", whatIf=whatIf)
            if whatIf is True:
                return(resp)
        except ComError as e:
            return(self.utils.setStatusFailed(status,
                "Setting '{}' cannot be deleted! Error: {}".format(name, e), exc=e))

        self.rdr.logMsg("INFO","Setting '{}' deleted from region: {}".format(name, region))
        return(self.utils.setStatusComplete(status,
            "Setting '{}' successfully deleted from the '{}' region".format(name, region)))


    # shared by the new* operations of each category
    #   payload is the POST body, or a callable returning it that is only called once the name is known to be free
    #   returns a status object; a whatIf request description if whatIf is True
    def postNewSetting(self, region, name, payload, whatIf=False):
        status=self.utils.newStatusObject(name, region)
        try:
            existing=self.getSettingByName(region, name)
            if existing is not None:
                return(self.utils.setStatusWarning(status,
                    "Setting '{}' already exists in the '{}' region! No action needed.".format(name, region)))
            if callable(payload):
                payload=payload()

            resp=self.rdr.invokeWebRequest(region, self.utils.settingsUri(), method="POST", body=payload, whatIf=whatIf)
            if whatIf is True:
                return(resp)
        except ComError as e:
            return(self.utils.setStatusFailed(status,
                "Setting '{}' cannot be created! Error: {}".format(name, e), exc=e))

        self.rdr.logMsg("INFO","Setting '{}' ({}) created in region: {}".format(name, payload.get("category"), region))
        return(self.utils.setStatusComplete(status,
            "Setting '{}' successfully created in the '{}' region".format(name, region)))


    # shared by the set* operations of each category: the fetch-merge-write pattern
    #   buildPayload(existing) is called with the stored setting and returns the merge-patch body
    def patchSetting(self, region, name, category, buildPayload, whatIf=False):
        status=self.utils.newStatusObject(name, region)
        try:
            existing=self.getSettingByName(region, name)
            if existing is None or existing.get("category") != category:
                return(self.utils.setStatusWarning(status,
                    "Setting '{}' cannot be found in the '{}' region!".format(name, region)))

            payload=buildPayload(existing)
            uri=self.utils.settingsUri(existing["id"])
            resp=self.rdr.invokeWebRequest(region, uri, method="PATCH", body=payload,
                                           contentType="application/merge-patch+json", whatIf=whatIf)
            if whatIf is True:
                return(resp)
        except ComError as e:
            return(self.utils.setStatusFailed(status,
                "Setting '{}' cannot be updated! Error: {}".format(name, e), exc=e))

        self.rdr.logMsg("INFO","Setting '{}' ({}) updated in region: {}".format(name, category, region))
        return(self.utils.setStatusComplete(status,
            "Setting '{}' successfully updated in the '{}' region".format(name, region)))

