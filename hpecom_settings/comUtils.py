import copy

from .comErrors import ComRegionError, ComValidationError


# friendly category names (lower case, no underscores) to the COM api category enum
settingsCategories = {
    "bios": "BIOS",
    "firmware": "FIRMWARE",
    "os": "OS",
    "storage": "STORAGE",
    "externalstorage": "EXTERNAL_STORAGE",
    "ilosettings": "ILO_SETTINGS",
}

settingsTypeNamePrefix = "HPEGreenLake.COM.Settings"
firmwareBundlesTypeName = "HPEGreenLake.COM.FirmwareBundles"


# a dict that remembers the object type it was repackaged as
class ComObject(dict):
    def __init__(self, *args, typeName=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.typeName = typeName


class ComBackendUtils():
    def __init__(self,rdr ):
        self.rdr=rdr

    # ---------------------------------------------------------------------------
    # ==== Region and URI utilities

    # raises ComRegionError if the region is not in the session region list
    def validateRegion(self, region):
        if region not in self.rdr.regions:
            raise ComRegionError(region, self.rdr.regions)
        return(region)

    def settingsUri(self, settingId=None):
        uri = "/compute-ops-mgmt/{}/settings".format(self.rdr.config.settingsApiVersion)
        if settingId is not None:
            uri = uri + "/" + settingId
        return(uri)

    def firmwareBundlesUri(self, bundleId=None):
        uri = "/compute-ops-mgmt/{}/firmware-bundles".format(self.rdr.config.firmwareBundlesApiVersion)
        if bundleId is not None:
            uri = uri + "/" + bundleId
        return(uri)

    # map a friendly category name eg "IloSettings" (or the api enum itself) to the api enum
    def categoryToApi(self, category):
        key = str(category).replace("_","").lower()
        if key not in settingsCategories:
            raise ComValidationError("Unknown settings category: '{}'. Valid categories: {}".format(
                category, ", ".join(["Bios","Firmware","Os","Storage","ExternalStorage","IloSettings"])))
        return(settingsCategories[key])

    # ---------------------------------------------------------------------------
    # ==== Result objects

    # the uniform status object returned by every create/update/delete operation
    def newStatusObject(self, name, region):
        return(ComObject({"Name": name, "Region": region, "Status": None, "Details": None, "Exception": None},
                         typeName="HPEGreenLake.COM.Settings.Status"))

    def setStatusComplete(self, status, details):
        status["Status"] = "Complete"
        status["Details"] = details
        return(status)

    def setStatusWarning(self, status, details):
        status["Status"] = "Warning"
        status["Details"] = details
        return(status)

    def setStatusFailed(self, status, details, exc=None):
        status["Status"] = "Failed"
        status["Details"] = details
        status["Exception"] = exc
        return(status)

    # copy each item into a ComObject of typeName, and add the region it came from
    def repackageObjectWithType(self, items, typeName, region=None):
        objs=[]
        for item in items:
            obj=ComObject(item, typeName=typeName)
            if region is not None:
                obj["region"]=region
            objs.append(obj)
        return(objs)

    # ---------------------------------------------------------------------------
    # ==== Value translation and validation

    # "Enabled"/"Disabled" (or a bool) to a bool
    def enabledToBool(self, paramName, value):
        if isinstance(value, bool):
            return(value)
        if isinstance(value, str):
            if value.lower() == "enabled":
                return(True)
            if value.lower() == "disabled":
                return(False)
        raise ComValidationError("{}: value '{}' must be one of Enabled, Disabled".format(paramName, value))

    # a bool (or "Enabled"/"Disabled" in any case) to the "Enabled"/"Disabled" strings
    def boolToEnabled(self, paramName, value):
        return("Enabled" if self.enabledToBool(paramName, value) else "Disabled")

    def validateChoice(self, paramName, value, choices):
        # True == 1 and False == 0, so a bool only matches a list of bools
        isBoolMismatch=isinstance(value, bool) and not any(isinstance(x, bool) for x in choices)
        if isBoolMismatch or value not in choices:
            raise ComValidationError("{}: value '{}' must be one of {}".format(
                paramName, value, ", ".join(str(x) for x in choices)))
        return(value)

    def validateRange(self, paramName, value, minValue, maxValue):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ComValidationError("{}: value '{}' must be an integer".format(paramName, value))
        if value < minValue or value > maxValue:
            raise ComValidationError("{}: value {} must be between {} and {}".format(paramName, value, minValue, maxValue))
        return(value)

    def validateUrl(self, paramName, value):
        if not isinstance(value, str) or not (value.startswith("http://") or value.startswith("https://")):
            raise ComValidationError("{}: '{}' must be an http or https url".format(paramName, value))
        return(value)

    # ---------------------------------------------------------------------------
    # ==== Nested dict helpers

    # get the value at a dotted path eg "NetworkProtocol.IPMI.Port", or dflt if any part is missing
    def getPath(self, d, path, dflt=None):
        cur=d
        for part in path.split("."):
            if not isinstance(cur, dict) or part not in cur:
                return(dflt)
            cur=cur[part]
        return(cur)

    # set the value at a dotted path, creating the intermediate dicts
    def setPath(self, d, path, value):
        parts=path.split(".")
        cur=d
        for part in parts[:-1]:
            if not isinstance(cur.get(part), dict):
                cur[part]={}
            cur=cur[part]
        cur[parts[-1]]=value
        return(d)

    # fetch-merge: returns a copy of stored updated with the overrides that are not None
    def mergeUnset(self, stored, overrides):
        merged=copy.deepcopy(stored) if stored is not None else {}
        for k,v in overrides.items():
            if v is not None:
                merged[k]=v
        return(merged)

    # pick the generic setting fields from the stored doc, with new values where given
    def mergeSettingHeader(self, stored, newName=None, description=None):
        return({
            "name": newName if newName is not None else stored.get("name"),
            "description": description if description is not None else stored.get("description"),
        })

