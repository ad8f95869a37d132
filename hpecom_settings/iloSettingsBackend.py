
# Copyright Notice:
#    Copyright 2018 Dell, Inc. All rights reserved.
#    License: BSD License.  For full license text see link: https://github.com/RedDrum-Redfish-Project/RedDrum-OpenBMC/LICENSE.txt

import copy

from .comErrors import ComValidationError


authFailureLoggingValues = {
    "Disabled": 0,
    "EveryFailure": 1,
    "Every2ndFailure": 2,
    "Every3rdFailure": 3,
    "Every5thFailure": 5,
}

authFailuresBeforeDelayValues = {
    "EveryFailureCausesDelay": 0,
    "1FailureCausesNoDelay": 1,
    "3FailuresCauseNoDelay": 3,
    "5FailuresCauseNoDelay": 5,
}

# iLO parameter table
#   parameter name: (path under settings.Default, kind, allowed values, iLO factory default)
#   kinds:
#     "enabled"   -- "Enabled"/"Disabled" or a bool, stored as a bool
#     "switch"    -- "Enabled"/"Disabled" or a bool, stored as the "Enabled"/"Disabled" string
#     "port"      -- int 1..65535
#     "choice"    -- one of the allowed values, stored as is
#     "map"       -- friendly name, stored as the mapped value
#     "int"       -- int in the (min,max) range
iloParameters = {
    "IPMIProtocolEnabled": ("NetworkProtocol.IPMI.ProtocolEnabled", "enabled", None, False),
    "IPMIPort": ("NetworkProtocol.IPMI.Port", "port", None, 623),
    "SNMPProtocolEnabled": ("NetworkProtocol.SNMP.ProtocolEnabled", "enabled", None, True),
    "SNMPPort": ("NetworkProtocol.SNMP.Port", "port", None, 161),
    "SSHProtocolEnabled": ("NetworkProtocol.SSH.ProtocolEnabled", "enabled", None, True),
    "SSHPort": ("NetworkProtocol.SSH.Port", "port", None, 22),
    "VirtualMediaProtocolEnabled": ("NetworkProtocol.VirtualMedia.ProtocolEnabled", "enabled", None, True),
    "VirtualMediaPort": ("NetworkProtocol.VirtualMedia.Port", "port", None, 17988),
    "RemoteConsoleProtocolEnabled": ("NetworkProtocol.KVMIP.ProtocolEnabled", "enabled", None, True),
    "RemoteConsolePort": ("NetworkProtocol.KVMIP.Port", "port", None, 17990),
    "HTTPPort": ("NetworkProtocol.HTTP.Port", "port", None, 80),
    "HTTPSPort": ("NetworkProtocol.HTTPS.Port", "port", None, 443),

    "AuthenticationFailureDelayTimeSeconds": ("AccountService.AuthFailureDelayTimeSeconds", "choice", [2, 5, 10, 30], 10),
    "AuthenticationFailureLogging": ("AccountService.AuthFailureLoggingThreshold", "map", authFailureLoggingValues,
                                     "Every3rdFailure"),
    "AuthenticationFailuresBeforeDelay": ("AccountService.AuthFailuresBeforeDelay", "map", authFailuresBeforeDelayValues,
                                          "1FailureCausesNoDelay"),
    "MinimumPasswordLength": ("AccountService.MinPasswordLength", "int", (0, 39), 8),
    "PasswordComplexity": ("AccountService.EnforcePasswordComplexity", "enabled", None, False),

    "AcceptThirdPartyFirmwareUpdates": ("UpdateService.AcceptThirdPartyFirmwareUpdates", "enabled", None, False),
    "DowngradePolicy": ("UpdateService.DowngradePolicy", "choice", ["AllowDowngrade", "NoDowngrade", "PermanentNoDowngrade"],
                        "AllowDowngrade"),

    "GlobalComponentIntegrity": ("SecurityService.GlobalComponentIntegrity", "switch", None, "Disabled"),
    "ComponentIntegrityPolicy": ("SecurityService.ComponentIntegrityPolicy", "choice", ["NoPolicy", "HaltBootOnSPDMFailure"],
                                 "NoPolicy"),
    "RequireLoginForiLORBSU": ("SecurityService.RequireLoginForiLORBSU", "enabled", None, False),
    "RequireHostAuthentication": ("SecurityService.RequireHostAuthentication", "enabled", None, False),

    "SessionTimeoutMinutes": ("SessionService.SessionTimeoutMinutes", "choice", [0, 15, 30, 60, 120], 30),
}


# iLO settings: the iLO configuration is stored at settings.Default
#
class  ComIloSettingsBackend():
    def __init__(self,rdr):
        self.version=1
        self.rdr=rdr
        self.utils=rdr.utils
        self.category="ILO_SETTINGS"


    # map a parameter name to its table name. exact match first, then case-insensitive
    def canonicalParameterName(self, paramName):
        if paramName in iloParameters:
            return(paramName)
        for tableName in iloParameters:
            if tableName.lower() == paramName.lower():
                return(tableName)
        raise ComValidationError("Unknown iLO settings parameter: '{}'".format(paramName))


    # translate a friendly parameter value to the value stored in the iLO settings document
    def toApiValue(self, paramName, value):
        path,kind,allowed,dflt=iloParameters[paramName]
        if kind == "enabled":
            return(self.utils.enabledToBool(paramName, value))
        elif kind == "switch":
            return(self.utils.boolToEnabled(paramName, value))
        elif kind == "port":
            return(self.utils.validateRange(paramName, value, 1, 65535))
        elif kind == "choice":
            return(self.utils.validateChoice(paramName, value, allowed))
        elif kind == "map":
            return(allowed[self.utils.validateChoice(paramName, value, list(allowed))])
        else:  # int
            return(self.utils.validateRange(paramName, value, allowed[0], allowed[1]))


    # translate a stored value back to the friendly parameter value
    def fromApiValue(self, paramName, value):
        path,kind,allowed,dflt=iloParameters[paramName]
        if value is None:
            return(None)
        if kind == "enabled":
            return("Enabled" if value is True else "Disabled")
        elif kind == "map":
            for friendly,apiValue in allowed.items():
                if apiValue == value:
                    return(friendly)
            return(value)
        return(value)


    # validate the bound parameters, dropping the ones that are None
    #   returns {paramName: apiValue}
    def buildParameters(self, params):
        apiValues={}
        for paramName,value in params.items():
            if value is None:
                continue
            name=self.canonicalParameterName(paramName)
            apiValues[name]=self.toApiValue(name, value)
        return(apiValues)


    # the Default document with every parameter set: the passed-in ones, else the iLO factory defaults
    def buildDefaultDocument(self, apiValues):
        doc={}
        for paramName,(path,kind,allowed,dflt) in iloParameters.items():
            if paramName in apiValues:
                value=apiValues[paramName]
            else:
                value=self.toApiValue(paramName, dflt)
            self.utils.setPath(doc, path, value)
        return(doc)


    def newIloSetting(self, region, name, description=None, whatIf=False, **params):
        self.utils.validateRegion(region)
        apiValues=self.buildParameters(params)

        payload={
            "name": name,
            "description": description,
            "category": self.category,
            "platformFamily": "PROLIANT",
            "settings": {"Default": self.buildDefaultDocument(apiValues)},
        }
        return(self.rdr.settings.postNewSetting(region, name, payload, whatIf=whatIf))


    # parameters not passed-in keep their stored values
    def setIloSetting(self, region, name, newName=None, description=None, whatIf=False, **params):
        self.utils.validateRegion(region)
        apiValues=self.buildParameters(params)

        def buildPayload(existing):
            stored=copy.deepcopy(self.utils.getPath(existing.get("settings") or {}, "Default", {}))
            for paramName,value in apiValues.items():
                self.utils.setPath(stored, iloParameters[paramName][0], value)
            payload=self.utils.mergeSettingHeader(existing, newName=newName, description=description)
            payload["settings"]={"Default": stored}
            return(payload)

        return(self.rdr.settings.patchSetting(region, name, self.category, buildPayload, whatIf=whatIf))


    # the flattened view of a stored iLO setting: {paramName: friendly value}
    def flattenIloSettings(self, setting):
        doc=self.utils.getPath(setting.get("settings") or {}, "Default", {})
        flat={}
        for paramName,(path,kind,allowed,dflt) in iloParameters.items():
            flat[paramName]=self.fromApiValue(paramName, self.utils.getPath(doc, path))
        return(flat)

