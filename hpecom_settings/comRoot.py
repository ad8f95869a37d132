
# Copyright Notice:
#    Copyright 2018 Dell, Inc. All rights reserved.
#    License: BSD License.  For full license text see link: https://github.com/RedDrum-Redfish-Project/RedDrum-OpenBMC/LICENSE.txt

# Session root class for the COM settings client
import os
import json
import logging
import logging.handlers

from .comConfig import ComConfig
from .comErrors import ComAuthError, ComWebRequestError
from .comTransports import ComTransport, ComTokenStore
from .comUtils  import ComBackendUtils

from .settingsBackend import ComSettingsBackend
from .biosSettingsBackend import ComBiosSettingsBackend
from .firmwareSettingsBackend import ComFirmwareSettingsBackend
from .osSettingsBackend import ComOsSettingsBackend
from .storageSettingsBackend import ComStorageSettingsBackend
from .iloSettingsBackend import ComIloSettingsBackend


class ComRoot():
    def __init__(self, config=None, debug=False):
        # initialize data
        if config is None:
            config=ComConfig()
        self.config=config
        self.debug=debug

        # the session-scoped list of provisioned regions
        self.regions=list(config.regions)

        # transports are created per region on first use, and share one token
        self.tokenStore=ComTokenStore(accessToken=config.accessToken)
        self.transports=dict()

        self.log=logging.getLogger("hpecom_settings")
        self.setupLogging()

        self.utils=ComBackendUtils(self)

        # create backend sub-classes
        self.createSubObjects()

    def createSubObjects(self):
        #create subObjects that implement the settings APIs
        self.settings=ComSettingsBackend(self)
        self.bios=ComBiosSettingsBackend(self)
        self.firmware=ComFirmwareSettingsBackend(self)
        self.os=ComOsSettingsBackend(self)
        self.storage=ComStorageSettingsBackend(self)
        self.ilo=ComIloSettingsBackend(self)
        return(0)


    # note that syslog logging is enabled by default unless isLocal is set
    # console messages are added "also" if printLogMsgs is set
    def setupLogging(self):
        level=logging.DEBUG if self.debug is True else getattr(logging, str(self.config.logLevel).upper(), logging.INFO)
        self.log.setLevel(level)
        if self.log.handlers:
            # already configured by an earlier session in this process
            return(0)
        fmt=logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s")
        if self.config.isLocal is not True and os.path.exists("/dev/log"):
            sysHandler=logging.handlers.SysLogHandler(address="/dev/log")
            sysHandler.setFormatter(logging.Formatter("hpecom-settings: %(levelname)s %(message)s"))
            self.log.addHandler(sysHandler)
        if self.config.printLogMsgs is True:
            consoleHandler=logging.StreamHandler()
            consoleHandler.setFormatter(fmt)
            self.log.addHandler(consoleHandler)
        return(0)

    # levels: "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"
    def logMsg(self, level, msg):
        self.log.log(getattr(logging, level, logging.INFO), msg)
        return(0)


    # replace the session region list, eg after a new workspace connection
    def setRegions(self, regions):
        self.regions=list(regions)
        for region in list(self.transports):
            if region not in self.regions:
                del self.transports[region]
        return(0)

    def getTransport(self, region):
        if region not in self.transports:
            netloc=self.config.apiNetlocTemplate.format(region=region)
            apiHost=None
            if self.config.isSimulator is True:
                # the simulator keys its state on the region in the Host header
                netloc,apiHost=self.config.simulatorNetloc,netloc
            self.transports[region]=ComTransport(rhost=netloc, config=self.config, tokenStore=self.tokenStore,
                                                 debug=self.debug, apiHost=apiHost)
        return(self.transports[region])


    # the shared request helper used by all settings operations
    #   returns the response data (dict or None)
    #   raises ComRegionError for an invalid region, ComWebRequestError if the request failed
    #   if whatIf is True nothing is sent and the request that would be sent is returned
    def invokeWebRequest(self, region, uri, method="GET", body=None, params=None, contentType=None, whatIf=False):
        self.utils.validateRegion(region)
        rft=self.getTransport(region)

        headersInput=None
        if contentType is not None:
            headersInput={"Content-Type": contentType}
        reqData=None
        if body is not None:
            reqData=json.dumps(body)

        if whatIf is True:
            hdrs=rft.rfGetHeaders(method, headersInput)
            hdrs["Authorization"]="Bearer ********"
            self.logMsg("INFO","WhatIf: {} {}".format(method, rft.rfFormUrl(uri)))
            return({"Method": method, "Uri": rft.rfFormUrl(uri), "Headers": hdrs, "Body": body})

        self.logMsg("DEBUG","----invokeWebRequest: region: {} {} {}".format(region, method, uri))
        rc,r,j,d=rft.rfSendRecvRequest(method, uri, reqData=reqData, params=params, headersInput=headersInput)
        if rc != 0:
            msg=self.errorMessageFromResponse(rc, r)
            self.logMsg("ERROR","..........error on {} {} in region: {}. rc: {}. {}".format(method, uri, region, rc, msg))
            statusCode=r.status_code if r is not None else None
            if rc == 401:
                raise ComAuthError(msg, rc=rc, statusCode=statusCode)
            raise ComWebRequestError(msg, rc=rc, statusCode=statusCode)
        return(d)


    # COM error bodies look like: {"httpStatusCode": 400, "errorCode": "...", "message": "...", "debugId": "..."}
    def errorMessageFromResponse(self, rc, r):
        if r is None:
            return("No response received from the COM API (transport rc={})".format(rc))
        try:
            d=json.loads(r.text)
        except ValueError:
            d=None
        if isinstance(d, dict):
            if d.get("message"):
                return(str(d["message"]))
            if d.get("errorCode"):
                return(str(d["errorCode"]))
        return("{} {}".format(r.status_code, r.reason or "").strip())

