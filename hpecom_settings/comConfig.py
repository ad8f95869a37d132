
# Copyright Notice:
#    Copyright 2018 Dell, Inc. All rights reserved.
#    License: BSD License.  For full license text see link: https://github.com/RedDrum-Redfish-Project/RedDrum-OpenBMC/LICENSE.txt

import os
import json
import logging


class ComConfig():
    def __init__(self):

        # REGIONS
        # * the session-scoped list of provisioned COM region codes
        # * every operation validates its region argument against this list
        # * HPECOM_REGIONS="us-west,eu-central" in the environment overrides the list
        self.regions=["us-west", "eu-central", "ap-northeast"]

        # API ENDPOINTS
        #   the api host for a region is built from apiNetlocTemplate, eg: us-west-api.compute.cloud.hpe.com
        self.apiNetlocTemplate="{region}-api.compute.cloud.hpe.com"
        self.ssoTokenUrl="https://sso.common.cloud.hpe.com/as/token.oauth2"
        self.settingsApiVersion="v1beta1"
        self.firmwareBundlesApiVersion="v1beta2"

        # CREDENTIALS
        #   * the credentials file has one line of form:   <clientId>:<clientSecret>
        #   * HPECOM_CLIENT_ID and HPECOM_CLIENT_SECRET in the environment take precedence
        #   * if accessToken is set, it is used as the bearer token and no token login is done
        self.credentialsPath=os.path.join(os.path.expanduser("~"), ".hpecom", "credentials")
        self.accessToken=None

        # TRANSPORT SETTINGS
        self.timeout=30          # http read timeout in seconds
        self.waitTime=5          # http connect timeout in seconds
        self.maxPages=50         # max number of requests used to page through a collection
        self.verifyTls=True

        # TEST CONFIG
        # - isSimulator= OneOf( True,False)
        #     if true, all regions are served by the local simulator at simulatorNetloc over http
        self.isSimulator=False
        self.simulatorNetloc="127.0.0.1:5050"

        # LOGGING
        # - isLocal= OneOf( True,False)
        #     if true, syslog logging is not used
        self.logLevel="INFO"
        self.isLocal=False
        self.printLogMsgs=True

        # where the loaded config came from, None if defaults
        self.confPath=None


    # overlay the defaults with a json conf file
    #   search order: passed-in path, /etc/hpecom-settings.conf, ~/.hpecom/settings.conf
    def load(self, path=None):
        log=logging.getLogger("hpecom_settings")
        if path is None:
            confPathEtc=os.path.join("/etc", "hpecom-settings.conf")
            confPathHome=os.path.join(os.path.expanduser("~"), ".hpecom", "settings.conf")
            for candidate in (confPathEtc, confPathHome):
                if os.path.isfile(candidate):
                    path=candidate
                    break

        if path is not None:
            with open(path, "r", encoding="utf-8") as f:
                confData=json.load(f)
            for key,value in confData.items():
                if key == "confPath" or not hasattr(self, key):
                    log.warning("ComConfig: ignoring unknown config property: {}".format(key))
                    continue
                setattr(self, key, value)
            self.confPath=path

        envRegions=os.environ.get("HPECOM_REGIONS")
        if envRegions:
            self.regions=[x.strip() for x in envRegions.split(",") if x.strip()]

        return(self)

