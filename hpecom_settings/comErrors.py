
# Copyright Notice:
#    Copyright 2018 Dell, Inc. All rights reserved.
#    License: BSD License.  For full license text see link: https://github.com/RedDrum-Redfish-Project/RedDrum-OpenBMC/LICENSE.txt


class ComError(Exception):
    pass


class ComRegionError(ComError):
    def __init__(self, region, validRegions):
        self.region=region
        self.validRegions=list(validRegions)
        msg="Region '{}' is not provisioned in this session. Valid regions: {}".format(
            region, ", ".join(self.validRegions))
        super().__init__(msg)


class ComValidationError(ComError):
    pass


# raised by the shared request helper when the transport returns a non-0 rc
#   rc:          transport return code (http status for >=400 responses)
#   statusCode:  http status code, or None if no response was received
class ComWebRequestError(ComError):
    def __init__(self, msg, rc=None, statusCode=None):
        self.rc=rc
        self.statusCode=statusCode
        super().__init__(msg)


# no token could be obtained, or the api rejected the token
class ComAuthError(ComWebRequestError):
    pass
