
# Copyright Notice:
#    Copyright 2018 Dell, Inc. All rights reserved.
#    License: BSD License.  For full license text see link: https://github.com/RedDrum-Redfish-Project/RedDrum-OpenBMC/LICENSE.txt

# COM API simulator
#   serves the token endpoint, the settings collection and the firmware-bundles collection in memory
#   the region of a request is taken from its Host header: <region>-api.compute.cloud.hpe.com
import re
import copy
import uuid
import datetime
import pytz
from flask import Flask, request, jsonify

validCategories = ("BIOS", "FIRMWARE", "OS", "STORAGE", "EXTERNAL_STORAGE", "ILO_SETTINGS")

defaultFirmwareBundles = [
    {"id": "e5ab2ba9d1d0e1f2a3b4c5d6e7f80910", "releaseVersion": "2024.04.00.01", "generation": "GEN10",
     "name": "Service Pack for ProLiant", "bundleType": "BASE"},
    {"id": "f3c2a1b0e9d8c7b6a5f4e3d2c1b0a998", "releaseVersion": "2024.04.00.02", "generation": "GEN11",
     "name": "Service Pack for ProLiant", "bundleType": "BASE"},
    {"id": "0a1b2c3d4e5f60718293a4b5c6d7e8f9", "releaseVersion": "2025.01.00.00", "generation": "GEN12",
     "name": "Service Pack for ProLiant", "bundleType": "BASE"},
]


class ComSimulatorState():
    def __init__(self, firmwareBundles=None, clients=None):
        self.settings=dict()     # region -> {id: setting}
        self.tokens=set()
        self.clients=clients     # {clientId: clientSecret}, None accepts any credentials
        self.firmwareBundles=copy.deepcopy(firmwareBundles if firmwareBundles is not None else defaultFirmwareBundles)

    def regionSettings(self, region):
        return(self.settings.setdefault(region, dict()))


def nowIso():
    return(datetime.datetime.now(pytz.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"))


# RFC 7396 json merge patch
def mergePatch(target, patch):
    if not isinstance(patch, dict):
        return(copy.deepcopy(patch))
    if not isinstance(target, dict):
        target={}
    result=dict(target)
    for k,v in patch.items():
        if v is None:
            result.pop(k, None)
        else:
            result[k]=mergePatch(result.get(k), v)
    return(result)


def errorResponse(statusCode, errorCode, message):
    resp=jsonify({"httpStatusCode": statusCode, "errorCode": errorCode, "message": message,
                  "debugId": uuid.uuid4().hex})
    resp.status_code=statusCode
    return(resp)


def createApp(firmwareBundles=None, clients=None, pageLimit=100):
    app=Flask("hpecom_settings.comSimulator")
    state=ComSimulatorState(firmwareBundles=firmwareBundles, clients=clients)
    app.config["COM_STATE"]=state
    categoryFilterMatch=re.compile(r"^\s*category\s+eq\s+'([A-Z_]+)'\s*$")
    settingsPath="/compute-ops-mgmt/v1beta1/settings"
    bundlesPath="/compute-ops-mgmt/v1beta2/firmware-bundles"

    def requestRegion():
        host=request.host.split(":")[0]
        if "-api." in host:
            return(host.split("-api.")[0])
        return("default")

    def isAuthorized():
        authHdr=request.headers.get("Authorization","")
        if not authHdr.startswith("Bearer "):
            return(False)
        return(authHdr[len("Bearer "):] in state.tokens)

    def unauthorized():
        return(errorResponse(401, "HPE_GL_ERROR_UNAUTHORIZED", "Unauthorized: missing or invalid bearer token"))

    def pageOf(items):
        try:
            offset=int(request.args.get("offset", 0))
            limit=int(request.args.get("limit", pageLimit))
        except ValueError:
            return(None)
        page=items[offset:offset+limit]
        return({"offset": offset, "count": len(page), "total": len(items), "items": page})

    @app.route("/as/token.oauth2", methods=["POST"])
    def tokenLogin():
        if request.form.get("grant_type") != "client_credentials":
            return(jsonify({"error": "unsupported_grant_type"}), 400)
        clientId=request.form.get("client_id")
        clientSecret=request.form.get("client_secret")
        if not clientId or not clientSecret:
            return(jsonify({"error": "invalid_client"}), 401)
        if state.clients is not None and state.clients.get(clientId) != clientSecret:
            return(jsonify({"error": "invalid_client"}), 401)
        token=uuid.uuid4().hex
        state.tokens.add(token)
        return(jsonify({"access_token": token, "token_type": "Bearer", "expires_in": 7199}))

    @app.route(settingsPath, methods=["GET"])
    def getSettings():
        if not isAuthorized():
            return(unauthorized())
        items=list(state.regionSettings(requestRegion()).values())
        filterArg=request.args.get("filter")
        if filterArg is not None:
            filterMatch=categoryFilterMatch.match(filterArg)
            if filterMatch is None:
                return(errorResponse(400, "HPE_GL_ERROR_BAD_REQUEST", "Unsupported filter: {}".format(filterArg)))
            items=[x for x in items if x["category"] == filterMatch.group(1)]
        page=pageOf(items)
        if page is None:
            return(errorResponse(400, "HPE_GL_ERROR_BAD_REQUEST", "offset and limit must be integers"))
        return(jsonify(page))

    @app.route(settingsPath, methods=["POST"])
    def postSetting():
        if not isAuthorized():
            return(unauthorized())
        body=request.get_json(force=True, silent=True)
        if not isinstance(body, dict) or not body.get("name"):
            return(errorResponse(400, "HPE_GL_ERROR_BAD_REQUEST", "name is required"))
        if body.get("category") not in validCategories:
            return(errorResponse(400, "HPE_GL_ERROR_BAD_REQUEST", "invalid category: {}".format(body.get("category"))))
        regionDb=state.regionSettings(requestRegion())
        for existing in regionDb.values():
            if existing["name"].lower() == body["name"].lower():
                return(errorResponse(409, "HPE_GL_ERROR_CONFLICT", "Setting name '{}' already in use".format(body["name"])))
        settingId=str(uuid.uuid4())
        ts=nowIso()
        setting={
            "id": settingId,
            "type": "compute-ops-mgmt/setting",
            "name": body["name"],
            "description": body.get("description"),
            "category": body["category"],
            "platformFamily": body.get("platformFamily", "PROLIANT"),
            "settings": body.get("settings") or {},
            "createdAt": ts,
            "updatedAt": ts,
            "resourceUri": "{}/{}".format(settingsPath, settingId),
        }
        regionDb[settingId]=setting
        resp=jsonify(setting)
        resp.status_code=201
        resp.headers["Location"]=setting["resourceUri"]
        return(resp)

    @app.route(settingsPath + "/<settingId>", methods=["GET", "PATCH", "DELETE"])
    def settingEntry(settingId):
        if not isAuthorized():
            return(unauthorized())
        regionDb=state.regionSettings(requestRegion())
        if settingId not in regionDb:
            return(errorResponse(404, "HPE_GL_ERROR_NOT_FOUND", "Setting {} not found".format(settingId)))
        if request.method == "GET":
            return(jsonify(regionDb[settingId]))
        if request.method == "DELETE":
            del regionDb[settingId]
            return("", 204)

        # PATCH
        if request.mimetype != "application/merge-patch+json":
            return(errorResponse(415, "HPE_GL_ERROR_UNSUPPORTED_MEDIA_TYPE",
                                 "Content-Type must be application/merge-patch+json"))
        patch=request.get_json(force=True, silent=True)
        if not isinstance(patch, dict):
            return(errorResponse(400, "HPE_GL_ERROR_BAD_REQUEST", "body must be a json object"))
        for readOnly in ("id", "type", "category", "createdAt", "resourceUri"):
            patch.pop(readOnly, None)
        updated=mergePatch(regionDb[settingId], patch)
        updated["updatedAt"]=nowIso()
        regionDb[settingId]=updated
        return(jsonify(updated))

    @app.route(bundlesPath, methods=["GET"])
    def getFirmwareBundles():
        if not isAuthorized():
            return(unauthorized())
        page=pageOf(state.firmwareBundles)
        if page is None:
            return(errorResponse(400, "HPE_GL_ERROR_BAD_REQUEST", "offset and limit must be integers"))
        return(jsonify(page))

    return(app)

