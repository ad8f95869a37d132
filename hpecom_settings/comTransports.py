# Copyright Notice:
#    Copyright 2017 Dell, Inc. All rights reserved.

# COM API Transport
import os
import json
import socket
import time
import datetime
import logging
import requests
import pytz
from urllib.parse import urljoin, urlparse, urlunparse
from requests.auth import AuthBase


class RfBearerAuth(AuthBase):
    def __init__(self,authToken):
        self.authToken=authToken

    def __call__(self, r):
        r.headers['Authorization']="Bearer {}".format(self.authToken)
        return(r)


# token and client credentials shared by all of the region transports of a session
class ComTokenStore():
    def __init__(self, accessToken=None):
        self.clientId=None
        self.clientSecret=None
        self.accessToken=accessToken
        self.tokenExpires=None    # aware utc datetime, None if the token does not expire (passed-in token)
        self.tokenType="Bearer"

    def isValid(self):
        if self.accessToken is None:
            return(False)
        if self.tokenExpires is None:
            return(True)
        return( datetime.datetime.now(pytz.utc) < self.tokenExpires )

    def clear(self):
        self.accessToken=None
        self.tokenExpires=None


class ComTransport():
    def __init__(self, rhost=None, config=None, tokenStore=None, debug=False, apiHost=None):

        # default timeouts, headers, and max pages used by THIS transport
        self.maxPages=50                # max number of requests allowed when paging through a collection
        self.dfltPatchPostPutHdrs = {'Content-Type': 'application/json', 'Accept': 'application/json'  }
        self.dfltGetDeleteHeadHdrs = {'Accept': 'application/json' }
        self.waitTime=5
        self.timeout=30         # http transport timeout in seconds, stored as int here
        self.verify=True

        # default scheme and token login url
        self.scheme="https"
        self.ssoTokenUrl="https://sso.common.cloud.hpe.com/as/token.oauth2"
        self.tokenExpiryMargin=60     # renew the token this many seconds before it expires
        self.program = "ComTransport"

        # path to the credential vault for this transport
        self.credentialsPath=None

        # root paths for the api
        self.rhost=None
        self.rootPath="/"

        # Host header sent with api requests when rhost is not the region's api host (simulator mode)
        self.apiHost=apiHost

        if config is not None:
            self.maxPages=config.maxPages
            self.waitTime=config.waitTime
            self.timeout=config.timeout
            self.verify=config.verifyTls
            self.ssoTokenUrl=config.ssoTokenUrl
            self.credentialsPath=config.credentialsPath
            if config.isSimulator is True:
                self.scheme="http"
                # the simulator serves the token endpoint too
                self.ssoTokenUrl=urlunparse(["http", config.simulatorNetloc, "/as/token.oauth2", "","",""])

        # the token is shared across the transports of a session
        if tokenStore is None:
            tokenStore=ComTokenStore(accessToken=config.accessToken if config is not None else None)
        self.tokenStore=tokenStore

        # verbose flag used for debug logging
        self.verbose=0
        if debug is True:
            self.verbose=5
        self.log=logging.getLogger("hpecom_settings.transport")

        # one requests session per transport so connections to the region are reused
        self.session=requests.Session()

        # measured execution time
        self.elapsed=None

        # calculate self.rootUrl based on passed-in rhost
        self.rfConnectionInit(rhost=rhost)

        # load the client id and secret into the token store
        self.rfGetCredentialsFromVault()


    def rfConnectionInit(self, rhost=None):
        if rhost is not None:
            self.rhost = rhost
        scheme_tuple=[self.scheme, self.rhost, self.rootPath, "","",""]
        self.rootUrl=urlunparse(scheme_tuple)      # <scheme>://<netloc>/

    def rfGetCredentialsFromVault(self):
        ts=self.tokenStore
        if ts.clientId is not None and ts.clientSecret is not None:
            return(0)

        # the environment overrides the credential vault
        envId=os.environ.get("HPECOM_CLIENT_ID")
        envSecret=os.environ.get("HPECOM_CLIENT_SECRET")
        if envId and envSecret:
            ts.clientId,ts.clientSecret=envId,envSecret
            return(0)

        #  the credentials file has data of form:    <clientId>:<clientSecret>
        if self.credentialsPath is None or os.path.isfile( self.credentialsPath ) is not True:
            return(-1)
        with open( self.credentialsPath, "r") as f:
            creds = [x.strip().split(':',1) for x in f.readlines() if x.strip()]
        if len(creds) == 0 or len(creds[0]) != 2:
            self.printErr("Transport: credentials file has no <clientId>:<clientSecret> entry")
            return(-1)

        # just get the 1st entry
        ts.clientId,ts.clientSecret=creds[0]
        return(0)


    # create the url for a request
    # if urlPath starts with /, then it replaces the path of the root url
    def rfFormUrl(self, urlPath):
        return(urljoin(self.rootUrl, urlPath))


    # get default headers based on the method being called
    # headers passed in by a calling function override the defaults
    def rfGetHeaders(self, method, headersInput=None):
        if( (method == 'PATCH') or (method == 'POST') or (method == 'PUT') ):
            hdrlist=self.dfltPatchPostPutHdrs
        else:  # method is GET, DELETE, HEAD
            hdrlist=self.dfltGetDeleteHeadHdrs

        hdrs=dict(hdrlist)
        if self.apiHost is not None:
            hdrs["Host"]=self.apiHost
        if( headersInput is not None):
            for key in headersInput:
                hdrs[key]=headersInput[key]
        return(hdrs)


    #'''
    # main transport function
    # handles the following processing within this function:
    #  --- joins passed-in urlPath with the region root url
    #  --- auto-sets headers based on method, and overrides passed-in with headersInput
    #  --- gets a bearer token with the client credentials if we don't have a valid one
    #  --- processes Requests exceptions correctly
    #  --- if response is a partial collection page, loop to get all of the items
    #  --- auto-loads response into Dict with exception handling
    #  --- returning standard tuple: rc,r,j,d  (returnCode, requests response,  loadJsonData, data)
    #
    #       rc,r,j,d =(returnCode(int: 0=ok), RequestsResponse, isJsonData(True/False), data (type: None|dict|text))
    #
    def rfSendRecvRequest( self, method, urlPath, reqData=None, params=None, authenticated=True,
                           loadJsonData=True, headersInput=None, **kwargs ):

        url=self.rfFormUrl(urlPath)
        hdrs=self.rfGetHeaders(method, headersInput)

        authType=None
        if authenticated is True:
            if self.tokenStore.isValid() is not True:
                rc,r,j,d=self.rfTokenLogin()
                if( rc != 0):  # error logging in
                    return(rc,r,j,d)
            authType=RfBearerAuth(self.tokenStore.accessToken)

        # copy the params since paging updates the offset
        reqParams=dict(params) if params is not None else None

        r=None
        respd=None
        for page in range(0,self.maxPages):
            try:
                self.printVerbose(3,"Transport:SendRecv:    {} {} params:{}".format(method,url,reqParams))
                t1=time.time()
                r = self.session.request(method, url, headers=hdrs, auth=authType, verify=self.verify, data=reqData,
                                         params=reqParams, timeout=(self.waitTime,self.timeout),**kwargs)
                t2=time.time()
                self.elapsed = t2 - t1

            except requests.exceptions.ConnectTimeout:
                self.printErr("Transport: connect timeout to {}".format(url))
                return(5,r,False,None)
            except requests.exceptions.ReadTimeout:
                # read timeout occured. This shouldn't happen, so fail it
                self.printErr("Transport: Fatal timeout waiting for response from {}".format(url))
                return(7,r,False,None)
            except requests.exceptions.ConnectionError:
                # eg DNS error, connection refused
                self.printErr("Transport: ConnectionError to {}".format(url))
                return(8,r,False,None)
            except requests.exceptions.RequestException as e:
                self.printErr("Transport: Fatal exception trying to connect to {}. Error:{}".format(url,e))
                return(9,r,False,None)
            except socket.error as e:
                # socket errors not wrapped by requests
                self.printErr("Transport: socket error to {}. Error:{}".format(url,e))
                return(6,r,False,None)

            self.printVerbose(4,"Transport: Response status_code: {}, elapsed: {:.2f} sec".format(r.status_code,self.elapsed))

            if( r.status_code == 401 and authenticated is True):
                # the token may have been revoked. drop it so the next request logs in again
                self.tokenStore.clear()
            if( r.status_code >= 400):
                self.printStatusErr4xx(r.status_code)
                return(r.status_code,r,False,None)
            if( r.status_code == 204 or (r.status_code in (200,201,202) and not r.text) ):
                return(0,r,False,None)
            if( r.status_code not in (200,201,202) ):
                self.printErr("Transport: unexpected response status code: {}".format(r.status_code))
                return(11,r,False,None)

            if( loadJsonData is not True):
                return(0,r,False,r.text)
            try:
                d=json.loads(r.text)
            except ValueError:
                self.printErr("Transport: Error loading Data: uri: {}".format(url))
                return(10,r,False,None)

            isPage=isinstance(d,dict) and isinstance(d.get("items"),list) and ("total" in d)
            if( isPage is not True ):
                # normal case where single response is not a collection page
                return(0,r,True,d)

            if( respd is None ):
                respd=d
            else:
                respd["items"]= respd["items"] + d["items"]
                respd["count"]= len(respd["items"])

            offset=d.get("offset",0) or 0
            count=d.get("count",len(d["items"]))
            if( count == 0 or (offset + count) >= d["total"] ):
                return(0,r,True,respd)

            # ask for the next page
            if reqParams is None:
                reqParams={}
            reqParams["offset"]=offset+count

        self.printErr("Transport: collection at {} exceeded {} pages".format(url,self.maxPages))
        return(0,r,True,respd)


    # login to the sso token endpoint with the client credentials and save the bearer token
    #   rc,r,j,d=rft.rfTokenLogin()
    def rfTokenLogin(self):
        self.printVerbose(4,"Transport: in TokenLogin")
        ts=self.tokenStore

        if( ts.clientId is None or ts.clientSecret is None ):
            self.printErr("Error: TokenLogin: no client credentials in environment or credential vault")
            return(401,None,False,None)

        loginData={"grant_type": "client_credentials", "client_id": ts.clientId, "client_secret": ts.clientSecret }
        try:
            r = self.session.post(self.ssoTokenUrl, data=loginData, headers={'Accept': 'application/json'},
                                  verify=self.verify, timeout=(self.waitTime,self.timeout))
        except requests.exceptions.RequestException as e:
            self.printErr("Error: TokenLogin: request to token endpoint failed. Error:{}".format(e))
            return(9,None,False,None)

        if( r.status_code != 200 ):
            self.printErr("Error: TokenLogin Failed: status_code: {}".format(r.status_code))
            return(r.status_code,r,False,None)
        try:
            d=json.loads(r.text)
        except ValueError:
            self.printErr("Error: TokenLogin: Error loading token response")
            return(10,r,False,None)
        if( not "access_token" in d ):
            self.printErr("Error: TokenLogin: token response did not return access_token")
            return(4,r,True,d)

        ts.accessToken=d["access_token"]
        ts.tokenType=d.get("token_type","Bearer")
        if "expires_in" in d:
            lifetime=max(int(d["expires_in"]) - self.tokenExpiryMargin, 0)
            ts.tokenExpires=datetime.datetime.now(pytz.utc) + datetime.timedelta(seconds=lifetime)
        else:
            ts.tokenExpires=None
        self.printVerbose(4,"Transport: TokenLogin ok, token expires: {}".format(ts.tokenExpires))

        return(0,r,True,d)


    def printVerbose(self,v,*argv):
        if( self.verbose >= v ):
            self.log.debug(" ".join(str(x) for x in argv))
        return(0)


    def printErr(self,*argv):
        self.log.error("{}: {}".format(self.program, " ".join(str(x) for x in argv)))
        return(0)


    def printStatusErr4xx(self, status_code):
        if status_code is None:
            status_code=0
        errMsgs={400: "Bad Request", 401: "Unauthorized", 403: "Forbidden--user not authorized to perform action",
                 404: "Not Found", 405: "Method Not Allowed", 406: "Not Acceptable", 408: "Request Timeout",
                 409: "Conflict", 412: "Precondition Failed", 413: "Request Entity Too Large",
                 415: "Unsupported Media Type", 422: "Unprocessable Entity", 429: "Too Many Requests"}
        if status_code >= 500:
            errMsg="Internal Server Error"
        else:
            errMsg=errMsgs.get(status_code,"")
        # not-found is an expected answer for lookups
        if status_code == 404:
            self.printVerbose(4,"Transport: Response Error: status_code: {} -- {}".format(status_code, errMsg))
        else:
            self.printErr("Transport: Response Error: status_code: {} -- {}".format(status_code, errMsg))
        return(0)

# end
