
# Copyright Notice:
#    Copyright 2018 Dell, Inc. All rights reserved.
#    License: BSD License.  For full license text see link: https://github.com/RedDrum-Redfish-Project/RedDrum-OpenBMC/LICENSE.txt

# hpecomSettingsMain -- command line interface for the COM server settings client
import re
import sys
import json
import argparse

from .comConfig import ComConfig
from .comErrors import ComError, ComValidationError
from .comRoot import ComRoot
from .biosAttributes import biosAttributes, enabledDisabled
from .iloSettingsBackend import iloParameters


# value kinds used to coerce Name=Value strings from the command line
#   "bool"   -- "true"/"false" become bools
#   "int"    -- integers become ints
#   "string" -- kept as typed
#   None     -- unknown name, guess from the value
def coerceValue(raw, kind=None):
    if kind == "string":
        return(raw)
    if kind in (None, "bool") and raw.lower() in ("true", "false"):
        return(raw.lower() == "true")
    if kind in (None, "int") and re.match(r"^-?[0-9]+$", raw):
        return(int(raw))
    return(raw)

def biosValueKind(name):
    for attrName,entry in biosAttributes.items():
        if attrName.lower() == name.lower():
            if entry[0] == "enum":
                return("bool" if entry[1] is enabledDisabled else "string")
            return(entry[0])
    return(None)

def iloValueKind(name):
    for paramName,(path,kind,allowed,dflt) in iloParameters.items():
        if paramName.lower() == name.lower():
            if kind in ("enabled", "switch"):
                return("bool")
            if kind in ("port", "int"):
                return("int")
            if kind == "choice" and all(isinstance(x, int) for x in allowed):
                return("int")
            return("string")
    return(None)

# parse a list of Name=Value strings into a dict
#   valueKind(name) returns the kind used to coerce the value of that name
def parseNameValues(pairs, valueKind=None):
    values={}
    for pair in pairs or []:
        if "=" not in pair:
            raise ComValidationError("expected Name=Value, got: '{}'".format(pair))
        name,raw=pair.split("=",1)
        name=name.strip()
        kind=valueKind(name) if valueKind is not None else None
        values[name]=coerceValue(raw.strip(), kind)
    return(values)


def cmdGet(rdr, args):
    return(rdr.settings.getSettings(args.region, name=args.name, category=args.category, showSettings=args.show_settings))

def cmdRemove(rdr, args):
    return(rdr.settings.removeSetting(args.region, args.name, whatIf=args.whatif))

def cmdNewBios(rdr, args):
    return(rdr.bios.newBiosSetting(args.region, args.name, description=args.description,
                                   workloadProfileName=args.workload_profile, whatIf=args.whatif,
                                   **parseNameValues(args.attribute, biosValueKind)))

def cmdSetBios(rdr, args):
    return(rdr.bios.setBiosSetting(args.region, args.name, newName=args.new_name, description=args.description,
                                   workloadProfileName=args.workload_profile, whatIf=args.whatif,
                                   **parseNameValues(args.attribute, biosValueKind)))

def cmdNewFirmware(rdr, args):
    return(rdr.firmware.newFirmwareSetting(args.region, args.name, description=args.description,
                                           gen10FirmwareBundleReleaseVersion=args.gen10,
                                           gen11FirmwareBundleReleaseVersion=args.gen11,
                                           gen12FirmwareBundleReleaseVersion=args.gen12, whatIf=args.whatif))

def cmdSetFirmware(rdr, args):
    return(rdr.firmware.setFirmwareSetting(args.region, args.name, newName=args.new_name, description=args.description,
                                           gen10FirmwareBundleReleaseVersion=args.gen10,
                                           gen11FirmwareBundleReleaseVersion=args.gen11,
                                           gen12FirmwareBundleReleaseVersion=args.gen12, whatIf=args.whatif))

def cmdNewOs(rdr, args):
    return(rdr.os.newOsSetting(args.region, args.name, args.media_url, description=args.description,
                               osType=args.os_type, unattendedInstallFileUrl=args.unattended_file_url,
                               timeoutInMinutes=args.timeout_minutes, whatIf=args.whatif))

def cmdSetOs(rdr, args):
    return(rdr.os.setOsSetting(args.region, args.name, newName=args.new_name, description=args.description,
                               mediaUrl=args.media_url, osType=args.os_type,
                               unattendedInstallFileUrl=args.unattended_file_url,
                               timeoutInMinutes=args.timeout_minutes, whatIf=args.whatif))

def storageOptions(args):
    return({"capacityInGiB": args.capacity_gib, "driveTechnology": args.drive_technology,
            "ioPerformanceModeEnabled": args.io_performance_mode, "readCachePolicy": args.read_cache_policy,
            "writeCachePolicy": args.write_cache_policy, "stripSizeInBytes": args.strip_size,
            "spareDriveCount": args.spare_drives})

def cmdNewStorage(rdr, args):
    return(rdr.storage.newStorageSetting(args.region, args.name, args.raid_type, description=args.description,
                                         whatIf=args.whatif, **storageOptions(args)))

def cmdSetStorage(rdr, args):
    return(rdr.storage.setStorageSetting(args.region, args.name, newName=args.new_name, description=args.description,
                                         raidType=args.raid_type, entireDisk=True if args.entire_disk else None,
                                         whatIf=args.whatif, **storageOptions(args)))

def cmdNewIlo(rdr, args):
    return(rdr.ilo.newIloSetting(args.region, args.name, description=args.description, whatIf=args.whatif,
                                 **parseNameValues(args.parameter, iloValueKind)))

def cmdSetIlo(rdr, args):
    return(rdr.ilo.setIloSetting(args.region, args.name, newName=args.new_name, description=args.description,
                                 whatIf=args.whatif, **parseNameValues(args.parameter, iloValueKind)))


def buildParser():
    parser=argparse.ArgumentParser(prog="hpecomSettingsMain",
                                   description="Manage HPE Compute Ops Management server settings")
    parser.add_argument("-c", "--config", help="path to a json config file")
    parser.add_argument("-r", "--region", help="COM region code eg: us-west")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("-L", "--local", action="store_true", help="do not log to syslog")
    parser.add_argument("-S", "--simulator", action="store_true", help="send requests to the local simulator")
    parser.add_argument("--whatif", action="store_true", help="show the request instead of sending it")
    sub=parser.add_subparsers(dest="command")

    p=sub.add_parser("get", help="get settings")
    p.add_argument("-n", "--name")
    p.add_argument("--category", help="Bios, Firmware, Os, Storage, ExternalStorage, IloSettings")
    p.add_argument("--show-settings", action="store_true", help="show the flattened iLO settings")
    p.set_defaults(func=cmdGet)

    p=sub.add_parser("remove", help="remove a setting")
    p.add_argument("-n", "--name", required=True)
    p.set_defaults(func=cmdRemove)

    for cmd,func in (("new-bios",cmdNewBios), ("set-bios",cmdSetBios)):
        p=sub.add_parser(cmd, help="create or update a BIOS setting")
        p.add_argument("-n", "--name", required=True)
        p.add_argument("-d", "--description")
        p.add_argument("--workload-profile")
        p.add_argument("-a", "--attribute", action="append", metavar="NAME=VALUE", help="BIOS attribute, repeatable")
        if cmd.startswith("set"):
            p.add_argument("--new-name")
        p.set_defaults(func=func)

    for cmd,func in (("new-firmware",cmdNewFirmware), ("set-firmware",cmdSetFirmware)):
        p=sub.add_parser(cmd, help="create or update a firmware baseline setting")
        p.add_argument("-n", "--name", required=True)
        p.add_argument("-d", "--description")
        p.add_argument("--gen10", metavar="RELEASE_VERSION")
        p.add_argument("--gen11", metavar="RELEASE_VERSION")
        p.add_argument("--gen12", metavar="RELEASE_VERSION")
        if cmd.startswith("set"):
            p.add_argument("--new-name")
        p.set_defaults(func=func)

    for cmd,func in (("new-os",cmdNewOs), ("set-os",cmdSetOs)):
        p=sub.add_parser(cmd, help="create or update an OS image setting")
        p.add_argument("-n", "--name", required=True)
        p.add_argument("-d", "--description")
        p.add_argument("--media-url", required=cmd.startswith("new"))
        p.add_argument("--os-type")
        p.add_argument("--unattended-file-url")
        p.add_argument("--timeout-minutes", type=int)
        if cmd.startswith("set"):
            p.add_argument("--new-name")
        p.set_defaults(func=func)

    for cmd,func in (("new-storage",cmdNewStorage), ("set-storage",cmdSetStorage)):
        p=sub.add_parser(cmd, help="create or update an internal storage setting")
        p.add_argument("-n", "--name", required=True)
        p.add_argument("-d", "--description")
        p.add_argument("--raid-type", required=cmd.startswith("new"))
        p.add_argument("--capacity-gib", type=int)
        p.add_argument("--drive-technology")
        p.add_argument("--io-performance-mode", choices=["Enabled","Disabled"])
        p.add_argument("--read-cache-policy")
        p.add_argument("--write-cache-policy")
        p.add_argument("--strip-size", type=int)
        p.add_argument("--spare-drives", type=int)
        if cmd.startswith("set"):
            p.add_argument("--new-name")
            p.add_argument("--entire-disk", action="store_true")
        p.set_defaults(func=func)

    for cmd,func in (("new-ilo",cmdNewIlo), ("set-ilo",cmdSetIlo)):
        p=sub.add_parser(cmd, help="create or update an iLO settings setting")
        p.add_argument("-n", "--name", required=True)
        p.add_argument("-d", "--description")
        p.add_argument("-p", "--parameter", action="append", metavar="NAME=VALUE", help="iLO parameter, repeatable")
        if cmd.startswith("set"):
            p.add_argument("--new-name")
        p.set_defaults(func=func)

    p=sub.add_parser("simulator", help="run the COM api simulator")
    p.add_argument("--host", default=None)
    p.add_argument("--port", type=int, default=None)

    return(parser)


def main(argv=None):
    parser=buildParser()
    args=parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return(1)

    config=ComConfig().load(args.config)
    if args.simulator is True:
        config.isSimulator=True
    if args.local is True:
        config.isLocal=True

    if args.command == "simulator":
        from .comSimulator import createApp
        host,port=config.simulatorNetloc.split(":")
        createApp().run(host=args.host or host, port=args.port or int(port))
        return(0)

    if args.region is None:
        parser.error("-r/--region is required")

    rdr=ComRoot(config, debug=args.verbose)
    try:
        result=args.func(rdr, args)
    except ComError as e:
        rdr.logMsg("ERROR","{}: {}".format(args.command, e))
        print("Error: {}".format(e), file=sys.stderr)
        return(1)

    print(json.dumps(result, indent=4, default=str))
    if isinstance(result, dict) and result.get("Status") == "Failed":
        return(1)
    return(0)


if __name__ == "__main__":
    sys.exit(main())

