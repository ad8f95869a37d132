from unittest.mock import patch

import pytest

from hpecom_settings.comErrors import ComAuthError, ComRegionError, ComValidationError, ComWebRequestError
from hpecom_settings.comUtils import ComObject


def addSetting(simState, region, name, category, settings=None):
    regionDb = simState.regionSettings(region)
    settingId = "id-{}".format(len(regionDb))
    regionDb[settingId] = {"id": settingId, "name": name, "category": category, "description": None,
                           "platformFamily": "PROLIANT", "settings": settings or {}}
    return settingId


def test_invalid_region_raises_before_any_request(rdr, adapter):
    with pytest.raises(ComRegionError) as excInfo:
        rdr.settings.getSettings("mars-north")
    assert "us-west" in str(excInfo.value)
    with pytest.raises(ComRegionError):
        rdr.settings.removeSetting("mars-north", "x")
    assert adapter.sent == []


def test_set_regions_replaces_the_session_list(rdr):
    rdr.getTransport("eu-central")
    rdr.setRegions(["ap-northeast"])
    assert rdr.regions == ["ap-northeast"]
    assert "eu-central" not in rdr.transports
    with pytest.raises(ComRegionError):
        rdr.settings.getSettings("us-west")


def test_get_settings_repackages_with_type_and_region(rdr, simState):
    addSetting(simState, "us-west", "bios-1", "BIOS",
               {"DEFAULT": {"redfishData": {"Attributes": {"WorkloadProfile": "LowLatency"}}}})
    addSetting(simState, "us-west", "fw-1", "FIRMWARE", {"GEN11": {"id": "abc"}})

    settings = rdr.settings.getSettings("us-west")

    assert [s["name"] for s in settings] == ["bios-1", "fw-1"]
    assert all(isinstance(s, ComObject) for s in settings)
    assert settings[0].typeName == "HPEGreenLake.COM.Settings.BIOS"
    assert settings[0]["region"] == "us-west"
    assert settings[0]["WorkloadProfileName"] == "LowLatency"
    assert settings[1]["Gen11FirmwareBundleId"] == "abc"
    assert settings[1]["Gen10FirmwareBundleId"] is None


def test_get_settings_filters_by_category_and_name(rdr, simState, adapter):
    addSetting(simState, "us-west", "Bios-A", "BIOS")
    addSetting(simState, "us-west", "os-a", "OS", {"DEFAULT": {"mediaUrl": "https://x/os.iso"}})
    addSetting(simState, "us-west", "os-b", "OS")

    osSettings = rdr.settings.getSettings("us-west", category="Os")
    assert [s["name"] for s in osSettings] == ["os-a", "os-b"]
    assert osSettings[0]["MediaUrl"] == "https://x/os.iso"
    assert "category+eq+%27OS%27" in adapter.sent[-1].url or "category%20eq%20%27OS%27" in adapter.sent[-1].url

    found = rdr.settings.getSettings("us-west", name="bios-a")
    assert [s["name"] for s in found] == ["Bios-A"]


def test_settings_are_per_region(rdr, simState):
    addSetting(simState, "eu-central", "eu-only", "OS")
    assert rdr.settings.getSettings("us-west") == []
    assert [s["name"] for s in rdr.settings.getSettings("eu-central")] == ["eu-only"]


def test_simulator_mode_keeps_settings_per_region(simRdr, simState, adapter):
    status = simRdr.os.newOsSetting("us-west", "only-us", "https://x/os.iso")
    assert status["Status"] == "Complete"
    assert adapter.sent[-1].url.startswith("http://127.0.0.1:5050/")
    assert adapter.sent[-1].headers["Host"] == "us-west-api.compute.cloud.hpe.com"

    assert simRdr.settings.getSettings("eu-central") == []
    assert [s["name"] for s in simRdr.settings.getSettings("us-west")] == ["only-us"]
    assert list(simState.regionSettings("us-west").values())[0]["name"] == "only-us"


def test_unknown_category_raises(rdr):
    with pytest.raises(ComValidationError):
        rdr.settings.getSettings("us-west", category="Network")


def test_api_category_names_are_accepted(rdr):
    assert rdr.utils.categoryToApi("ILO_SETTINGS") == "ILO_SETTINGS"
    assert rdr.utils.categoryToApi("iloSettings") == "ILO_SETTINGS"
    assert rdr.utils.categoryToApi("ExternalStorage") == "EXTERNAL_STORAGE"


def test_get_settings_propagates_request_errors(rdr):
    with patch.object(rdr, "invokeWebRequest", side_effect=ComWebRequestError("boom", rc=500, statusCode=500)):
        with pytest.raises(ComWebRequestError):
            rdr.settings.getSettings("us-west")


def test_remove_setting(rdr, simState):
    addSetting(simState, "us-west", "old-os", "OS")

    status = rdr.settings.removeSetting("us-west", "old-os")

    assert status["Status"] == "Complete"
    assert status["Name"] == "old-os"
    assert status["Region"] == "us-west"
    assert status["Exception"] is None
    assert simState.regionSettings("us-west") == {}


def test_remove_missing_setting_is_a_warning(rdr):
    status = rdr.settings.removeSetting("us-west", "nope")
    assert status["Status"] == "Warning"
    assert "cannot be found" in status["Details"]


def test_remove_whatif_sends_nothing(rdr, simState):
    settingId = addSetting(simState, "us-west", "keep-me", "OS")
    req = rdr.settings.removeSetting("us-west", "keep-me", whatIf=True)
    assert req["Method"] == "DELETE"
    assert req["Uri"].endswith("/compute-ops-mgmt/v1beta1/settings/" + settingId)
    assert req["Headers"]["Authorization"] == "Bearer ********"
    assert settingId in simState.regionSettings("us-west")


def test_remove_failure_is_reported_in_status(rdr, simState):
    addSetting(simState, "us-west", "stuck", "OS")
    realInvoke = rdr.invokeWebRequest

    def failingDelete(region, uri, method="GET", **kwargs):
        if method == "DELETE":
            raise ComWebRequestError("Setting is in use by a server group", rc=409, statusCode=409)
        return realInvoke(region, uri, method=method, **kwargs)

    with patch.object(rdr, "invokeWebRequest", side_effect=failingDelete):
        status = rdr.settings.removeSetting("us-west", "stuck")

    assert status["Status"] == "Failed"
    assert "in use by a server group" in status["Details"]
    assert isinstance(status["Exception"], ComWebRequestError)


def test_error_message_comes_from_the_com_error_body(rdr):
    with pytest.raises(ComWebRequestError) as excInfo:
        rdr.invokeWebRequest("us-west", "/compute-ops-mgmt/v1beta1/settings/unknown")
    assert excInfo.value.statusCode == 404
    assert "not found" in str(excInfo.value)


def test_missing_credentials_raise_auth_error(rdr, monkeypatch):
    monkeypatch.delenv("HPECOM_CLIENT_ID")
    monkeypatch.delenv("HPECOM_CLIENT_SECRET")
    with pytest.raises(ComAuthError) as excInfo:
        rdr.invokeWebRequest("us-west", "/compute-ops-mgmt/v1beta1/settings")
    assert excInfo.value.rc == 401
