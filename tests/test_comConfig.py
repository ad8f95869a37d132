import json

from hpecom_settings.comConfig import ComConfig


def test_defaults():
    cfg = ComConfig()
    assert cfg.regions == ["us-west", "eu-central", "ap-northeast"]
    assert cfg.settingsApiVersion == "v1beta1"
    assert cfg.isSimulator is False
    assert cfg.confPath is None


def test_load_overlays_json_file(tmp_path, monkeypatch, caplog):
    monkeypatch.delenv("HPECOM_REGIONS", raising=False)
    confFile = tmp_path / "settings.conf"
    confFile.write_text(json.dumps({"regions": ["eu-central"], "timeout": 5, "bogusKey": 1}))

    cfg = ComConfig().load(str(confFile))

    assert cfg.regions == ["eu-central"]
    assert cfg.timeout == 5
    assert not hasattr(cfg, "bogusKey")
    assert cfg.confPath == str(confFile)
    assert "bogusKey" in caplog.text


def test_environment_regions_override(monkeypatch, tmp_path):
    monkeypatch.setenv("HPECOM_REGIONS", "us-west, ap-northeast")
    monkeypatch.setattr("os.path.isfile", lambda path: False)
    cfg = ComConfig().load()
    assert cfg.regions == ["us-west", "ap-northeast"]
