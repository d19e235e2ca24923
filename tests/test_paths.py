from lighthouse.paths import config_root, expand_path


def test_config_root_honours_xdg(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert config_root() == tmp_path / "lighthouse"


def test_expand_path_handles_home_vars_and_quotes(monkeypatch):
    monkeypatch.setenv("HOME", "/home/tester")
    monkeypatch.setenv("ICONS", "/usr/share/icons")
    assert expand_path("~/a.png") == "/home/tester/a.png"
    assert expand_path("$ICONS/b.png") == "/usr/share/icons/b.png"
    assert expand_path("'/tmp/with space.png'") == "/tmp/with space.png"


def test_expand_path_falls_back_to_literal():
    assert expand_path("it's.png") == "it's.png"
    assert expand_path("") == ""
