# tests/core/test_config_management.py
import json

import pytest

from composer.style.engine import StyleMode
from composer_shell.core.context.shell_context import ShellContext
from composer_shell.core.handlers.config_handler import handle_config
from composer_shell.core.managers.config_manager import ConfigManager
from composer_shell.core.utils.path_utils import PathUtils

# Een standaard, voorspelbare configuratie voor onze tests
MOCK_SETTINGS_CONTENT = {
    "debug": {
        "level": "WARNING",
        "trace": False,
        "trace_classes": ["nav-ul"]
    },
    "style": {
        "mode": "uaDiff"
    },
    "browser": {
        "headless": True,
        "timeout_ms": 30000
    }
}


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """
    Een fixture die een geïsoleerde testomgeving opzet voor de ConfigManager:
    - Creëert een tijdelijke package root.
    - Plaatst daarin een nep 'settings.json' bestand.
    - Monkeypatched PathUtils om naar deze tijdelijke locatie te wijzen.
    """
    package_root = tmp_path / "composer_shell"
    package_root.mkdir()
    settings_file = package_root / "settings.json"
    settings_file.write_text(json.dumps(MOCK_SETTINGS_CONTENT))

    # Zorg ervoor dat de ConfigManager ons testbestand vindt
    monkeypatch.setattr(PathUtils, 'get_shell_package_root', lambda: package_root)

    # De singleton is mogelijk al geladen, dus we forceren een herlaadactie
    config_manager_instance = ConfigManager()
    config_manager_instance.reset()

    yield config_manager_instance, ShellContext()

    # Herstel de echte settings.json voor de volgende tests
    monkeypatch.undo()
    config_manager_instance.reset()


# --- Tests voor de ConfigManager direct ---

def test_config_manager_load(config_env):
    """Test of de manager de configuratie correct laadt."""
    manager, _ = config_env
    config = manager.get_all()
    assert config["debug"]["level"] == "WARNING"
    assert config["browser"]["timeout_ms"] == 30000


def test_config_manager_get_nested(config_env):
    """Test het ophalen van geneste waarden."""
    manager, _ = config_env
    assert manager.get_nested("style.mode") == "uaDiff"
    assert manager.get_nested("non.existent.key", "default") == "default"


def test_config_manager_set_nested(config_env):
    """Test het aanpassen van waarden in het geheugen."""
    manager, _ = config_env

    # Test het aanpassen van een bestaande waarde
    manager.set_nested("debug.level", "INFO")
    assert manager.get_nested("debug.level") == "INFO"

    # Test het toevoegen van een nieuwe sleutel
    manager.set_nested("export.output_dir", "/tmp/out")
    assert manager.get_nested("export.output_dir") == "/tmp/out"

    # Test type-casting: de originele waarde is een int, dus '45000' wordt een int
    manager.set_nested("browser.timeout_ms", "45000")
    assert manager.get_nested("browser.timeout_ms") == 45000
    assert isinstance(manager.get_nested("browser.timeout_ms"), int)


def test_config_manager_casts_bools_and_lists(config_env):
    """Booleans en lijsten krijgen hun eigen conversie."""
    manager, _ = config_env

    manager.set_nested("browser.headless", "false")
    assert manager.get_nested("browser.headless") is False

    manager.set_nested("debug.trace_classes", "nav-ul, footer-nav-li")
    assert manager.get_nested("debug.trace_classes") == ["nav-ul", "footer-nav-li"]

    manager.set_nested("debug.trace_classes", '["header-ul"]')
    assert manager.get_nested("debug.trace_classes") == ["header-ul"]


def test_config_manager_uncastable_value_stored_as_string(config_env):
    manager, _ = config_env
    manager.set_nested("browser.timeout_ms", "soon")
    assert manager.get_nested("browser.timeout_ms") == "soon"


def test_config_manager_reset(config_env):
    """Test of de reset-functie de configuratie herlaadt vanaf schijf."""
    manager, _ = config_env

    # Verander eerst een waarde in het geheugen
    manager.set_nested("debug.level", "DEBUG")
    assert manager.get_nested("debug.level") == "DEBUG"

    # Voer de reset uit
    manager.reset()

    # Controleer of de waarde is teruggezet naar de originele waarde uit het bestand
    assert manager.get_nested("debug.level") == "WARNING"


def test_converter_settings_from_config(config_env):
    """De converter-sectie wordt omgezet naar ConverterSettings."""
    manager, _ = config_env
    settings = manager.converter_settings()
    assert settings.style_mode == StyleMode.UA_DIFF
    assert settings.trace_classes == ["nav-ul"]
    assert settings.correlation_attribute == "data-figma-id"

    overridden = manager.converter_settings(style_mode="all")
    assert overridden.style_mode == StyleMode.ALL


# --- Tests voor de 'config' command handler ---

def test_handle_config_list(config_env, capsys):
    """Test 'config list'."""
    _, ctx = config_env
    assert handle_config(["list"], ctx) == 0
    captured = capsys.readouterr()

    output_json = json.loads(captured.out)
    assert output_json["style"]["mode"] == "uaDiff"


def test_handle_config_set(config_env, capsys):
    """Test 'config set'."""
    manager, ctx = config_env
    exit_code = handle_config(["set", "browser.timeout_ms", "5000"], ctx)
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "✅ Config updated: browser.timeout_ms = 5000 (type: int)" in captured.out
    assert manager.get_nested("browser.timeout_ms") == 5000


def test_handle_config_set_missing_value(config_env, capsys):
    _, ctx = config_env
    assert handle_config(["set", "style.mode"], ctx) == 1
    assert "Usage: config set <key> <value>" in capsys.readouterr().out


def test_handle_config_reset(config_env, capsys):
    """Test 'config reset'."""
    manager, ctx = config_env

    # Verander eerst een waarde
    manager.set_nested("debug.level", "CRITICAL")

    # Roep dan reset aan
    handle_config(["reset"], ctx)
    captured = capsys.readouterr()

    assert "Configuration has been reset" in captured.out
    # Controleer of de waarde is teruggezet naar het origineel
    assert manager.get_nested("debug.level") == "WARNING"
