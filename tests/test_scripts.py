import getpass
import subprocess

import pytest

from homestead.scripts import (
    Script,
    ScriptCategory,
    ScriptNotFoundError,
    get_all_scripts,
    get_scripts_by_category,
)


def test_get_all_scripts_count_and_fields():
    scripts = get_all_scripts()
    assert len(scripts) == 5
    for script in scripts:
        assert script.id
        assert script.name
        assert script.description
        assert script.path
        assert script.category


@pytest.mark.parametrize(
    "category, expected_min",
    [
        (ScriptCategory.CLEANUP, 3),
        (ScriptCategory.MONITORING, 2),
        (ScriptCategory.INSTALL, 0),
    ],
)
def test_get_scripts_by_category(category, expected_min):
    scripts = get_scripts_by_category(category)
    assert len(scripts) >= expected_min
    assert all(s.category == category.value for s in scripts)


def test_get_scripts_by_category_accepts_string():
    assert get_scripts_by_category("cleanup") == get_scripts_by_category(
        ScriptCategory.CLEANUP
    )


@pytest.mark.parametrize(
    "script_id, name, path, sudo",
    [
        ("cleanup-full", "Limpeza Completa (SSD)", "scripts/cleanup/limpar_ssd.sh", True),
        ("monitor-battery", "Monitor de Bateria", "scripts/monitoring/teste_bateria.sh", False),
        ("monitor-memory", "Uso de Memória", "scripts/monitoring/memoria.sh", False),
    ],
)
def test_script_fields(script_id, name, path, sudo):
    found = {s.id: s for s in get_all_scripts()}[script_id]
    assert found.name == name
    assert found.path == path
    assert found.requires_sudo is sudo


def test_script_categories():
    assert ScriptCategory("cleanup") is ScriptCategory.CLEANUP
    assert ScriptCategory("monitoring") is ScriptCategory.MONITORING
    assert ScriptCategory("install") is ScriptCategory.INSTALL
    assert {s.category for s in get_all_scripts()} == {"cleanup", "monitoring"}
    assert get_scripts_by_category("install") == []


def test_script_ids_unique():
    ids = [s.id for s in get_all_scripts()]
    assert len(ids) == len(set(ids))


def test_command_uses_sudo_only_when_required(tmp_path):
    sudo = Script("a", "A", "d", "x.sh", "cleanup", True)
    plain = Script("b", "B", "d", "x.sh", "cleanup", False)
    path = tmp_path / "x.sh"
    assert sudo.command(path) == ["sudo", "-E", "bash", str(path)]
    assert plain.command(path) == ["bash", str(path)]


def test_execute_missing_script_raises(tmp_path):
    script = Script("m", "M", "d", "missing.sh", "monitoring")
    with pytest.raises(ScriptNotFoundError, match="script not found"):
        script.execute(tmp_path)


def test_execute_passes_real_user(tmp_path):
    out = tmp_path / "out.txt"
    (tmp_path / "s.sh").write_text(f'printf "%s" "$REAL_USER" > "{out}"\n')
    Script("s", "S", "d", "s.sh", "monitoring").execute(tmp_path)
    assert out.read_text() == getpass.getuser()


def test_execute_failure_raises(tmp_path):
    (tmp_path / "fail.sh").write_text("exit 3\n")
    with pytest.raises(subprocess.CalledProcessError) as info:
        Script("f", "F", "d", "fail.sh", "monitoring").execute(tmp_path)
    assert info.value.returncode == 3