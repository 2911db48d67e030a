"""Catalogue of system maintenance scripts and their execution."""

from __future__ import annotations

import getpass
import os
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ScriptCategory(str, Enum):
    """Groups that maintenance scripts belong to."""

    CLEANUP = "cleanup"
    MONITORING = "monitoring"
    INSTALL = "install"


class ScriptNotFoundError(FileNotFoundError):
    """Raised when a script file does not exist on disk."""


@dataclass(frozen=True)
class Script:
    """A system maintenance script run through bash."""

    id: str
    name: str
    description: str
    path: str
    category: str
    requires_sudo: bool = False

    def command(self, script_path: Path) -> list[str]:
        """Return the command line used to run the script at ``script_path``."""
        if self.requires_sudo:
            return ["sudo", "-E", "bash", str(script_path)]
        return ["bash", str(script_path)]

    def execute(self, root_dir: str | os.PathLike[str] | None = None) -> None:
        """Run the script relative to ``root_dir`` (default: the working directory).

        The terminal is shared with the script, and REAL_USER / REAL_HOME carry
        the invoking user's identity through sudo. A non-zero exit raises
        :class:`subprocess.CalledProcessError`.
        """
        root = Path(root_dir) if root_dir is not None else Path.cwd()
        script_path = root / self.path
        if not script_path.exists():
            raise ScriptNotFoundError(f"script not found: {script_path}")

        try:
            username = getpass.getuser()
            home = str(Path.home())
        except (KeyError, OSError, RuntimeError) as exc:
            raise OSError(f"failed to get current user: {exc}") from exc

        env = dict(os.environ)
        env["REAL_USER"] = username
        env["REAL_HOME"] = home
        subprocess.run(self.command(script_path), env=env, check=True)


_SCRIPTS = (
    Script(
        id="cleanup-full",
        name="Limpeza Completa (SSD)",
        description="Orquestrador completo de limpeza do sistema",
        path="scripts/cleanup/limpar_ssd.sh",
        category=ScriptCategory.CLEANUP.value,
        requires_sudo=True,
    ),
    Script(
        id="cleanup-general",
        name="Limpeza Geral (Caches)",
        description="Limpa caches de Docker, Poetry, npm, apt, etc.",
        path="scripts/cleanup/limpar_geral.sh",
        category=ScriptCategory.CLEANUP.value,
        requires_sudo=True,
    ),
    Script(
        id="cleanup-large",
        name="Buscar Arquivos Grandes",
        description="Encontra e remove arquivos/pastas grandes (>100MB)",
        path="scripts/cleanup/limpar_grandes.sh",
        category=ScriptCategory.CLEANUP.value,
        requires_sudo=True,
    ),
    Script(
        id="monitor-battery",
        name="Monitor de Bateria",
        description="Exibe informações detalhadas da bateria",
        path="scripts/monitoring/teste_bateria.sh",
        category=ScriptCategory.MONITORING.value,
        requires_sudo=False,
    ),
    Script(
        id="monitor-memory",
        name="Uso de Memória",
        description="Mostra consumo de memória RAM",
        path="scripts/monitoring/memoria.sh",
        category=ScriptCategory.MONITORING.value,
        requires_sudo=False,
    ),
)


def get_all_scripts() -> list[Script]:
    """Return every available script."""
    return list(_SCRIPTS)


def get_scripts_by_category(category: ScriptCategory | str) -> list[Script]:
    """Return the scripts belonging to ``category``."""
    wanted = category.value if isinstance(category, ScriptCategory) else category
    return [script for script in _SCRIPTS if script.category == wanted]