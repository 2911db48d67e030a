"""Main menu entries, list items, UI messages and a simple selectable list."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Optional

from homestead.scripts import Script, ScriptCategory

PACKAGE_CATEGORY_IDE = "ide"
PACKAGE_CATEGORY_TOOL = "tool"
PACKAGE_CATEGORY_APP = "app"
PACKAGE_CATEGORY_ZSH_CORE = "zsh-core"
PACKAGE_CATEGORY_TERMINAL = "terminal"
PACKAGE_CATEGORY_SHELL = "shell"
PACKAGE_CATEGORY_AI = "ai"
PACKAGE_CATEGORY_GAMES = "games"

MAIN_MENU_TITLE = "Homestead - Gerenciador de Sistema"
INSTALLERS_TITLE = "📦 Instaladores"

_PACKAGE_CATEGORY_TITLES = {
    PACKAGE_CATEGORY_IDE: "💻 IDEs e Editores",
    PACKAGE_CATEGORY_TOOL: "🔧 Ferramentas de Desenvolvimento",
    PACKAGE_CATEGORY_APP: "📱 Aplicações",
    PACKAGE_CATEGORY_ZSH_CORE: "🐚 Componentes Core (Zsh)",
    PACKAGE_CATEGORY_TERMINAL: "🖥️ Emuladores de Terminal",
    PACKAGE_CATEGORY_SHELL: "🐚 Shells Alternativos",
    PACKAGE_CATEGORY_AI: "🤖 Integração com IA",
    PACKAGE_CATEGORY_GAMES: "🎮 Games",
}

_SCRIPT_CATEGORY_TITLES = {
    ScriptCategory.CLEANUP.value: "🧹 Limpeza do Sistema",
    ScriptCategory.MONITORING.value: "📊 Monitoramento",
    ScriptCategory.INSTALL.value: "📦 Instaladores",
}


class ViewState(IntEnum):
    """The screens of the terminal UI."""

    MAIN_MENU = 0
    SCRIPT_LIST = 1
    INSTALLER_CATEGORIES = 2
    PACKAGE_LIST = 3
    CONFIRMATION = 4
    EXECUTING = 5
    INSTALLING = 6
    ZSH_WIZARD = 7
    ZSH_APPLYING = 8
    ZSH_REPO_WIZARD = 9


class MenuAction(str, Enum):
    """What a main menu entry does."""

    CLEANUP = "cleanup"
    MONITORING = "monitoring"
    INSTALLERS = "installers"
    ZSH_PLUGINS = "zsh_plugins"
    ZSH_REPO = "zsh_repo"
    SETTINGS = "settings"
    QUIT = "quit"


@dataclass(frozen=True)
class MenuItem:
    """An entry of the main menu."""

    title: str
    description: str = ""
    action: Optional[MenuAction] = None

    def filter_value(self) -> str:
        """Return the text used when filtering the list."""
        return self.title


@dataclass(frozen=True)
class ScriptItem:
    """A list entry wrapping a maintenance script."""

    script: Script

    def title(self) -> str:
        return self.script.name

    def description(self) -> str:
        return self.script.description

    def filter_value(self) -> str:
        return self.script.name


@dataclass(frozen=True)
class PackageItem:
    """A list entry wrapping an installable package."""

    package: Any

    def title(self) -> str:
        return self.package.name

    def description(self) -> str:
        return self.package.description

    def filter_value(self) -> str:
        return self.package.name


@dataclass(frozen=True)
class InstallerCategoryItem:
    """A group of package categories shown under the installers menu."""

    title: str
    description: str
    categories: tuple = ()

    def filter_value(self) -> str:
        return self.title


@dataclass(frozen=True)
class InstallProgress:
    """Progress report of a package installation; ``progress`` is 0–100."""

    status: str = ""
    message: str = ""
    progress: int = 0
    can_abort: bool = False
    is_completed: bool = False
    error: Optional[BaseException] = None

    @property
    def fraction(self) -> float:
        return self.progress / 100.0


@dataclass(frozen=True)
class InstallComplete:
    """An installation finished; ``error`` is ``None`` on success."""

    error: Optional[BaseException] = None


@dataclass(frozen=True)
class ZshCoreInstalled:
    """Result of checking whether Oh My Zsh is installed."""

    installed: bool


@dataclass(frozen=True)
class ZshApplyResult:
    """Applying the Zsh configuration finished; ``error`` is ``None`` on success."""

    error: Optional[BaseException] = None


@dataclass(frozen=True)
class ZshApplyReturnToMenu:
    """Time to leave the Zsh apply feedback screen."""


def _text(item: Any, name: str) -> str:
    value = getattr(item, name, "")
    if callable(value):
        value = value()
    return str(value or "")


@dataclass
class SelectList:
    """A titled, scrollable list with a cursor."""

    items: list = field(default_factory=list)
    title: str = ""
    cursor: int = 0
    width: int = 0
    height: int = 0

    def __init__(self, items: Any = (), title: str = ""):
        self.items = list(items)
        self.title = title
        self.cursor = 0
        self.width = 0
        self.height = 0

    def set_items(self, items: Any) -> None:
        """Replace the items, keeping the cursor within range."""
        self.items = list(items)
        self.cursor = min(self.cursor, max(len(self.items) - 1, 0))

    def selected(self) -> Any:
        """Return the item under the cursor, or ``None`` when empty."""
        if not self.items:
            return None
        return self.items[self.cursor]

    def handle_key(self, key: str) -> None:
        """Move the cursor with arrow, vi and home/end keys."""
        last = max(len(self.items) - 1, 0)
        if key in ("up", "k"):
            self.cursor = max(self.cursor - 1, 0)
        elif key in ("down", "j"):
            self.cursor = min(self.cursor + 1, last)
        elif key in ("home", "g"):
            self.cursor = 0
        elif key in ("end", "G"):
            self.cursor = last
        return None

    def set_size(self, width: int, height: int) -> None:
        """Set the area available for drawing."""
        self.width = width
        self.height = height

    def _visible_range(self) -> range:
        if self.height <= 0:
            return range(len(self.items))
        per_page = max(1, (self.height - 2) // 3)
        start = (self.cursor // per_page) * per_page
        return range(start, min(start + per_page, len(self.items)))

    def view(self) -> str:
        """Render the title and the visible page of items."""
        lines = [self.title, ""]
        for index in self._visible_range():
            item = self.items[index]
            marker = "> " if index == self.cursor else "  "
            lines.append(marker + _text(item, "title"))
            description = _text(item, "description")
            if description:
                lines.append("  " + description)
            lines.append("")
        if not self.items:
            lines.append("  Nenhum item.")
        return "\n".join(lines).rstrip("\n")


def main_menu_items(zsh_core_installed: bool) -> list[MenuItem]:
    """Return the main menu; the Zsh plugins entry needs Oh My Zsh installed."""
    items = [
        MenuItem("🧹 Limpeza do Sistema", "Scripts de limpeza e manutenção", MenuAction.CLEANUP),
        MenuItem("📊 Monitoramento", "Informações do sistema", MenuAction.MONITORING),
        MenuItem(
            "📦 Instaladores",
            "Instalar ferramentas e aplicações (IDEs, Zsh, Oh My Zsh, etc.)",
            MenuAction.INSTALLERS,
        ),
    ]
    if zsh_core_installed:
        items.append(
            MenuItem(
                "🔧 Plugins e temas Zsh",
                "Plugins, temas e .zshrc local",
                MenuAction.ZSH_PLUGINS,
            )
        )
    items += [
        MenuItem(
            "⚙️  Configurar Zsh",
            "Repositório de config: backup e migração entre máquinas",
            MenuAction.ZSH_REPO,
        ),
        MenuItem("⚙️  Configurações", "Configurar a ferramenta (em breve)", MenuAction.SETTINGS),
        MenuItem("❌ Sair", "Fechar Homestead", MenuAction.QUIT),
    ]
    return items


def installer_categories() -> list[InstallerCategoryItem]:
    """Return the groups shown inside the installers menu."""
    return [
        InstallerCategoryItem(
            "💻 IDEs & Dev (CLI)",
            "VS Code, Cursor, Claude Code, Antigravity e afins",
            (PACKAGE_CATEGORY_IDE,),
        ),
        InstallerCategoryItem(
            "📱 Aplicações",
            "Google Chrome, Insomnia e outras aplicações",
            (PACKAGE_CATEGORY_APP,),
        ),
        InstallerCategoryItem(
            "🔧 Ferramentas de desenvolvimento",
            "GitHub CLI (gh), NVM, Bun, pnpm, Deno e afins",
            (PACKAGE_CATEGORY_TOOL,),
        ),
        InstallerCategoryItem(
            "🐚 Shells alternativos",
            "Fish Shell e futuros shells opcionais",
            (PACKAGE_CATEGORY_SHELL,),
        ),
        InstallerCategoryItem(
            "🖥️ Emuladores de Terminal",
            "WezTerm (recomendado), Kitty, Alacritty, Warp, Wave Terminal",
            (PACKAGE_CATEGORY_TERMINAL,),
        ),
        InstallerCategoryItem(
            "🐚 Componentes Core (Zsh)",
            "Zsh, Oh My Zsh, Powerlevel10k",
            (PACKAGE_CATEGORY_ZSH_CORE,),
        ),
        InstallerCategoryItem(
            "🎮 Games",
            "Prism Launcher, Lutris",
            (PACKAGE_CATEGORY_GAMES,),
        ),
        InstallerCategoryItem(
            "🤖 Integração com IA (Opcional)",
            "ShellGPT (qualquer shell), Fish-AI (Fish). Warp já vem com IA embutida.",
            (PACKAGE_CATEGORY_AI,),
        ),
    ]


def package_category_title(category: Any) -> str:
    """Return the display title of a package category, or ``""`` if unknown."""
    key = getattr(category, "value", category)
    return _PACKAGE_CATEGORY_TITLES.get(key, "")


def script_category_title(category: Any) -> str:
    """Return the display title of a script category, or ``""`` if unknown."""
    key = getattr(category, "value", category)
    return _SCRIPT_CATEGORY_TITLES.get(key, "")