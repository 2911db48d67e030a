"""Step-by-step selection of Zsh plugins and development tools."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Protocol

from homestead.events import KeyPress, Quit, WindowSize

KEY_SELECT_ALL = "a"

CORE_COMPONENTS = ("zsh", "oh-my-zsh", "powerlevel10k")


class _WizardService(Protocol):
    def create_new_wizard(self) -> Any: ...
    def next_step(self, state: Any) -> Any: ...
    def previous_step(self, state: Any) -> Any: ...
    def add_plugin(self, state: Any, plugin_id: str) -> Any: ...
    def remove_plugin(self, state: Any, plugin_id: str) -> Any: ...
    def add_tool(self, state: Any, tool_id: str) -> Any: ...
    def remove_tool(self, state: Any, tool_id: str) -> Any: ...
    def total_steps(self) -> int: ...
    def progress(self, state: Any) -> int: ...
    def generate_preview(self, state: Any) -> str: ...


class ZshWizardView(IntEnum):
    """The steps of the wizard, in order."""

    PLUGINS = 0
    TOOLS = 1
    REVIEW = 2


@dataclass
class WizardItem:
    """A selectable entry in one of the wizard's lists."""

    id: str
    name: str
    description: str = ""
    selected: bool = False


def _core_items() -> list[WizardItem]:
    return [
        WizardItem("zsh", "Zsh", "Z Shell - shell poderoso e configurável"),
        WizardItem("oh-my-zsh", "Oh My Zsh", "Framework para gerenciar configuração Zsh"),
        WizardItem("powerlevel10k", "Powerlevel10k", "Tema Zsh rápido e customizável"),
    ]


def _plugin_items() -> list[WizardItem]:
    return [
        WizardItem("git", "git", "Plugin para Git (built-in)"),
        WizardItem("docker", "docker", "Plugin para Docker (built-in)"),
        WizardItem("rails", "rails", "Plugin para Ruby on Rails (built-in)"),
        WizardItem("z", "z", "Navegação rápida de diretórios (built-in)"),
        WizardItem("sudo", "sudo", "Adiciona sudo com double ESC (built-in)"),
        WizardItem("zsh-autosuggestions", "zsh-autosuggestions",
                   "Sugestões automáticas baseadas no histórico"),
        WizardItem("zsh-syntax-highlighting", "zsh-syntax-highlighting",
                   "Destaque de sintaxe para comandos"),
        WizardItem("fzf-zsh", "fzf", "Integração fuzzy finder"),
        WizardItem("you-should-use", "you-should-use", "Lembra aliases existentes"),
        WizardItem("zsh-completions", "zsh-completions", "Completions adicionais"),
        WizardItem("zsh-history-substring-search", "history-substring-search",
                   "Busca no histórico por substring"),
        WizardItem("fast-syntax-highlighting", "fast-syntax-highlighting",
                   "Syntax highlighting mais rápido"),
        WizardItem("auto-notify", "auto-notify", "Notificações para comandos longos"),
        WizardItem("zsh-vi-mode", "zsh-vi-mode", "Melhor modo Vi para Zsh"),
        WizardItem("zsh-autocomplete", "zsh-autocomplete", "Autocomplete em tempo real"),
    ]


def _tool_items() -> list[WizardItem]:
    return [
        WizardItem("nvm", "NVM", "Node Version Manager"),
        WizardItem("bun", "Bun", "Runtime JavaScript/TypeScript rápido"),
        WizardItem("sdkman", "SDKMAN!", "Gerenciador de SDKs para JVM"),
        WizardItem("pnpm", "pnpm", "Gerenciador de pacotes Node.js eficiente"),
        WizardItem("deno", "Deno", "Runtime seguro para JavaScript e TypeScript"),
        WizardItem("angular-cli", "Angular CLI", "CLI para Angular"),
        WizardItem("openvpn3", "OpenVPN 3", "Cliente VPN moderno"),
        WizardItem("homebrew", "Homebrew", "Gerenciador de pacotes para Linux"),
    ]


def _box(text: str) -> str:
    """Draw ``text`` inside a rounded border with one line and two columns of padding."""
    lines = text.splitlines() or [""]
    inner = max(len(line) for line in lines) + 4
    blank = "│" + " " * inner + "│"
    body = ["│  " + line.ljust(inner - 4) + "  │" for line in lines]
    return "\n".join(["╭" + "─" * inner + "╮", blank, *body, blank, "╰" + "─" * inner + "╯"])


class ZshWizard:
    """Interactive wizard that collects plugin and tool selections.

    The Zsh core (zsh, Oh My Zsh, Powerlevel10k) is assumed installed and is
    pre-filled into the selections.
    """

    def __init__(self, wizard_service: _WizardService):
        self.wizard_service = wizard_service
        self.state = wizard_service.create_new_wizard()
        self.state.selections.core_components = list(CORE_COMPONENTS)
        self.current_view = ZshWizardView.PLUGINS
        self.core_items = _core_items()
        self.plugin_items = _plugin_items()
        self.tool_items = _tool_items()
        self.cursor = 0
        self.width = 0
        self.height = 0
        self.done = False
        self.cancelled = False

    def update(self, msg: Any) -> Any:
        """Handle a message and return the command to run, if any."""
        if isinstance(msg, WindowSize):
            self.width, self.height = msg.width, msg.height
            return None
        if isinstance(msg, KeyPress):
            return self.handle_key(msg.key)
        return None

    def handle_key(self, key: str) -> Any:
        """React to the key named ``key``."""
        if key == "ctrl+c":
            self.cancelled = True
            self.done = True
            return Quit()
        if key == "esc":
            if self.current_view > ZshWizardView.PLUGINS:
                self.current_view = ZshWizardView(self.current_view - 1)
                self.wizard_service.previous_step(self.state)
                self.cursor = 0
            else:
                self.cancelled = True
                self.done = True
            return None
        if key in ("n", "tab", "right"):
            if self.current_view == ZshWizardView.REVIEW:
                self.done = True
            else:
                self.current_view = ZshWizardView(self.current_view + 1)
                self.wizard_service.next_step(self.state)
                self.cursor = 0
            return None
        if key == "enter" and self.current_view == ZshWizardView.REVIEW:
            self.done = True
            return None

        items = self.current_items()
        if items is None:
            return None
        if key in ("up", "k"):
            if self.cursor > 0:
                self.cursor -= 1
        elif key in ("down", "j"):
            if self.cursor < len(items) - 1:
                self.cursor += 1
        elif key in (" ", "space", "enter"):
            self.toggle_item(self.cursor)
        elif key == KEY_SELECT_ALL:
            self.select_all()
        return None

    def current_items(self) -> list[WizardItem] | None:
        """Return the list shown in the current step, or ``None`` on review."""
        if self.current_view == ZshWizardView.PLUGINS:
            return self.plugin_items
        if self.current_view == ZshWizardView.TOOLS:
            return self.tool_items
        return None

    def _sync(self, item: WizardItem) -> None:
        service = self.wizard_service
        if self.current_view == ZshWizardView.PLUGINS:
            if item.selected:
                service.add_plugin(self.state, item.id)
            else:
                service.remove_plugin(self.state, item.id)
        elif self.current_view == ZshWizardView.TOOLS:
            if item.selected:
                service.add_tool(self.state, item.id)
            else:
                service.remove_tool(self.state, item.id)

    def toggle_item(self, index: int) -> None:
        """Flip the selection of the item at ``index`` in the current list."""
        items = self.current_items()
        if items is None or not 0 <= index < len(items):
            return
        item = items[index]
        item.selected = not item.selected
        self._sync(item)

    def select_all(self) -> None:
        """Select every item of the current list."""
        for item in self.current_items() or []:
            if not item.selected:
                item.selected = True
                self._sync(item)

    def view(self) -> str:
        """Render the current step."""
        if self.current_view == ZshWizardView.PLUGINS:
            return self._render_selection(
                "Plugins Zsh", "Selecione os plugins que deseja instalar", self.plugin_items
            )
        if self.current_view == ZshWizardView.TOOLS:
            return self._render_selection(
                "Ferramentas de Desenvolvimento",
                "Selecione as ferramentas de desenvolvimento",
                self.tool_items,
            )
        return self._render_review()

    def _render_selection(self, title: str, subtitle: str, items: list[WizardItem]) -> str:
        step = int(self.current_view) + 1
        total = self.wizard_service.total_steps()
        lines = [
            f"Etapa {step}/{total} ({self.progress()}%)",
            "",
            f"🔧 {title}",
            "",
            subtitle,
            "",
        ]
        for i, item in enumerate(items):
            cursor = "> " if i == self.cursor else "  "
            checkbox = "[✓]" if item.selected else "[ ]"
            line = f"{cursor}{checkbox} {item.name}"
            if item.description:
                line += f" - {item.description}"
            lines.append(line)
        lines += [
            "",
            "↑/↓: navegar • espaço: selecionar • a: marcar todos • n/→: próximo"
            " • esc: voltar • ctrl+c: sair",
        ]
        return "\n".join(lines)

    def _render_review(self) -> str:
        preview = self.wizard_service.generate_preview(self.state)
        return "\n".join([
            "✅ Revisão e Confirmação",
            "",
            _box(preview),
            "",
            "enter/n: confirmar e aplicar • esc: voltar • ctrl+c: cancelar",
        ])

    def progress(self) -> int:
        """Return the completion percentage reported by the service."""
        return self.wizard_service.progress(self.state)

    def selections(self) -> Any:
        """Return the selections collected so far."""
        return self.state.selections