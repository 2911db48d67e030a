from dataclasses import dataclass, field

from homestead.events import KeyPress, WindowSize, is_quit
from homestead.wizard import (
    KEY_SELECT_ALL,
    WizardItem,
    ZshWizard,
    ZshWizardView,
)


@dataclass
class FakeSelections:
    core_components: list = field(default_factory=list)
    plugins: list = field(default_factory=list)
    tools: list = field(default_factory=list)


@dataclass
class FakeState:
    selections: FakeSelections = field(default_factory=FakeSelections)
    step: int = 0


class FakeWizardService:
    def create_new_wizard(self):
        return FakeState()

    def next_step(self, state):
        state.step += 1

    def previous_step(self, state):
        state.step = max(0, state.step - 1)

    @staticmethod
    def _add(values, value):
        if value not in values:
            values.append(value)

    def add_core_component(self, state, component):
        self._add(state.selections.core_components, component)

    def add_plugin(self, state, plugin_id):
        self._add(state.selections.plugins, plugin_id)

    def remove_plugin(self, state, plugin_id):
        if plugin_id in state.selections.plugins:
            state.selections.plugins.remove(plugin_id)

    def add_tool(self, state, tool_id):
        self._add(state.selections.tools, tool_id)

    def remove_tool(self, state, tool_id):
        if tool_id in state.selections.tools:
            state.selections.tools.remove(tool_id)

    def total_steps(self):
        return 3

    def progress(self, state):
        return state.step * 50

    def generate_preview(self, state):
        return "Plugins: " + ", ".join(state.selections.plugins)


def new_wizard():
    wizard = ZshWizard(FakeWizardService())
    wizard.width, wizard.height = 80, 24
    return wizard


def press(wizard, key):
    return wizard.update(KeyPress(key))


def test_new_wizard():
    wizard = new_wizard()
    assert wizard.current_view == ZshWizardView.PLUGINS
    assert wizard.state.selections.core_components == ["zsh", "oh-my-zsh", "powerlevel10k"]
    assert wizard.done is False and wizard.cancelled is False


def test_view_initial_shows_plugins():
    view = new_wizard().view()
    assert "Plugins" in view
    assert "Etapa 1/3" in view


def test_navigation_next():
    wizard = new_wizard()
    press(wizard, "n")
    assert wizard.current_view == ZshWizardView.TOOLS
    assert wizard.state.step == 1


def test_navigation_previous():
    wizard = new_wizard()
    press(wizard, "n")
    press(wizard, "esc")
    assert wizard.current_view == ZshWizardView.PLUGINS
    assert wizard.state.step == 0
    assert wizard.done is False


def test_select_plugin_with_space():
    wizard = new_wizard()
    press(wizard, " ")
    assert wizard.plugin_items[0].selected is True
    assert wizard.selections().plugins == ["git"]


def test_select_all():
    wizard = new_wizard()
    press(wizard, KEY_SELECT_ALL)
    assert all(item.selected for item in wizard.plugin_items)
    assert len(wizard.selections().plugins) == len(wizard.plugin_items)


def test_select_all_in_tools():
    wizard = new_wizard()
    press(wizard, "tab")
    press(wizard, "a")
    assert wizard.selections().tools == [item.id for item in wizard.tool_items]
    assert wizard.selections().plugins == []


def test_view_transitions_render():
    wizard = new_wizard()
    for view in ZshWizardView:
        wizard.current_view = view
        assert wizard.view() != ""
        assert len(wizard.view()) > 10


def test_view_tools():
    wizard = new_wizard()
    wizard.current_view = ZshWizardView.TOOLS
    view = wizard.view()
    assert "Ferramentas de Desenvolvimento" in view
    assert "NVM" in view


def test_view_review_contains_preview():
    wizard = new_wizard()
    wizard.wizard_service.add_plugin(wizard.state, "git")
    wizard.current_view = ZshWizardView.REVIEW
    view = wizard.view()
    assert "Revisão e Confirmação" in view
    assert "Plugins: git" in view


def test_item_toggle_twice_restores():
    wizard = new_wizard()
    press(wizard, " ")
    press(wizard, " ")
    assert wizard.plugin_items[0].selected is False
    assert wizard.selections().plugins == []


def test_enter_toggles_in_list():
    wizard = new_wizard()
    press(wizard, "down")
    press(wizard, "enter")
    assert wizard.plugin_items[1].selected is True
    assert wizard.selections().plugins == ["docker"]


def test_cursor_bounds():
    wizard = new_wizard()
    press(wizard, "up")
    assert wizard.cursor == 0
    for _ in range(len(wizard.plugin_items) + 5):
        press(wizard, "j")
    assert wizard.cursor == len(wizard.plugin_items) - 1
    press(wizard, "k")
    assert wizard.cursor == len(wizard.plugin_items) - 2


def test_window_resize():
    wizard = ZshWizard(FakeWizardService())
    command = wizard.update(WindowSize(120, 40))
    assert (wizard.width, wizard.height) == (120, 40)
    assert command is None


def test_esc_on_first_view_cancels():
    wizard = new_wizard()
    command = press(wizard, "esc")
    assert command is None
    assert wizard.cancelled is True and wizard.done is True


def test_ctrl_c_quits():
    wizard = new_wizard()
    command = press(wizard, "ctrl+c")
    assert is_quit(command)
    assert wizard.cancelled is True


def test_review_next_marks_done():
    wizard = new_wizard()
    for _ in range(3):
        press(wizard, "n")
    assert wizard.current_view == ZshWizardView.REVIEW
    assert wizard.done is True
    assert wizard.cancelled is False


def test_review_enter_marks_done():
    wizard = new_wizard()
    press(wizard, "right")
    press(wizard, "right")
    press(wizard, "enter")
    assert wizard.done is True


def test_progress_in_range():
    wizard = new_wizard()
    assert 0 <= wizard.progress() <= 100
    press(wizard, "n")
    press(wizard, "n")
    assert 0 <= wizard.progress() <= 100


def test_get_selections():
    wizard = new_wizard()
    service = wizard.wizard_service
    service.add_core_component(wizard.state, "zsh")
    service.add_plugin(wizard.state, "git")
    service.add_tool(wizard.state, "nvm")
    selections = wizard.selections()
    assert "zsh" in selections.core_components
    assert "git" in selections.plugins
    assert "nvm" in selections.tools


def test_current_items_none_on_review():
    wizard = new_wizard()
    wizard.current_view = ZshWizardView.REVIEW
    assert wizard.current_items() is None
    wizard.toggle_item(0)
    assert wizard.selections().plugins == []


def test_toggle_out_of_range_ignored():
    wizard = new_wizard()
    wizard.toggle_item(len(wizard.plugin_items))
    wizard.toggle_item(-1)
    assert [item.selected for item in wizard.plugin_items] == [False] * len(
        wizard.plugin_items
    )
    assert wizard.selections().plugins == []


def test_selected_checkbox_rendered():
    wizard = new_wizard()
    press(wizard, " ")
    assert "> [✓] git" in wizard.view()


def test_wizard_item_defaults():
    item = WizardItem("x", "X")
    assert item.selected is False
    assert item.description == ""