# homestead

Building blocks for a terminal assistant that keeps a Linux workstation in
shape:

- `homestead.scripts` – a fixed catalogue of cleanup and monitoring shell
  scripts, filtered by category and run through bash (with `sudo -E` for the
  ones that need it).
- `homestead.gotemplate` – a text template engine using Go's template syntax.
- `homestead.templates` – a loader that finds, caches and renders those
  templates from a directory or from packaged resources.
- `homestead.events` – the messages and commands that screens exchange.
- `homestead.wizard` – a step-by-step selection of Oh My Zsh plugins and
  developer tools.
- `homestead.menu` – main menu entries, installer categories, list items, UI
  messages and a small selectable list.

The package has no dependencies beyond the standard library. Install the
`test` extra to run the tests with pytest.

## Maintenance scripts

```python
from homestead.scripts import ScriptCategory, get_all_scripts, get_scripts_by_category

for script in get_all_scripts():
    print(script.id, script.name, script.requires_sudo)

monitoring = get_scripts_by_category(ScriptCategory.MONITORING)
monitoring[0].execute(root_dir="/path/to/project")
```

There are five scripts: three in `cleanup` and two in `monitoring`; the
`install` category is empty. `get_scripts_by_category` accepts a
`ScriptCategory` or its string value.

`Script.execute` resolves `script.path` against `root_dir` (the working
directory when omitted) and raises `ScriptNotFoundError` if the file is
missing. It runs the script with the terminal attached, adds `REAL_USER` and
`REAL_HOME` to the environment so the caller's identity survives `sudo`, and
raises `subprocess.CalledProcessError` on a non-zero exit.
`Script.command` returns the command line that would be used.

## Templates

```python
from homestead.templates import TemplateLoader

loader = TemplateLoader(template_dir="templates")
text = loader.render_template(
    "zshrc.tmpl",
    {"Theme": "powerlevel10k/powerlevel10k", "Plugins": ["git", "docker"]},
)
```

With a template such as

```
ZSH_THEME="{{.Theme}}"
plugins=({{range $i, $p := .Plugins}}{{if $i}} {{end}}{{$p}}{{end}})
```

this yields `plugins=(git docker)`.

`TemplateLoader.from_resources(resources, prefix)` takes any traversable
resource tree (for example `importlib.resources.files(...)`) and reads
`prefix/name` from it; when a `template_dir` is also given, the directory is
the fallback. Parsed templates are cached until `clear_cache()` is called.

- `load_template(name)` returns a `homestead.gotemplate.Template`.
- `render_template(name, data)` renders it; `data` may be a mapping or any
  object, whose attributes are looked up by name or by their snake_case form
  (`.CoreComponents` finds `core_components`).
- `list_templates()` returns the `.tmpl` files in the template directory, or an
  empty list when there is no directory.
- `has_template(name)` checks resources, then the directory.

A missing template raises `TemplateNotFoundError`, malformed text raises
`TemplateSyntaxError`, and a failure while rendering raises `TemplateError`.

The engine in `homestead.gotemplate` (`Template(name, text)` or
`parse_template(name, text)`, then `.render(data)`) supports fields and
variables, pipelines, parentheses, `if` / `else if` / `with` / `range` with
`else`, `:=` and `=`, `{{-` / `-}}` trimming, comments, and the builtins
`and`, `or`, `not`, `len`, `index`, `eq`, `ne`, `lt`, `le`, `gt`, `ge`,
`print`, `printf` and `println`. Maps are ranged over in key order, and a
missing map key renders as `<no value>`. `define`, `template`, `block`,
`break` and `continue` are rejected.

## Events

Screens take messages through `update` and may return a command:
`WindowSize(width, height)` and `KeyPress(key)` are messages; `Quit()`,
`Tick(delay, produce)`, `Batch` and `Sequence` are commands. `batch(...)` and
`sequence(...)` combine commands, dropping `None` and unwrapping a single
command; `is_quit(command)` tells whether a command (or anything inside it)
asks to stop.

## Zsh wizard

```python
from homestead.events import KeyPress
from homestead.wizard import ZshWizard

wizard = ZshWizard(wizard_service)
wizard.handle_key("a")            # select every plugin
wizard.update(KeyPress("n"))      # next step: tools
print(wizard.view())
choices = wizard.selections()
```

The steps are `ZshWizardView.PLUGINS`, `TOOLS` and `REVIEW`. Keys: `up`/`k`
and `down`/`j` move, space or `enter` toggles, `a` selects all, `n`/`tab`/
`right` goes forward (and confirms on review), `enter` confirms on review,
`esc` goes back (or cancels on the first step), and `ctrl+c` cancels and
returns `Quit()`. Afterwards `done` and `cancelled` say how it ended. The
core components `zsh`, `oh-my-zsh` and `powerlevel10k` are pre-filled into the
selections.

`wizard_service` is supplied by the caller. It must provide
`create_new_wizard()` (returning a state whose `selections` has
`core_components`), `next_step`, `previous_step`, `add_plugin`,
`remove_plugin`, `add_tool`, `remove_tool`, `total_steps`, `progress` and
`generate_preview`.

## Menu pieces

`main_menu_items(zsh_core_installed)` returns the main menu as `MenuItem`s,
including "Plugins e temas Zsh" only when Oh My Zsh is installed.
`installer_categories()` returns the installer groups, and
`package_category_title` / `script_category_title` map categories to their
titles. `ViewState` and `MenuAction` name the screens and actions;
`ScriptItem`, `PackageItem` and `InstallerCategoryItem` wrap list entries;
`InstallProgress`, `InstallComplete`, `ZshCoreInstalled`, `ZshApplyResult` and
`ZshApplyReturnToMenu` are the UI's messages. `SelectList` is a titled list
with a cursor (`handle_key`, `selected`, `set_items`, `set_size`, `view`).

## What the package does not do

- There is no command and no complete terminal application: nothing here
  draws to a terminal, reads the keyboard or runs commands such as `Tick`.
  The screens only return text and commands for a front end to handle.
- It does not install packages, check whether Oh My Zsh is installed, or write
  a `.zshrc`; the wizard only collects selections through the service you
  pass in, and no such service is included.
- It does not back up or restore dotfiles through a Git repository.