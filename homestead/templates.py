"""Loading, caching and rendering of configuration templates."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from homestead.gotemplate import Template, TemplateError, TemplateSyntaxError

TEMPLATE_SUFFIX = ".tmpl"


class TemplateNotFoundError(TemplateError):
    """Raised when a template exists neither in resources nor on disk."""


class TemplateLoader:
    """Loads templates from a resource tree first, then from a directory."""

    def __init__(
        self,
        template_dir: str | os.PathLike[str] | None = None,
        resources: Any = None,
        prefix: str = "",
    ):
        self.template_dir = Path(template_dir) if template_dir else None
        self.resources = resources
        self.prefix = prefix
        self._cache: dict[str, Template] = {}

    @classmethod
    def from_resources(cls, resources: Any, prefix: str = "") -> "TemplateLoader":
        """Create a loader backed by a traversable resource tree."""
        return cls(resources=resources, prefix=prefix)

    def _resource(self, name: str) -> Any:
        path = f"{self.prefix}/{name}" if self.prefix else name
        node = self.resources
        for part in path.split("/"):
            if part:
                node = node.joinpath(part)
        return node

    def _read_resource(self, name: str) -> str | None:
        if self.resources is None:
            return None
        try:
            return self._resource(name).read_text(encoding="utf-8")
        except (OSError, AttributeError):
            return None

    def load_template(self, name: str) -> Template:
        """Return the parsed template ``name``, using the cache when possible."""
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        content = self._read_resource(name)
        if content is None and self.template_dir is not None:
            try:
                content = (self.template_dir / name).read_text(encoding="utf-8")
            except FileNotFoundError:
                raise TemplateNotFoundError(f"template '{name}' not found") from None
            except OSError as exc:
                raise TemplateError(f"failed to read template '{name}': {exc}") from exc
        if content is None:
            raise TemplateNotFoundError(f"template '{name}' not found")

        try:
            template = Template(name, content)
        except TemplateSyntaxError as exc:
            raise TemplateSyntaxError(f"failed to parse template '{name}': {exc}") from exc
        self._cache[name] = template
        return template

    def render_template(self, name: str, data: Any) -> str:
        """Load ``name`` and render it with ``data``."""
        template = self.load_template(name)
        try:
            return template.render(data)
        except TemplateError as exc:
            raise TemplateError(f"failed to execute template '{name}': {exc}") from exc

    def list_templates(self) -> list[str]:
        """Return the names of the template files in the template directory."""
        if self.template_dir is None:
            return []
        try:
            entries = sorted(self.template_dir.iterdir())
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise TemplateError(f"failed to read template directory: {exc}") from exc
        return [
            entry.name
            for entry in entries
            if not entry.is_dir() and entry.name.endswith(TEMPLATE_SUFFIX)
        ]

    def clear_cache(self) -> None:
        """Forget every parsed template."""
        self._cache.clear()

    def has_template(self, name: str) -> bool:
        """Tell whether ``name`` exists in resources or on disk."""
        if self.resources is not None:
            try:
                if self._resource(name).is_file():
                    return True
            except (OSError, AttributeError):
                pass
        if self.template_dir is not None:
            return (self.template_dir / name).exists()
        return False