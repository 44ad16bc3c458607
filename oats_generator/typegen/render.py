"""Template rendering for TypeScript declarations and the output document."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Final, Literal

from jinja2 import Environment, FileSystemLoader

TEMPLATES_DIR: Final[Path] = Path(__file__).parent / "templates"


@dataclass(frozen=True, slots=True)
class Declaration:
    """A named TypeScript declaration (`interface` or `type` alias)."""

    name: str
    type_expr: str
    kind: Literal["interface", "alias"] = "alias"
    doc: str = ""
    lint_disable: bool = False

    @property
    def statement(self) -> str:
        if self.kind == "interface":
            return f"export interface {self.name} {self.type_expr}"
        return f"export type {self.name} = {self.type_expr};"


@dataclass
class GeneratorContext:
    """Context for code generation with cached resources."""
    template_env: Environment = field(init=False)
    _declarations_template: Any = field(init=False)
    _document_template: Any = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATES_DIR),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            auto_reload=False,
        )
        # Pre-compile templates
        self._declarations_template = self.template_env.get_template("declarations.ts.jinja")
        self._document_template = self.template_env.get_template("document.ts.jinja")

    @property
    def declarations_template(self):
        return self._declarations_template

    @property
    def document_template(self):
        return self._document_template

    def render_declarations(self, declarations: list[Declaration]) -> str:
        """Render declarations, each followed by a blank line."""
        if not declarations:
            return ""
        return self.declarations_template.render(declarations=declarations)

    def render_document(self, body: str, custom_import: str | None = None) -> str:
        """Render the full output document: banner, custom import and body."""
        return self.document_template.render(
            body=body,
            custom_import=custom_import.strip() if custom_import else "",
        )


@lru_cache(maxsize=1)
def get_context() -> GeneratorContext:
    """Get the shared generator context."""
    return GeneratorContext()
