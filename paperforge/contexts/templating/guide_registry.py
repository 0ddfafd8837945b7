from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound

GUIDES_PATH = Path(__file__).parent / "guides"


class GuideRegistry:
    """
    Loads and caches the Jinja2 templates used for project guide documents.

    Guides live in paperforge/contexts/templating/guides/{name}.jinja and use
    the same delimiters as the LaTeX-facing templates:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    """

    def __init__(self, guides_path: Optional[Path] = None):
        self.guides_path = Path(guides_path) if guides_path is not None else GUIDES_PATH
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.guides_path)),
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            trim_blocks=False,
            lstrip_blocks=False,
            keep_trailing_newline=True,
        )

    def get_template(self, name: str) -> Template:
        """
        Get a guide template by file name (e.g. 'README.md'), loading it on first use.

        Raises:
            TemplateNotFound: If the guide file doesn't exist
        """
        if name in self._cache:
            return self._cache[name]

        try:
            template = self.env.get_template(f"{name}.jinja")
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Guide not found: '{name}' at {self.guides_path / (name + '.jinja')}"
            ) from e

        self._cache[name] = template
        return template

    def render(self, guide_name: str, /, **context: Any) -> str:
        """Render a guide by file name, passing context as template variables."""
        return self.get_template(guide_name).render(**context)
