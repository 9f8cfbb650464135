"""Hand the documentation model to Jinja2 templates supplied by the caller."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from protoc_doc.models import Template


def _get_template_env(template_dir: str) -> Environment:
    return Environment(
        loader=FileSystemLoader(template_dir),
        keep_trailing_newline=True,
    )


def _context(template: Template) -> dict:
    return {"files": template.files, "scalars": template.scalars}


def render_template(template: Template, template_path: str) -> str:
    """Render the template file at ``template_path`` against the model.

    Other templates in the same directory can be included or extended.
    """
    path = Path(template_path)
    env = _get_template_env(str(path.parent))
    return env.get_template(path.name).render(**_context(template))


def render_string(template: Template, source: str) -> str:
    env = Environment(keep_trailing_newline=True)
    return env.from_string(source).render(**_context(template))
