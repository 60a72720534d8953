from collections.abc import Callable, Iterable
from dataclasses import dataclass
from importlib import resources
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..models.connection import Connection, NetworkState


RenderFunc = Callable[[Connection, NetworkState], str]


@dataclass
class TemplateSet:
    name: str
    render: RenderFunc
    suffix: str
    """File name suffix of rendered profiles."""


_REGISTRY: dict[str, TemplateSet] = {}


def register_template_set(tpl_set: TemplateSet) -> None:
    _REGISTRY[tpl_set.name] = tpl_set


def get_template_set(name: str) -> TemplateSet:
    if name not in _REGISTRY:
        raise KeyError(f"Unknown template set: {name!r}")
    return _REGISTRY[name]


def templates_dir() -> Path:
    """Directory of the templates shipped with the package."""

    with resources.as_file(resources.files("nmigrate") / "templates") as templates_path:
        return templates_path


def make_env(searchpaths: Iterable[str | Path]) -> Environment:
    # profiles are INI files, not markup
    return Environment(
        loader=FileSystemLoader([Path(p) for p in searchpaths]),
        autoescape=False,  # noqa: S701
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
