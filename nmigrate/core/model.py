"""BaseModel with rich display and serialization helpers."""

from typing import Any, Literal

import orjson
import yaml
from pydantic import BaseModel
from rich.console import Console
from rich.tree import Tree


OutputFormat = Literal["json", "pretty-json", "yaml", "text"]


class DisplayModel(BaseModel):
    def dump(self) -> dict[str, Any]:
        """Plain data as read, with legacy element names and without unset values."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def serialize(self, output_format: OutputFormat) -> str:
        """Serialize the model in one of the machine-readable formats."""

        match output_format:
            case "json":
                return orjson.dumps(self.dump()).decode()
            case "pretty-json":
                return orjson.dumps(self.dump(), option=orjson.OPT_INDENT_2).decode()
            case "yaml":
                return yaml.safe_dump(self.dump(), sort_keys=False)
            case _:
                raise ValueError(f"Unsupported output format: {output_format!r}")

    def display_tree(self, console: Console | None = None, title: str | None = None) -> None:
        """Display the model as a tree structure."""

        if console is None:
            console = Console()

        tree = Tree(f"[bold]{title or self.__class__.__name__}[/bold]")
        self._build_tree(tree, self.dump())
        console.print(tree)

    def _build_tree(self, parent: Tree, data: dict[str, Any]) -> None:
        """Build a tree from nested data."""

        for key, value in data.items():
            if isinstance(value, dict):
                if not value:
                    parent.add(f"[cyan]{key}[/cyan]: {{}}")
                else:
                    self._build_tree(parent.add(f"[cyan]{key}[/cyan]"), value)
            elif isinstance(value, list):
                if not value:
                    parent.add(f"[cyan]{key}[/cyan]: []")
                elif isinstance(value[0], dict):
                    branch = parent.add(f"[cyan]{key}[/cyan] [{len(value)} items]")
                    for i, item in enumerate(value):
                        self._build_tree(branch.add(f"[dim]{i}[/dim]"), item)
                else:
                    parent.add(f"[cyan]{key}[/cyan]: {', '.join(str(v) for v in value)}")
            else:
                parent.add(f"[cyan]{key}[/cyan]: [green]{value}[/green]")
