"""Profile renderers.

Importing this package registers every template set.
"""

from . import keyfile
from .engine import TemplateSet, get_template_set, make_env, register_template_set, templates_dir


__all__ = [
    "TemplateSet",
    "get_template_set",
    "keyfile",
    "make_env",
    "register_template_set",
    "templates_dir",
]
