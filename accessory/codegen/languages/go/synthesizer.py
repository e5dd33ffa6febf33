"""
Getter and setter synthesis.

Renders one accessor method from a fixed Go template. Rendering only looks at
its parameters, so every field/tag combination can be exercised in isolation.
"""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ...core.model import LockDescriptor
from ...core.templates import TemplateEngine, create_template_engine

TEMPLATE_DIR = Path(__file__).parent / "templates"

GETTER_TEMPLATE = "getter.go.j2"
GETTER_NO_DEFAULT_TEMPLATE = "getter_nodefault.go.j2"
SETTER_TEMPLATE = "setter.go.j2"


@dataclass(frozen=True)
class AccessorParams:
    """Everything needed to render the accessors of one field."""

    receiver: str
    struct: str
    field: str
    getter_method: str
    setter_method: str
    type: str
    zero_value: str  # used only by the nil-safe getter
    no_default: bool = False
    lock: Optional[LockDescriptor] = None

    def as_context(self) -> Dict[str, Any]:
        context = asdict(self)
        # asdict would turn the descriptor into a plain dict and lose its properties
        context["lock"] = self.lock
        return context


class AccessorSynthesizer:
    """Renders accessor source fragments."""

    def __init__(self, template_engine: Optional[TemplateEngine] = None):
        self.template_engine = template_engine or create_template_engine(TEMPLATE_DIR)

    def getter(self, params: AccessorParams) -> str:
        """
        Render a getter.

        The default getter has a pointer receiver and returns the zero value
        when called on nil; with no_default it takes a value receiver instead.
        """
        template = GETTER_NO_DEFAULT_TEMPLATE if params.no_default else GETTER_TEMPLATE
        return self._render(template, params)

    def setter(self, params: AccessorParams) -> str:
        """Render a setter; it is a no-op when called on a nil receiver."""
        return self._render(SETTER_TEMPLATE, params)

    def _render(self, template_name: str, params: AccessorParams) -> str:
        return self.template_engine.render_template(template_name, params.as_context()).strip("\n")
