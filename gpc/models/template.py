"""Template configuration models (.gpc.yml)."""
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Variable(BaseModel):
    """A variable a template expects, with the value used when none is given."""

    model_config = ConfigDict(frozen=True, extra='ignore')

    name: str = Field(..., description="Name used inside the templates")
    description: str = Field("", description="Text shown when prompting")
    default: Any = Field(None, description="Value used when nothing else is supplied")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Variable names must not be blank."""
        if not v or not v.strip():
            raise ValueError("Variable name must not be empty")
        return v

    @field_validator('description', mode='before')
    @classmethod
    def coerce_description(cls, v):
        if v is None:
            return ""
        return str(v)


class TemplateConfig(BaseModel):
    """Which files of a template are rendered and which variables they need.

    Example:
        templates:
          - "*.md"
          - "go.mod"
        variables:
          - name: Name
            description: Project name
            default: my-project
    """

    model_config = ConfigDict(frozen=True, extra='ignore')

    templates: List[str] = Field(default_factory=list, description="Glob patterns matched against file names")
    variables: List[Variable] = Field(default_factory=list, description="Declared template variables")

    @field_validator('templates', 'variables', mode='before')
    @classmethod
    def none_as_empty(cls, v):
        """An empty YAML key (``templates:``) means an empty list."""
        return [] if v is None else v

    @field_validator('templates')
    @classmethod
    def validate_templates(cls, v):
        for pattern in v:
            if not pattern:
                raise ValueError("Template patterns must not be empty")
        return v

    @field_validator('variables')
    @classmethod
    def validate_unique_names(cls, v):
        """Each variable may only be declared once."""
        seen = set()
        for variable in v:
            if variable.name in seen:
                raise ValueError(f"Variable '{variable.name}' is declared more than once")
            seen.add(variable.name)
        return v

    @property
    def is_empty(self) -> bool:
        return not self.templates and not self.variables
