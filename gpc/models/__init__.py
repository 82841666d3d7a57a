"""Data models for gpc."""
from gpc.models.source import (
    GitReference,
    ProjectOptions,
    ProjectResult,
    SourceKind,
    TemplateSource,
)
from gpc.models.template import TemplateConfig, Variable

__all__ = [
    'GitReference',
    'ProjectOptions',
    'ProjectResult',
    'SourceKind',
    'TemplateSource',
    'TemplateConfig',
    'Variable',
]
