from .resolve import VersionResolver, build_context, default_sources, resolve_version
from .template_engine import TemplateEngine, render_version_file, version_context

__all__ = [
    "TemplateEngine",
    "VersionResolver",
    "build_context",
    "default_sources",
    "render_version_file",
    "resolve_version",
    "version_context",
]
