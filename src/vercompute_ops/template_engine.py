"""
template_engine.py - Minimal zero-dependency template engine for version files.

Supports:
- {{ variable }} replacement
- {{#if variable}} ... {{/if}} (truthiness)
- {{#if (eq variable "value")}} ... {{/if}}

Used to generate headers and package metadata from a resolved version.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, Match

from vercompute_core.models import ResolvedVersion

logger = logging.getLogger(__name__)


class TemplateEngine:
    _IF_EQ = re.compile(r"\{\{#if\s+\(eq\s+(\w+)\s+\"([^\"]*)\"\)\}\}(.*?)\{\{/if\}\}", re.DOTALL)
    _IF = re.compile(r"\{\{#if\s+(\w+)\}\}(.*?)\{\{/if\}\}", re.DOTALL)
    _VAR = re.compile(r"\{\{\s*(\w+)\s*\}\}")

    def render(self, template: str, context: Dict[str, Any]) -> str:
        """Render template with context."""

        def replace_if_eq(match: Match) -> str:
            key, target_val, content = match.group(1), match.group(2), match.group(3)
            if self._format(context.get(key)) == target_val:
                return content
            return ""

        def replace_if(match: Match) -> str:
            key, content = match.group(1), match.group(2)
            return content if context.get(key) else ""

        processed = self._IF_EQ.sub(replace_if_eq, template)
        processed = self._IF.sub(replace_if, processed)
        return self._render_vars(processed, context)

    def _render_vars(self, text: str, context: Dict[str, Any]) -> str:
        """Replace {{ var }} placeholders; unknown names render empty."""

        def replace_var(match: Match) -> str:
            return self._format(context.get(match.group(1)))

        return self._VAR.sub(replace_var, text)

    @staticmethod
    def _format(value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            # Lower-case so the output can be pasted into CMake, TOML or C macros.
            return "true" if value else "false"
        return str(value)


def version_context(resolved: ResolvedVersion) -> Dict[str, Any]:
    """Template variables exposed for a resolved version."""
    return {
        "version": resolved.raw,
        "major": resolved.major,
        "minor": resolved.minor,
        "patch": resolved.patch,
        "stable": resolved.stable,
        "dirty": resolved.dirty,
        "source": resolved.source,
    }


def render_version_file(template_path: Path, out_path: Path, resolved: ResolvedVersion) -> bool:
    """Render ``template_path`` into ``out_path``.

    The output is only rewritten when its content changes, so build tools
    relying on timestamps do not rebuild needlessly. Returns True if written.
    """
    template = template_path.read_text(encoding="utf-8")
    rendered = TemplateEngine().render(template, version_context(resolved))

    if out_path.exists() and out_path.read_text(encoding="utf-8") == rendered:
        logger.debug(f"{out_path} is up to date")
        return False

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(rendered, encoding="utf-8")
    logger.info(f"Wrote {out_path} for version {resolved.raw}")
    return True
