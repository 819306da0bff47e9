"""Tests for template rendering of resolved versions."""

from pathlib import Path

import pytest

from vercompute_core.models import ResolvedVersion
from vercompute_ops.template_engine import TemplateEngine, render_version_file, version_context


@pytest.fixture
def release() -> ResolvedVersion:
    return ResolvedVersion(raw="1.2.3", stable=True, major="1", minor="2", patch="3", source="static-file")


@pytest.fixture
def snapshot() -> ResolvedVersion:
    return ResolvedVersion(
        raw="0.5-2-034f-dirty", stable=False, major="0", minor="5", patch="2", dirty=True, source="vcs"
    )


def test_template_engine_basic_vars():
    engine = TemplateEngine()
    assert engine.render("Hello {{ name }}!", {"name": "World"}) == "Hello World!"


def test_template_engine_missing_and_none_render_empty():
    engine = TemplateEngine()
    assert engine.render("[{{ patch }}][{{ nope }}]", {"patch": None}) == "[][]"


def test_template_engine_bools_are_lower_case():
    assert TemplateEngine().render("{{ stable }}", {"stable": True}) == "true"


def test_template_engine_if_blocks(release, snapshot):
    engine = TemplateEngine()
    tpl = "{{#if stable}}RELEASE {{ version }}{{/if}}{{#if dirty}}DIRTY{{/if}}"
    assert engine.render(tpl, version_context(release)) == "RELEASE 1.2.3"
    assert engine.render(tpl, version_context(snapshot)) == "DIRTY"


def test_template_engine_if_eq_helper(snapshot):
    tpl = '{{#if (eq source "vcs")}}from git{{/if}}{{#if (eq source "manifest")}}from xml{{/if}}'
    assert TemplateEngine().render(tpl, version_context(snapshot)) == "from git"


def test_render_version_header(tmp_path: Path, release):
    template = tmp_path / "version.h.in"
    template.write_text(
        "#define PROJECT_VERSION \"{{ version }}\"\n"
        "#define PROJECT_VERSION_MAJOR {{ major }}\n"
        "#define PROJECT_VERSION_MINOR {{ minor }}\n"
        "#define PROJECT_VERSION_PATCH {{ patch }}\n",
        encoding="utf-8",
    )
    out = tmp_path / "build" / "version.h"

    assert render_version_file(template, out, release) is True
    assert out.read_text(encoding="utf-8") == (
        "#define PROJECT_VERSION \"1.2.3\"\n"
        "#define PROJECT_VERSION_MAJOR 1\n"
        "#define PROJECT_VERSION_MINOR 2\n"
        "#define PROJECT_VERSION_PATCH 3\n"
    )
    # unchanged content is not rewritten
    assert render_version_file(template, out, release) is False
