"""
Shared fixtures for add-context tests.

Sessions are driven by a scripted input function: each prompt consumes
the next answer, and running out of answers behaves like a closed stdin.
"""

import io
from datetime import date

import pytest

from add_context.audit import AuditLogger
from add_context.config import DocumentSettings, PathSettings, resolve_context_paths
from add_context.document import DocumentRenderer
from add_context.models.intelligence import (
    NamingConventions,
    ProjectIntelligence,
    TechStack,
)
from add_context.orchestrator import ContextSessionFlow
from add_context.validation import DocumentValidator
from add_context.wizard import END_SENTINEL, ConsolePrompter


class ScriptedInput:
    """Stand-in for input(): replays answers, then raises EOFError."""

    def __init__(self, answers):
        self._answers = list(answers)
        self.prompts = []

    def __call__(self, prompt=""):
        self.prompts.append(prompt)
        if not self._answers:
            raise EOFError
        return self._answers.pop(0)

    @property
    def remaining(self):
        return len(self._answers)


API_PATTERN_LINES = [
    "export async function POST(request: Request) {",
    "  const body = await request.json()",
    "  return Response.json({ success: true })",
    "}",
]

# Answers for a full run of the six-question wizard
WIZARD_ANSWERS = [
    # Q1 tech stack
    "Next.js", "TypeScript", "PostgreSQL", "Tailwind",
    # Q2 API pattern
    *API_PATTERN_LINES, END_SENTINEL,
    # Q3 component pattern
    "skip", END_SENTINEL,
    # Q4 naming
    "kebab-case", "PascalCase", "camelCase", "snake_case",
    # Q5 standards
    "TypeScript strict mode", "Validate w/ Zod", "",
    # Q6 security
    "Validate all user input", "",
]


@pytest.fixture
def project_root(tmp_path):
    root = tmp_path / "project"
    (root / ".git").mkdir(parents=True)
    return root


@pytest.fixture
def paths(project_root):
    return resolve_context_paths(
        cwd=project_root,
        settings=PathSettings(project_root=str(project_root)),
    )


@pytest.fixture
def doc_settings():
    return DocumentSettings()


@pytest.fixture
def renderer(doc_settings):
    return DocumentRenderer(settings=doc_settings)


@pytest.fixture
def existing_record():
    return ProjectIntelligence(
        version="1.3",
        updated=date(2024, 1, 15),
        tech_stack=TechStack(
            framework="Django",
            language="Python",
            database="PostgreSQL",
            styling="Bootstrap",
        ),
        api_pattern="def list_items(request):\n    return JsonResponse({})",
        component_pattern="<div class=\"card\">{{ item }}</div>",
        naming=NamingConventions(
            files="snake_case",
            components="PascalCase",
            functions="snake_case",
            database="snake_case",
        ),
        standards=["Type hints everywhere", "Black formatting"],
        security=["CSRF protection on"],
    )


@pytest.fixture
def existing_document(paths, renderer, existing_record):
    """Write a rendered version 1.3 document into the context directory."""
    paths.context_dir.mkdir(parents=True)
    content = renderer.render(existing_record)
    paths.document_path.write_text(content, encoding="utf-8")
    paths.navigation_path.write_text(renderer.render_navigation(), encoding="utf-8")
    return content


@pytest.fixture
def make_flow(paths, doc_settings):
    """
    Build a session flow fed by scripted answers.

    Returns (flow, output) where output is the StringIO holding
    everything the session printed.
    """
    def _make(answers, validator_settings=None):
        output = io.StringIO()
        prompter = ConsolePrompter(input_func=ScriptedInput(answers), output=output)
        flow = ContextSessionFlow(
            paths=paths,
            prompter=prompter,
            renderer=DocumentRenderer(settings=doc_settings),
            validator=DocumentValidator(settings=validator_settings or doc_settings),
            audit_logger=AuditLogger(),
        )
        return flow, output

    return _make
