"""
Field Collection Wizard

Asks the six questions behind a project intelligence record:

    Q1 tech stack          4 short answers
    Q2 API pattern         blob, or "skip"
    Q3 component pattern   blob, or "skip"
    Q4 naming conventions  4 short answers
    Q5 code standards      list
    Q6 security            list

The wizard enforces what the parser does not: tech stack and naming
are always fully answered.
"""

from typing import Optional

from add_context.models.intelligence import (
    NamingConventions,
    ProjectIntelligence,
    TechStack,
)
from add_context.wizard.console import ConsolePrompter


SKIP_SENTINEL = "skip"


class FieldCollector:
    """Collects record fields through a prompter."""

    def __init__(self, prompter: ConsolePrompter):
        self._prompter = prompter

    def ask_tech_stack(self) -> TechStack:
        ask = self._prompter.ask_required
        return TechStack(
            framework=ask("Framework: "),
            language=ask("Language: "),
            database=ask("Database: "),
            styling=ask("Styling: "),
        )

    def ask_naming(self) -> NamingConventions:
        ask = self._prompter.ask_required
        return NamingConventions(
            files=ask("Files: "),
            components=ask("Components: "),
            functions=ask("Functions: "),
            database=ask("Database: "),
        )

    def ask_pattern(self, prompt: str) -> Optional[str]:
        """
        Read a pattern blob.

        Returns None when the user typed "skip"; an empty string means
        the user entered nothing.
        """
        self._prompter.echo(prompt)
        blob = self._prompter.read_blob()
        if blob.strip().lower() == SKIP_SENTINEL:
            return None
        return blob

    def ask_list(self, prompt: str) -> list[str]:
        self._prompter.echo(prompt)
        return self._prompter.read_list()

    def run_wizard(
        self,
        seed: Optional[ProjectIntelligence] = None,
    ) -> ProjectIntelligence:
        """
        Ask all six questions.

        With a seed, each answer replaces only the field just asked;
        skipped patterns keep the seed's value.
        """
        data = seed.model_copy(deep=True) if seed else ProjectIntelligence()
        p = self._prompter

        p.header("Q 1/6: What's your tech stack?")
        p.echo("Examples:")
        p.echo("  1. Next.js + TypeScript + PostgreSQL + Tailwind")
        p.echo("  2. React + Python + MongoDB + Material-UI")
        p.echo("  3. Vue + Go + MySQL + Bootstrap")
        p.echo()
        data.tech_stack = self.ask_tech_stack()
        p.echo()

        p.header("Q 2/6: API endpoint example?")
        p.echo("Paste API endpoint from YOUR project (matches your API style).")
        p.echo()
        p.echo("Example (Next.js):")
        p.echo("```typescript")
        p.echo("export async function POST(request: Request) {")
        p.echo("  const body = await request.json()")
        p.echo("  const validated = schema.parse(body)")
        p.echo("  return Response.json({ success: true })")
        p.echo("}")
        p.echo("```")
        p.echo()
        api_pattern = self.ask_pattern('Your API pattern (paste or "skip"):')
        if api_pattern is not None:
            data.api_pattern = api_pattern
        p.echo()

        p.header("Q 3/6: Component example?")
        p.echo("Paste component from YOUR project.")
        p.echo()
        p.echo("Example (React):")
        p.echo("```typescript")
        p.echo("interface UserCardProps { name: string; email: string }")
        p.echo("export function UserCard({ name, email }: UserCardProps) {")
        p.echo('  return <div className="rounded-lg border p-4">')
        p.echo("    <h3>{name}</h3><p>{email}</p>")
        p.echo("  </div>")
        p.echo("}")
        p.echo("```")
        p.echo()
        component_pattern = self.ask_pattern('Your component (paste or "skip"):')
        if component_pattern is not None:
            data.component_pattern = component_pattern
        p.echo()

        p.header("Q 4/6: Naming conventions?")
        p.echo("Examples:")
        p.echo("  Files: kebab-case (user-profile.tsx)")
        p.echo("  Components: PascalCase (UserProfile)")
        p.echo("  Functions: camelCase (getUserProfile)")
        p.echo("  Database: snake_case (user_profiles)")
        p.echo()
        data.naming = self.ask_naming()
        p.echo()

        p.header("Q 5/6: Code standards?")
        p.echo("Examples:")
        p.echo("  - TypeScript strict mode")
        p.echo("  - Validate w/ Zod")
        p.echo("  - Use Drizzle for DB queries")
        p.echo("  - Prefer server components")
        p.echo()
        standards = self.ask_list("Your standards (one per line):")
        data.standards = standards
        p.echo()

        p.header("Q 6/6: Security requirements?")
        p.echo("Examples:")
        p.echo("  - Validate all user input")
        p.echo("  - Use parameterized queries")
        p.echo("  - Sanitize before rendering")
        p.echo("  - HTTPS only")
        p.echo()
        security = self.ask_list("Your requirements (one per line):")
        data.security = security
        p.echo()

        return data
